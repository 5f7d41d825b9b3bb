"""FastAPI application entry point for the song director.

``create_app`` wires one section store, control service and renderer per
application instance and keeps them on ``app.state``. The module-level
``app`` uses configuration from the environment and is what uvicorn
serves.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from structlog import get_logger

from song_director import __version__
from song_director.api.middleware import LoggingMiddleware, MetricsMiddleware
from song_director.api.routes import (
    health_router,
    metrics_router,
    pages_router,
    section_router,
)
from song_director.api.startup import configure_logging, record_service_startup
from song_director.bootstrap.metrics import get_metrics_collector
from song_director.bootstrap.section import SectionComponents, build_section_components
from song_director.config import DirectorConfig
from song_director.domain.errors import TemplateRenderError

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

logger = get_logger()


async def template_render_error_handler(
    request: Request, exc: Exception
) -> PlainTextResponse:
    """Answer template failures with a plain-text 500."""
    logger.error(
        "template_render_failed",
        path=request.url.path,
        error=str(exc),
    )
    return PlainTextResponse(str(exc), status_code=500)


def create_app(
    config: DirectorConfig | None = None,
    components: SectionComponents | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Server configuration, read from the environment by default.
        components: Pre-wired section components (tests).

    Returns:
        Configured FastAPI application.
    """
    director_config = config or DirectorConfig.from_environment()
    collector = get_metrics_collector()
    section = components or build_section_components(
        director_config, metrics=collector
    )
    collector.track_longpoll_waiters(section.service.get_active_waiter_count)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(director_config.environment)
        record_service_startup()
        logger.info(
            "song_director_started",
            version=__version__,
            longpoll_timeout_seconds=director_config.longpoll_timeout_seconds,
        )
        yield
        logger.info("song_director_stopped")

    app = FastAPI(
        title="Song Director",
        description="Broadcasts the current song section to director and viewer screens",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.config = director_config
    app.state.section_store = section.store
    app.state.section_service = section.service
    app.state.section_renderer = section.renderer
    app.state.section_boot_id = section.boot_id

    app.add_middleware(MetricsMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(TemplateRenderError, template_render_error_handler)

    app.include_router(pages_router)
    app.include_router(section_router)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    return app


app = create_app()
