"""API route handlers."""

from song_director.api.routes.health import router as health_router
from song_director.api.routes.metrics import router as metrics_router
from song_director.api.routes.pages import router as pages_router
from song_director.api.routes.section import router as section_router

__all__: list[str] = [
    "health_router",
    "metrics_router",
    "pages_router",
    "section_router",
]
