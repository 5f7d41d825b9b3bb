"""Startup hooks for the song director API.

This module provides startup hooks that:
1. Configure structured logging
2. Record service startup for metrics tracking

Usage in FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(config.environment)
        record_service_startup()
        yield
"""

from __future__ import annotations

from structlog import get_logger

from song_director.bootstrap.logging import configure_structlog
from song_director.infrastructure.monitoring.metrics import get_metrics_collector

DEFAULT_SERVICE_NAME = "song-director"

logger = get_logger()


def configure_logging(environment: str) -> None:
    """Configure structured logging for the application.

    Should be called first in the startup sequence, before any logging occurs.

    Args:
        environment: 'production' for JSON output, anything else for console.
    """
    configure_structlog(environment=environment)

    log = get_logger().bind(component="startup_logging")
    log.info("structured_logging_configured", environment=environment)


def record_service_startup(service_name: str = DEFAULT_SERVICE_NAME) -> None:
    """Record service startup for metrics tracking.

    Records the startup time for uptime calculation and increments
    the service starts counter.

    Args:
        service_name: Name of the service.
    """
    log = logger.bind(component="startup_metrics", service=service_name)

    collector = get_metrics_collector()
    collector.record_startup(service_name)

    log.info("service_startup_recorded")
