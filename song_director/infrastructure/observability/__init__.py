"""Observability infrastructure for structured logging and correlation.

This module provides cross-cutting observability concerns:
- Structured JSON logging with structlog
- Correlation IDs scoped to one request, long-polls included
- Log processors for consistent output format

Usage:
    from song_director.infrastructure.observability import (
        accept_correlation_id,
        configure_structlog,
        correlation_scope,
    )

    # At startup
    configure_structlog(environment="production")

    # In request handling
    with correlation_scope(accept_correlation_id(header_value)):
        ...
"""

from song_director.infrastructure.observability.correlation import (
    CORRELATION_HEADER,
    accept_correlation_id,
    correlation_id_processor,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from song_director.infrastructure.observability.logging import (
    configure_structlog,
    get_logger_for_service,
)

__all__: list[str] = [
    "CORRELATION_HEADER",
    "accept_correlation_id",
    "configure_structlog",
    "correlation_id_processor",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "get_logger_for_service",
    "set_correlation_id",
]
