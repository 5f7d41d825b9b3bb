"""Logging middleware for correlation ID propagation.

This middleware handles correlation ID management for HTTP requests:
- Accepts a well-formed X-Correlation-ID header or generates a new ID
- Scopes the ID to the request, including long-poll wait tasks
- Includes correlation ID in response headers
- Logs request start/end with timing

Long-poll requests are logged like any other request; their duration is
the time the request was held open.

Usage:
    from fastapi import FastAPI
    from song_director.api.middleware.logging_middleware import LoggingMiddleware

    app = FastAPI()
    app.add_middleware(LoggingMiddleware)
"""

import time
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from song_director.infrastructure.observability.correlation import (
    CORRELATION_HEADER,
    accept_correlation_id,
    correlation_scope,
)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for correlation ID propagation and request logging.

    This middleware:
    1. Accepts or generates the correlation ID
    2. Binds it in a correlation scope for the request
    3. Logs request start with method, path, correlation_id
    4. Logs request completion with status code and duration
    5. Adds correlation ID to response headers
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request with correlation ID and logging.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware or route handler.

        Returns:
            HTTP response with correlation ID header added.
        """
        correlation_id = accept_correlation_id(request.headers.get(CORRELATION_HEADER))
        with correlation_scope(correlation_id):
            response = await self._dispatch_logged(request, call_next, correlation_id)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response

    async def _dispatch_logged(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
        correlation_id: str,
    ) -> Response:
        log = structlog.get_logger().bind(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
        )
        log.debug("request_started")

        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            log.exception(
                "request_failed",
                duration_ms=round(duration_ms, 2),
                error_type=type(exc).__name__,
            )
            # Re-raise to let error handlers deal with it
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        log.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        return response
