"""Metrics middleware for request instrumentation.

FastAPI middleware that records HTTP request metrics to Prometheus.
Only operational metrics are recorded (latency, totals, error rates).
"""

import time
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from song_director.infrastructure.monitoring.metrics import get_metrics_collector


def _classify_error_type(status_code: int) -> str:
    """Classify HTTP error status code into error type.

    Args:
        status_code: HTTP status code.

    Returns:
        Error type classification string.
    """
    if 400 <= status_code < 500:
        if status_code == 400:
            return "bad_request"
        elif status_code == 404:
            return "not_found"
        elif status_code == 405:
            return "method_not_allowed"
        elif status_code == 422:
            return "validation_error"
        else:
            return "client_error"
    elif status_code >= 500:
        if status_code == 500:
            return "internal_error"
        elif status_code == 503:
            return "service_unavailable"
        else:
            return "server_error"
    return "unknown"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to record HTTP request metrics.

    Records:
    - Request duration (histogram)
    - Total requests (counter)
    - Failed requests (counter for 4xx/5xx)

    A 304 from the JSON long-poll is a normal timeout, not a failure.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request and record metrics.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware or route handler.

        Returns:
            HTTP response from the route handler.
        """
        start_time = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - start_time

        method = request.method
        endpoint = request.url.path
        status = str(response.status_code)

        collector = get_metrics_collector()
        collector.observe_request_duration(
            method=method, endpoint=endpoint, duration=duration
        )
        collector.increment_requests(method=method, endpoint=endpoint, status=status)

        if response.status_code >= 400:
            error_type = _classify_error_type(response.status_code)
            collector.increment_failed_requests(
                method=method, endpoint=endpoint, status=status, error_type=error_type
            )

        return response
