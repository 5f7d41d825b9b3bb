"""API middleware components."""

from song_director.api.middleware.logging_middleware import LoggingMiddleware
from song_director.api.middleware.metrics_middleware import MetricsMiddleware

__all__: list[str] = [
    "LoggingMiddleware",
    "MetricsMiddleware",
]
