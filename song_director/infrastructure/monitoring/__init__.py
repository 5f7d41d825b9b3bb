"""Operational monitoring (Prometheus metrics)."""

from song_director.infrastructure.monitoring.metrics import (
    METRICS_CONTENT_TYPE,
    MetricsCollector,
    generate_metrics,
    get_metrics_collector,
    reset_metrics_collector,
)

__all__: list[str] = [
    "METRICS_CONTENT_TYPE",
    "MetricsCollector",
    "generate_metrics",
    "get_metrics_collector",
    "reset_metrics_collector",
]
