"""Prometheus metrics infrastructure.

Operational metrics for the song director server: uptime, HTTP traffic,
section mutations and long-poll behavior.

Requirements:
- Prometheus exposition format
- Labels: service, environment
- Latency histograms with standard buckets
"""

import os
import threading
import time
from collections.abc import Callable

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

from song_director.application.ports.section_metrics import SectionMetricsProtocol

# Content type for Prometheus metrics endpoint
METRICS_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

# Thread lock for singleton initialization
_collector_lock = threading.Lock()

# Histogram buckets for request duration (10ms to 10s)
DEFAULT_HISTOGRAM_BUCKETS = (0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)

# Long-polls are held up to the configured window (tens of seconds)
LONGPOLL_HISTOGRAM_BUCKETS = (0.01, 0.1, 0.5, 1.0, 5.0, 10.0, 20.0, 30.0, 60.0, 120.0)


class MetricsCollector(SectionMetricsProtocol):
    """Collects and manages operational Prometheus metrics.

    Attributes:
        uptime_seconds: Gauge tracking seconds since service start.
        service_starts_total: Counter tracking service restarts.
        http_request_duration_seconds: Histogram for request latency.
        http_requests_total: Counter for all HTTP requests.
        http_requests_failed_total: Counter for failed requests (4xx, 5xx).
        section_mutations_total: Counter for section mutation attempts.
        longpoll_requests_total: Counter for finished long-polls by outcome.
        longpoll_wait_seconds: Histogram for how long long-polls were held.
        longpoll_waiters: Gauge of suspended long-poll waiters.
        startup_times: Dict mapping service name to startup timestamp.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics collector with operational metrics.

        Args:
            registry: Optional custom registry for testing isolation.
        """
        self._registry = registry or CollectorRegistry()
        self.histogram_buckets = DEFAULT_HISTOGRAM_BUCKETS
        self.startup_times: dict[str, float] = {}

        self._environment = os.environ.get("ENVIRONMENT", "development")
        self._service_name = os.environ.get("SERVICE_NAME", "song-director")

        self.uptime_seconds = Gauge(
            name="uptime_seconds",
            documentation="Seconds since service start",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

        self.service_starts_total = Counter(
            name="service_starts_total",
            documentation="Total number of service starts/restarts",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

        self.http_request_duration_seconds = Histogram(
            name="http_request_duration_seconds",
            documentation="HTTP request duration in seconds",
            labelnames=["service", "environment", "method", "endpoint"],
            buckets=self.histogram_buckets,
            registry=self._registry,
        )

        self.http_requests_total = Counter(
            name="http_requests_total",
            documentation="Total HTTP requests",
            labelnames=["service", "environment", "method", "endpoint", "status"],
            registry=self._registry,
        )

        self.http_requests_failed_total = Counter(
            name="http_requests_failed_total",
            documentation="Total failed HTTP requests (4xx, 5xx)",
            labelnames=[
                "service",
                "environment",
                "method",
                "endpoint",
                "status",
                "error_type",
            ],
            registry=self._registry,
        )

        # Section metrics

        # result: applied, ignored (no-op), rejected (invalid input)
        self.section_mutations_total = Counter(
            name="section_mutations_total",
            documentation="Section mutation attempts by operation and result",
            labelnames=["service", "environment", "operation", "result"],
            registry=self._registry,
        )

        # outcome: immediate, changed, timeout, disconnected
        self.longpoll_requests_total = Counter(
            name="longpoll_requests_total",
            documentation="Finished long-poll requests by outcome",
            labelnames=["service", "environment", "outcome"],
            registry=self._registry,
        )

        self.longpoll_wait_seconds = Histogram(
            name="longpoll_wait_seconds",
            documentation="Time a long-poll request was held open",
            labelnames=["service", "environment", "outcome"],
            buckets=LONGPOLL_HISTOGRAM_BUCKETS,
            registry=self._registry,
        )

        self.longpoll_waiters = Gauge(
            name="longpoll_waiters",
            documentation="Long-poll requests currently waiting for a change",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

    def set_uptime(self, service: str, seconds: float) -> None:
        """Set uptime gauge for a service.

        Args:
            service: Service name.
            seconds: Uptime in seconds.
        """
        self.uptime_seconds.labels(service=service, environment=self._environment).set(
            seconds
        )

    def increment_service_starts(self, service: str) -> None:
        """Increment service starts counter.

        Args:
            service: Service name.
        """
        self.service_starts_total.labels(
            service=service, environment=self._environment
        ).inc()

    def observe_request_duration(
        self, method: str, endpoint: str, duration: float
    ) -> None:
        """Record a request duration observation.

        Args:
            method: HTTP method (GET, PUT, etc.).
            endpoint: Request endpoint path.
            duration: Request duration in seconds.
        """
        self.http_request_duration_seconds.labels(
            service=self._service_name,
            environment=self._environment,
            method=method,
            endpoint=endpoint,
        ).observe(duration)

    def increment_requests(self, method: str, endpoint: str, status: str) -> None:
        """Increment total requests counter.

        Args:
            method: HTTP method.
            endpoint: Request endpoint.
            status: HTTP status code as string.
        """
        self.http_requests_total.labels(
            service=self._service_name,
            environment=self._environment,
            method=method,
            endpoint=endpoint,
            status=status,
        ).inc()

    def increment_failed_requests(
        self, method: str, endpoint: str, status: str, error_type: str = "http_error"
    ) -> None:
        """Increment failed requests counter.

        Args:
            method: HTTP method.
            endpoint: Request endpoint.
            status: HTTP status code as string (4xx or 5xx).
            error_type: Type of error (bad_request, server_error, etc.).
        """
        self.http_requests_failed_total.labels(
            service=self._service_name,
            environment=self._environment,
            method=method,
            endpoint=endpoint,
            status=status,
            error_type=error_type,
        ).inc()

    def increment_section_mutations(self, operation: str, result: str) -> None:
        """Count a section mutation attempt.

        Args:
            operation: select_letter, append_digit or clear.
            result: applied, ignored or rejected.
        """
        self.section_mutations_total.labels(
            service=self._service_name,
            environment=self._environment,
            operation=operation,
            result=result,
        ).inc()

    def increment_longpoll_requests(self, outcome: str) -> None:
        """Count a finished long-poll.

        Args:
            outcome: immediate, changed, timeout or disconnected.
        """
        self.longpoll_requests_total.labels(
            service=self._service_name,
            environment=self._environment,
            outcome=outcome,
        ).inc()

    def observe_longpoll_wait(self, duration: float, outcome: str) -> None:
        """Record how long a long-poll was held open.

        Args:
            duration: Seconds between request start and response.
            outcome: immediate, changed, timeout or disconnected.
        """
        self.longpoll_wait_seconds.labels(
            service=self._service_name,
            environment=self._environment,
            outcome=outcome,
        ).observe(duration)

    def track_longpoll_waiters(self, source: Callable[[], int]) -> None:
        """Read the waiter gauge from a live source at scrape time.

        Args:
            source: Callable returning the current number of waiters.
        """
        self.longpoll_waiters.labels(
            service=self._service_name,
            environment=self._environment,
        ).set_function(source)

    def record_startup(self, service: str) -> None:
        """Record service startup time.

        Args:
            service: Service name.
        """
        self.startup_times[service] = time.time()
        self.increment_service_starts(service)

    def get_uptime_seconds(self, service: str) -> float:
        """Get uptime in seconds for a service.

        Args:
            service: Service name.

        Returns:
            Uptime in seconds, or 0.0 if service not registered.
        """
        if service not in self.startup_times:
            return 0.0
        return time.time() - self.startup_times[service]

    def update_uptime_gauges(self) -> None:
        """Update uptime gauges for all registered services."""
        for service in self.startup_times:
            self.set_uptime(service, self.get_uptime_seconds(service))

    def get_registry(self) -> CollectorRegistry:
        """Get the collector registry.

        Returns:
            The Prometheus collector registry.
        """
        return self._registry


# Singleton instance
_metrics_collector: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Get the singleton MetricsCollector instance (thread-safe).

    Uses double-checked locking pattern for thread-safe lazy initialization.

    Returns:
        The global MetricsCollector instance.
    """
    global _metrics_collector
    if _metrics_collector is None:
        with _collector_lock:
            if _metrics_collector is None:
                _metrics_collector = MetricsCollector()
    return _metrics_collector


def generate_metrics() -> bytes:
    """Generate Prometheus metrics in exposition format.

    Returns:
        Metrics in Prometheus text format as bytes.
    """
    collector = get_metrics_collector()
    collector.update_uptime_gauges()
    return generate_latest(collector.get_registry())


def reset_metrics_collector() -> None:
    """Reset the singleton collector (for testing only)."""
    global _metrics_collector
    with _collector_lock:
        _metrics_collector = None
