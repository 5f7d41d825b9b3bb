"""Unit tests for logging and metrics middleware."""

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from prometheus_client import generate_latest

from song_director.api.middleware import LoggingMiddleware, MetricsMiddleware
from song_director.api.middleware.logging_middleware import CORRELATION_HEADER
from song_director.api.middleware.metrics_middleware import _classify_error_type
from song_director.infrastructure.monitoring.metrics import get_metrics_collector
from song_director.infrastructure.observability.correlation import get_correlation_id


@pytest.fixture
def instrumented_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(LoggingMiddleware)

    @app.get("/ok")
    async def ok_endpoint() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/whoami")
    async def whoami_endpoint() -> dict[str, str]:
        return {"correlation_id": get_correlation_id()}

    @app.get("/bad")
    async def bad_endpoint() -> None:
        raise HTTPException(status_code=400, detail="Bad request")

    return app


def _metrics_output() -> str:
    return generate_latest(get_metrics_collector().get_registry()).decode("utf-8")


class TestLoggingMiddleware:
    """Tests for correlation ID propagation."""

    def test_generates_correlation_id(self, instrumented_app: FastAPI) -> None:
        client = TestClient(instrumented_app)

        response = client.get("/ok")

        assert response.status_code == 200
        assert len(response.headers[CORRELATION_HEADER]) == 36

    def test_echoes_incoming_correlation_id(self, instrumented_app: FastAPI) -> None:
        client = TestClient(instrumented_app)

        response = client.get("/ok", headers={CORRELATION_HEADER: "director-42"})

        assert response.headers[CORRELATION_HEADER] == "director-42"

    def test_replaces_malformed_correlation_id(self, instrumented_app: FastAPI) -> None:
        client = TestClient(instrumented_app)

        response = client.get("/ok", headers={CORRELATION_HEADER: "not an id"})

        assert response.headers[CORRELATION_HEADER] != "not an id"
        assert len(response.headers[CORRELATION_HEADER]) == 36

    def test_handler_sees_request_correlation_id(self, instrumented_app: FastAPI) -> None:
        client = TestClient(instrumented_app)

        response = client.get("/whoami", headers={CORRELATION_HEADER: "viewer-7"})

        assert response.json() == {"correlation_id": "viewer-7"}
        assert get_correlation_id() == ""


class TestMetricsMiddleware:
    """Tests for request metrics."""

    def test_counts_successful_requests(self, instrumented_app: FastAPI) -> None:
        client = TestClient(instrumented_app)

        client.get("/ok")

        output = _metrics_output()
        assert 'endpoint="/ok"' in output
        assert "http_request_duration_seconds_count{" in output

    def test_counts_failed_requests(self, instrumented_app: FastAPI) -> None:
        client = TestClient(instrumented_app)

        response = client.get("/bad")

        assert response.status_code == 400
        output = _metrics_output()
        assert "http_requests_failed_total{" in output
        assert 'error_type="bad_request"' in output


class TestClassifyErrorType:
    """Tests for status code classification."""

    @pytest.mark.parametrize(
        ("status_code", "expected"),
        [
            (400, "bad_request"),
            (404, "not_found"),
            (405, "method_not_allowed"),
            (422, "validation_error"),
            (418, "client_error"),
            (500, "internal_error"),
            (503, "service_unavailable"),
            (502, "server_error"),
            (304, "unknown"),
        ],
    )
    def test_classification(self, status_code: int, expected: str) -> None:
        assert _classify_error_type(status_code) == expected
