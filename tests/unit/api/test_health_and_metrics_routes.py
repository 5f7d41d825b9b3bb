"""Unit tests for health and metrics endpoints."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from song_director.api.models.health import HealthResponse


class TestHealthEndpoint:
    """Tests for GET /v1/health."""

    def test_health_returns_healthy(self, app: FastAPI) -> None:
        with TestClient(app) as client:
            response = client.get("/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_health_response_model(self) -> None:
        assert HealthResponse(status="healthy").status == "healthy"


class TestMetricsEndpoint:
    """Tests for GET /v1/metrics."""

    def test_metrics_exposes_section_metrics(self, app: FastAPI) -> None:
        with TestClient(app) as client:
            client.put("/section/type", data={"section_type": "V"})
            response = client.get("/v1/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        body = response.text
        assert "uptime_seconds" in body
        assert "service_starts_total" in body
        assert 'operation="select_letter"' in body
        assert "longpoll_waiters" in body
