"""
Tests for health, readiness, and metrics endpoints.

These tests verify the observability endpoints work correctly:
- /health: Liveness probe
- /ready: Readiness probe with the record store check
- /metrics: Prometheus-format metrics
- /: Root endpoint with API info
"""
import json
import logging
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from core import dependencies as deps
from core.logging_config import JSONFormatter, clear_request_id, set_request_id
from core.middleware import LoggingMiddleware, MetricsCollector, RequestMetrics


# =============================================================================
# ROOT ENDPOINT TESTS
# =============================================================================

def test_root_endpoint(client):
    """Test the root endpoint returns API info."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "Student Health Portal API"
    assert data["version"] == "1.0.0"
    assert "health" in data
    assert "ready" in data
    assert "metrics" in data


# =============================================================================
# HEALTH ENDPOINT TESTS (LIVENESS)
# =============================================================================

def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data


# =============================================================================
# READINESS ENDPOINT TESTS
# =============================================================================

def test_ready_endpoint(client):
    response = client.get("/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["dependencies"][0]["name"] == "record_store"
    assert data["dependencies"][0]["status"] == "ok"


def test_ready_returns_503_when_store_is_down(client, test_app):
    broken = MagicMock()
    broken.ping.side_effect = RuntimeError("disk gone")
    test_app.dependency_overrides[deps.get_record_store] = lambda: broken

    response = client.get("/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
    assert response.json()["dependencies"][0]["message"] == "Connection failed: RuntimeError"


# =============================================================================
# METRICS ENDPOINT TESTS
# =============================================================================

def test_metrics_prometheus_format(client):
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]
    assert "portal_http_requests_total" in response.text
    assert "portal_events_total" in response.text


def test_metrics_json_counts_events(client):
    client.post("/api/v1/assessments", json={"answers": {}})
    response = client.get("/metrics/json")
    assert response.status_code == 200
    assert response.json()["events"]["assessment_scored"] >= 1


def test_collector_counts_by_status():
    collector = MetricsCollector()
    for code in (200, 201, 404, 500):
        collector.record_request(RequestMetrics("GET", "/x", code, 1.0))
    collector.record_event("user_signed_in")

    summary = collector.get_summary()
    assert summary["http_requests_total"] == 4
    assert summary["http_requests_2xx_total"] == 2
    assert summary["http_requests_4xx_total"] == 1
    assert summary["http_requests_5xx_total"] == 1
    assert summary["events"] == {"user_signed_in": 1}
    assert 'portal_events_total{event="user_signed_in"} 1' in collector.get_prometheus_format()


def test_logging_middleware_sets_request_id(test_app):
    test_app.add_middleware(LoggingMiddleware)
    client = TestClient(test_app)

    first = client.get("/api/v1/resources/emergency")
    second = client.get("/api/v1/resources/emergency")

    assert first.status_code == 200
    assert len(first.headers["X-Request-ID"]) == 8
    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]


def test_json_log_lines_carry_request_id_and_extra_fields():
    record = logging.LogRecord("services.assessment_service", logging.INFO, __file__, 1, "Assessment stored", None, None)
    record.score = 42
    set_request_id("abcd1234")
    try:
        entry = json.loads(JSONFormatter().format(record))
    finally:
        clear_request_id()

    assert entry["level"] == "INFO"
    assert entry["message"] == "Assessment stored"
    assert entry["request_id"] == "abcd1234"
    assert entry["extra"] == {"score": 42}
