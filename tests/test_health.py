"""
Tests for health check endpoints.
"""
from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)


def test_health_liveness():
    """Test liveness health check."""
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["service"] == "apidemo"
    assert data["version"] == "0.1.0"
    assert data["timestamp"].endswith("Z")


def test_health_readiness():
    """Test readiness health check."""
    r = client.get("/health/ready")
    # Should be 200 (ready) or 503 (not ready)
    assert r.status_code in [200, 503]
    data = r.json()
    assert data["service"] == "apidemo"
    assert data["version"] == "0.1.0"
    assert "timestamp" in data
    assert data["checks"]["stores"]["status"] == "ok"
    assert set(data["checks"]["stores"]["collections"]) == {"events", "images"}
    assert "disk_space" in data["checks"]
    assert "memory" in data["checks"]


def test_metrics_endpoint():
    """Test Prometheus metrics endpoint."""
    client.get("/health")
    r = client.get("/metrics")
    assert r.status_code == 200
    content = r.text
    assert "http_requests_total" in content
    assert "http_request_duration_seconds" in content
    assert "app_up" in content
    assert "apidemo_resources_created_total" in content


def test_correlation_id_in_response():
    """Test that correlation ID is added to response headers."""
    r = client.get("/health")
    assert "x-correlation-id" in r.headers


def test_correlation_id_propagation():
    """Test that provided correlation ID is propagated."""
    correlation_id = "test-correlation-id-123"
    r = client.get("/health", headers={"x-correlation-id": correlation_id})
    assert r.headers["x-correlation-id"] == correlation_id


def test_memory_check_reports_stored_resources():
    """Test low memory is reported together with the number of stored resources."""
    from datetime import timedelta
    from unittest.mock import Mock, patch
    from app.health import HealthChecker
    from app.services import EventService

    events = EventService()
    for _ in range(3):
        events.create_event("users/a", "svc", "run", timedelta(seconds=1))
    checker = HealthChecker(stores={"events": events.store})

    low = Mock(available=30 * 1024**2, total=1024**3, percent=97.0)
    with patch("app.health.psutil.virtual_memory", return_value=low):
        check = checker.readiness()["checks"]["memory"]

    assert check["status"] == "error"
    assert check["stored_resources"] == 3
    assert "3 resources held in memory" in check["message"]
