"""Tests for middleware components."""
import pytest
from httpx import AsyncClient, ASGITransport
from app.main import app
from app.config import get_settings

settings = get_settings()


@pytest.mark.asyncio
async def test_correlation_id_injection(api_services):
    """Test that correlation ID is auto-generated if not provided."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/v1/events")
        assert response.status_code == 200
        assert response.headers["x-correlation-id"]


@pytest.mark.asyncio
async def test_correlation_id_in_error_body(api_services):
    """Test that provided correlation ID is echoed in error responses."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        correlation_id = "test-correlation-123"
        response = await client.get("/v1/events/nope", headers={"X-Correlation-ID": correlation_id})
        assert response.status_code == 404
        assert response.headers["x-correlation-id"] == correlation_id
        assert response.json()["correlation_id"] == correlation_id


@pytest.mark.asyncio
async def test_payload_too_large_rejection(api_services):
    """Test that oversized payloads are rejected."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        data = "A" * (settings.MAX_REQUEST_SIZE + 1000)
        response = await client.post("/v1/images", json={"image": {"filename": "big.png", "data": data}})
        assert response.status_code == 413
        body = response.json()
        assert body["error"] == "PayloadTooLarge"
        assert body["max_size"] == settings.MAX_REQUEST_SIZE


@pytest.mark.asyncio
async def test_invalid_json_rejection(api_services):
    """Test that invalid JSON is rejected."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/v1/events",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidJSON"


@pytest.mark.asyncio
async def test_cors_preflight():
    """Test CORS preflight requests are answered."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.options(
            "/v1/events",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] in ("*", "http://localhost:5173")


@pytest.mark.asyncio
async def test_unexpected_error_keeps_correlation_and_cors_headers():
    """Test that unexpected 500s still pass through correlation and CORS middleware."""
    from app.api.deps import get_event_service

    def broken_service():
        raise RuntimeError("backend exploded")

    app.dependency_overrides[get_event_service] = broken_service
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get(
                "/v1/events",
                headers={"x-correlation-id": "cid-1", "Origin": "http://localhost:5173"},
            )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "InternalServerError"
    assert body["correlation_id"] == "cid-1"
    assert response.headers["x-correlation-id"] == "cid-1"
    assert response.headers["access-control-allow-origin"] in ("*", "http://localhost:5173")
