"""Integration tests for health checks, error envelopes, and request IDs."""

import pytest


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client):
    response = await client.get("/api/v1/nowhere")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"]["statusCode"] == 404
    assert body["error"]["path"] == "/api/v1/nowhere"
    assert body["error"]["timestamp"]


@pytest.mark.asyncio
async def test_request_id_is_generated(client):
    response = await client.get("/health")

    assert response.headers["X-Request-ID"].startswith("cid_")


@pytest.mark.asyncio
async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
