"""Tests for health endpoints."""

from httpx import AsyncClient

from src.infrastructure.storage.sqlite import close_pool


async def test_root_health_check(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_api_health_check(client: AsyncClient):
    response = await client.get("/api/health")

    data = response.json()
    assert data["status"] == "healthy"
    assert "uptime_seconds" in data


async def test_full_health_reports_stopped_scheduler(client: AsyncClient, db_path):
    try:
        response = await client.get("/api/health/full")
    finally:
        await close_pool()

    data = response.json()
    assert data["database"]["available"] is True
    assert data["scheduler"]["available"] is False
    assert data["status"] == "degraded"
    assert data["background_task"] == "idle"


async def test_responses_carry_request_headers(client: AsyncClient):
    response = await client.get("/api/health")

    assert "X-Request-ID" in response.headers
    assert "X-Response-Time" in response.headers
