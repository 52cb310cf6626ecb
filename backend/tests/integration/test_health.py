"""Tests for the health check and banner endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app, create_app


@pytest.mark.asyncio
async def test_health_check_returns_200():
    """Health endpoint should return 200 with status, version, and environment."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["status"] == "OK"
    assert "version" in data
    assert "environment" in data
    assert data["uptime"] >= 0
    assert set(data["records"]) == {"contacts", "posts", "comments", "users"}


@pytest.mark.asyncio
async def test_health_counts_records():
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await client.post(
            "/api/users",
            json={"name": "Ann", "email": "ann@example.com", "age": 30, "password": "Secret123"},
        )
        response = await client.get("/health")

    data = response.json()["data"]
    assert data["records"]["users"] == 1
    assert data["totalRecords"] == 1


@pytest.mark.asyncio
async def test_banner_lists_resource_endpoints():
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/")

    assert response.status_code == 200
    endpoints = response.json()["data"]["endpoints"]
    assert endpoints["health"] == "GET /health"
    assert endpoints["contacts"]["create"] == "POST /api/contacts"
