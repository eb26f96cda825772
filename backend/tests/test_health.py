"""Health endpoint smoke test."""

import pytest
from httpx import ASGITransport, AsyncClient

from rentdesk.main import app


@pytest.mark.asyncio
async def test_healthcheck_returns_ok() -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["service"] == "RentDesk API"
    assert "x-request-id" in response.headers


@pytest.mark.asyncio
async def test_database_healthcheck(api_client: AsyncClient) -> None:
    response = await api_client.get("/api/v1/health/db")
    assert response.status_code == 200
    assert response.json()["database"] == "reachable"
