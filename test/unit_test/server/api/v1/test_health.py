import pytest
from httpx import AsyncClient

from studentos.server.core import constant

# Mark all tests in this module as async
pytestmark = pytest.mark.asyncio


async def test_health_check(client: AsyncClient):
    response = await client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "timestamp" in data


async def test_version(client: AsyncClient):
    response = await client.get("/api/version")
    assert response.status_code == 200
    data = response.json()
    assert data["version"] == constant.API_VERSION
    assert data["schemaVersion"] == constant.SCHEMA_VERSION


async def test_unknown_route_returns_not_found(client: AsyncClient):
    response = await client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}
