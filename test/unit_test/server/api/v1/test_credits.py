"""
Unit tests for the credit endpoints.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient

from studentos.core.database.entities import Tool
from studentos.core.database.entities.users import SIGNUP_CREDITS
from studentos.core.database.repositories import ToolRepository

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def make_tool(session):
    async def _make(slug: str = "cv-analyzer", credit_cost: int = 10, is_active: bool = True) -> Tool:
        tool = Tool(
            name=slug.replace("-", " ").title(),
            slug=slug,
            category="career",
            credit_cost=credit_cost,
            is_active=is_active,
        )
        return await ToolRepository(session).create(tool)

    return _make


async def _use(client: AsyncClient, account, slug: str):
    return await client.post("/api/credits/use", json={"toolSlug": slug}, headers=account.headers)


class TestBalance:
    async def test_new_account_starts_with_signup_credits(self, client: AsyncClient, student):
        response = await client.get("/api/credits/balance", headers=student.headers)
        assert response.status_code == 200
        data = response.json()
        assert data["balance"] == SIGNUP_CREDITS
        assert len(data["referralCode"]) == 8

    async def test_requires_auth(self, client: AsyncClient):
        response = await client.get("/api/credits/balance")
        assert response.status_code == 401


class TestUse:
    async def test_charges_cost(self, client: AsyncClient, student, make_tool):
        await make_tool(credit_cost=30)
        response = await _use(client, student, "cv-analyzer")
        assert response.status_code == 200
        data = response.json()
        assert data["creditCost"] == 30
        assert data["remainingBalance"] == SIGNUP_CREDITS - 30
        assert data["usageId"]
        assert data["message"] == "Successfully used 30 credits for Cv Analyzer"

        balance = await client.get("/api/credits/balance", headers=student.headers)
        assert balance.json()["balance"] == SIGNUP_CREDITS - 30

    async def test_free_tool_is_not_charged(self, client: AsyncClient, student, make_tool):
        await make_tool("habit-tracker", credit_cost=0)
        response = await _use(client, student, "habit-tracker")
        assert response.status_code == 200
        data = response.json()
        assert data["creditCost"] == 0
        assert data["remainingBalance"] is None
        assert data["message"] == "Free tool - no credits required"

        history = await client.get("/api/credits/history", headers=student.headers)
        assert history.json()["history"] == []

    async def test_insufficient_credits(self, client: AsyncClient, student, make_tool):
        await make_tool("presentation", credit_cost=60)
        assert (await _use(client, student, "presentation")).status_code == 200

        response = await _use(client, student, "presentation")
        assert response.status_code == 402
        assert response.json() == {
            "error": "INSUFFICIENT_CREDITS",
            "data": {"required": 60, "available": 40, "shortfall": 20, "toolName": "Presentation"},
        }
        balance = await client.get("/api/credits/balance", headers=student.headers)
        assert balance.json()["balance"] == 40

    async def test_unknown_tool(self, client: AsyncClient, student):
        response = await _use(client, student, "missing")
        assert response.status_code == 404
        assert response.json()["error"] == "Tool not found"

    async def test_disabled_tool(self, client: AsyncClient, student, make_tool):
        await make_tool(is_active=False)
        response = await _use(client, student, "cv-analyzer")
        assert response.status_code == 400
        assert response.json()["error"] == "Tool is currently disabled"


class TestHistory:
    async def test_paginated_newest_first(self, client: AsyncClient, student, make_tool):
        await make_tool("cv-analyzer", credit_cost=10)
        await make_tool("cover-letter", credit_cost=5)
        for slug in ("cv-analyzer", "cover-letter", "cover-letter"):
            assert (await _use(client, student, slug)).status_code == 200

        response = await client.get("/api/credits/history", params={"limit": 2}, headers=student.headers)
        assert response.status_code == 200
        data = response.json()
        assert data["pagination"]["total"] == 3
        assert len(data["history"]) == 2
        assert data["history"][0]["tool"]["slug"] == "cover-letter"
        assert data["history"][0]["credits"] == 5

    async def test_only_own_usage(self, client: AsyncClient, student, make_account, make_tool):
        await make_tool()
        other = await make_account()
        await _use(client, other, "cv-analyzer")
        response = await client.get("/api/credits/history", headers=student.headers)
        assert response.json()["pagination"]["total"] == 0


class TestToolDetails:
    async def test_by_slug(self, client: AsyncClient, student, make_tool):
        await make_tool(credit_cost=15)
        response = await client.get("/api/credits/tool/cv-analyzer", headers=student.headers)
        assert response.status_code == 200
        assert response.json()["creditCost"] == 15

    async def test_unknown(self, client: AsyncClient, student):
        response = await client.get("/api/credits/tool/missing", headers=student.headers)
        assert response.status_code == 404
