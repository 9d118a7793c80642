"""
Unit tests for the finance tracker endpoints.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from studentos.core.database import utc_now

pytestmark = pytest.mark.asyncio


async def _category(client: AsyncClient, account, name: str = "Food", kind: str = "EXPENSE") -> dict:
    response = await client.post(
        "/api/finance/categories", json={"name": name, "type": kind, "color": "#f97316"}, headers=account.headers
    )
    assert response.status_code == 201
    return response.json()


async def _transaction(client: AsyncClient, account, amount: float, kind: str = "EXPENSE", **extra) -> dict:
    response = await client.post(
        "/api/finance/transactions", json={"amount": amount, "type": kind, **extra}, headers=account.headers
    )
    assert response.status_code == 201
    return response.json()


class TestTransactions:
    async def test_create_with_category(self, client: AsyncClient, student):
        category = await _category(client, student)
        transaction = await _transaction(client, student, 12.5, categoryId=category["id"], description="Lunch")
        assert transaction["amount"] == 12.5
        assert transaction["type"] == "EXPENSE"
        assert transaction["category"]["name"] == "Food"

    async def test_rejects_non_positive_amount(self, client: AsyncClient, student):
        response = await client.post(
            "/api/finance/transactions", json={"amount": 0, "type": "INCOME"}, headers=student.headers
        )
        assert response.status_code == 400

    async def test_rejects_unknown_type(self, client: AsyncClient, student):
        response = await client.post(
            "/api/finance/transactions", json={"amount": 5, "type": "TRANSFER"}, headers=student.headers
        )
        assert response.status_code == 400

    async def test_other_users_category_is_missing(self, client: AsyncClient, student, make_account):
        category = await _category(client, student)
        other = await make_account()
        response = await client.post(
            "/api/finance/transactions",
            json={"amount": 3, "type": "EXPENSE", "categoryId": category["id"]},
            headers=other.headers,
        )
        assert response.status_code == 404
        assert response.json()["error"] == "Category not found"

    async def test_list_newest_first_and_private(self, client: AsyncClient, student, make_account):
        now = utc_now()
        await _transaction(client, student, 1, date=(now - timedelta(days=2)).isoformat())
        await _transaction(client, student, 2, date=now.isoformat())
        other = await make_account()
        await _transaction(client, other, 99)

        response = await client.get("/api/finance/transactions", headers=student.headers)
        assert response.status_code == 200
        assert [t["amount"] for t in response.json()] == [2, 1]

    async def test_delete(self, client: AsyncClient, student, make_account):
        transaction = await _transaction(client, student, 4)
        other = await make_account()
        forbidden = await client.delete(f"/api/finance/transactions/{transaction['id']}", headers=other.headers)
        assert forbidden.status_code == 404
        assert forbidden.json()["error"] == "Transaction not found"

        response = await client.delete(f"/api/finance/transactions/{transaction['id']}", headers=student.headers)
        assert response.status_code == 204
        listing = await client.get("/api/finance/transactions", headers=student.headers)
        assert listing.json() == []

    async def test_requires_auth(self, client: AsyncClient):
        response = await client.get("/api/finance/transactions")
        assert response.status_code == 401


class TestSummary:
    async def test_totals_cover_current_month_only(self, client: AsyncClient, student):
        await _transaction(client, student, 1000, kind="INCOME")
        await _transaction(client, student, 250)
        await _transaction(client, student, 400, date=(utc_now() - timedelta(days=40)).isoformat())

        response = await client.get("/api/finance/summary", headers=student.headers)
        assert response.status_code == 200
        data = response.json()
        assert data["income"] == 1000
        assert data["expense"] == 250
        assert data["balance"] == 750
        assert len(data["recentTransactions"]) == 3

    async def test_recent_transactions_capped_at_five(self, client: AsyncClient, student):
        for amount in range(1, 8):
            await _transaction(client, student, amount)
        response = await client.get("/api/finance/summary", headers=student.headers)
        assert len(response.json()["recentTransactions"]) == 5

    async def test_empty(self, client: AsyncClient, student):
        response = await client.get("/api/finance/summary", headers=student.headers)
        assert response.json() == {"income": 0, "expense": 0, "balance": 0, "recentTransactions": []}


class TestCategories:
    async def test_listed_by_name(self, client: AsyncClient, student, make_account):
        await _category(client, student, "Rent")
        await _category(client, student, "Allowance", kind="INCOME")
        await _category(client, await make_account(), "Hidden")

        response = await client.get("/api/finance/categories", headers=student.headers)
        assert [c["name"] for c in response.json()] == ["Allowance", "Rent"]

    async def test_rejects_empty_name(self, client: AsyncClient, student):
        response = await client.post(
            "/api/finance/categories", json={"name": "", "type": "EXPENSE"}, headers=student.headers
        )
        assert response.status_code == 400


class TestBudgets:
    async def test_progress_counts_category_expenses(self, client: AsyncClient, student):
        food = await _category(client, student)
        travel = await _category(client, student, "Travel")
        await _transaction(client, student, 30, categoryId=food["id"])
        await _transaction(client, student, 45, categoryId=food["id"])
        await _transaction(client, student, 500, categoryId=travel["id"])
        await _transaction(client, student, 80, kind="INCOME", categoryId=food["id"])

        response = await client.post(
            "/api/finance/budgets", json={"categoryId": food["id"], "amount": 200}, headers=student.headers
        )
        assert response.status_code == 200
        assert response.json()["period"] == "monthly"

        budgets = (await client.get("/api/finance/budgets", headers=student.headers)).json()
        assert len(budgets) == 1
        assert budgets[0]["category"]["name"] == "Food"
        assert budgets[0]["spent"] == 75
        assert budgets[0]["remaining"] == 125

    async def test_upsert_changes_amount(self, client: AsyncClient, student):
        food = await _category(client, student)
        first = await client.post(
            "/api/finance/budgets", json={"categoryId": food["id"], "amount": 100}, headers=student.headers
        )
        second = await client.post(
            "/api/finance/budgets", json={"categoryId": food["id"], "amount": 150}, headers=student.headers
        )
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["amount"] == 150

        yearly = await client.post(
            "/api/finance/budgets",
            json={"categoryId": food["id"], "amount": 1200, "period": "yearly"},
            headers=student.headers,
        )
        assert yearly.json()["id"] != first.json()["id"]
        budgets = (await client.get("/api/finance/budgets", headers=student.headers)).json()
        assert sorted(b["period"] for b in budgets) == ["monthly", "yearly"]

    async def test_unknown_category(self, client: AsyncClient, student):
        response = await client.post(
            "/api/finance/budgets", json={"categoryId": "missing", "amount": 10}, headers=student.headers
        )
        assert response.status_code == 404
        assert response.json()["error"] == "Category not found"
