"""
Unit tests for the admin back-office endpoints.
"""

import json

import pytest
from httpx import AsyncClient

from studentos.core.models.domain import UserRole, VerificationStatus

pytestmark = pytest.mark.asyncio


class TestAccess:
    @pytest.mark.parametrize("path", ["/api/admin/stats", "/api/admin/users", "/api/admin/audit-logs"])
    async def test_student_forbidden(self, client: AsyncClient, student, path: str):
        response = await client.get(path, headers=student.headers)
        assert response.status_code == 403
        assert response.json()["error"] == "Insufficient permissions"

    async def test_anonymous_unauthorized(self, client: AsyncClient):
        response = await client.get("/api/admin/stats")
        assert response.status_code == 401


class TestStats:
    async def test_counts(self, client: AsyncClient, admin, student, employer):
        response = await client.get("/api/admin/stats", headers=admin.headers)
        assert response.status_code == 200
        data = response.json()
        assert data["totalUsers"] == 3
        assert data["newUsersThisWeek"] == 3
        assert data["activeUsers"] == 0
        assert data["totalJobs"] == 0
        assert data["totalApplications"] == 0
        assert data["recentTransactions"] == 0

    async def test_login_marks_user_active(self, client: AsyncClient, admin, student):
        await client.post("/api/auth/login", json={"email": student.user.email, "password": "Str0ng!Password"})
        response = await client.get("/api/admin/stats", headers=admin.headers)
        assert response.json()["activeUsers"] == 1


class TestUsers:
    async def test_list_with_filters(self, client: AsyncClient, admin, student, employer):
        response = await client.get("/api/admin/users", headers=admin.headers)
        assert response.json()["pagination"]["total"] == 3

        by_role = await client.get("/api/admin/users", params={"role": "EMPLOYER"}, headers=admin.headers)
        users = by_role.json()["users"]
        assert [u["id"] for u in users] == [employer.id]
        assert users[0]["companyName"] == "Acme Corp"

        by_name = await client.get("/api/admin/users", params={"search": "Stu Dent"}, headers=admin.headers)
        assert [u["fullName"] for u in by_name.json()["users"]] == ["Stu Dent"]

    async def test_create_user(self, client: AsyncClient, admin):
        payload = {"email": "new@studentos.com", "password": "password1", "role": "EMPLOYER", "fullName": "New Co"}
        response = await client.post("/api/admin/users", json=payload, headers=admin.headers)
        assert response.status_code == 201
        assert response.json()["role"] == "EMPLOYER"

        duplicate = await client.post("/api/admin/users", json=payload, headers=admin.headers)
        assert duplicate.status_code == 409

        logs = await client.get("/api/admin/audit-logs", headers=admin.headers)
        entry = logs.json()["logs"][0]
        assert entry["action"] == "CREATE_USER"
        assert entry["targetType"] == "USER"
        assert entry["adminEmail"] == admin.user.email
        assert json.loads(entry["details"]) == {"role": "EMPLOYER"}

    async def test_update_user(self, client: AsyncClient, admin, student):
        response = await client.patch(
            f"/api/admin/users/{student.id}", json={"isActive": False, "role": "EMPLOYER"}, headers=admin.headers
        )
        assert response.status_code == 200
        assert response.json()["isActive"] is False
        assert response.json()["role"] == "EMPLOYER"

        me = await client.get("/api/auth/me", headers=student.headers)
        assert me.status_code == 401

    async def test_cannot_deactivate_self(self, client: AsyncClient, admin):
        response = await client.patch(f"/api/admin/users/{admin.id}", json={"isActive": False}, headers=admin.headers)
        assert response.status_code == 400

    async def test_update_missing_user(self, client: AsyncClient, admin):
        response = await client.patch("/api/admin/users/missing", json={"isActive": True}, headers=admin.headers)
        assert response.status_code == 404
        assert response.json()["error"] == "User not found"

    async def test_delete_user(self, client: AsyncClient, admin, student):
        response = await client.delete(f"/api/admin/users/{student.id}", headers=admin.headers)
        assert response.status_code == 204
        listing = await client.get("/api/admin/users", headers=admin.headers)
        assert student.id not in [u["id"] for u in listing.json()["users"]]

    async def test_cannot_delete_self(self, client: AsyncClient, admin):
        response = await client.delete(f"/api/admin/users/{admin.id}", headers=admin.headers)
        assert response.status_code == 400


class TestEmployers:
    async def test_list_and_verify(self, client: AsyncClient, admin, make_account):
        pending = await make_account(UserRole.EMPLOYER, full_name="Pending Ltd")
        listing = await client.get("/api/admin/employers", params={"status": "PENDING"}, headers=admin.headers)
        assert listing.status_code == 200
        rows = listing.json()
        assert [r["companyName"] for r in rows] == ["Pending Ltd"]
        assert rows[0]["user"]["email"] == pending.user.email
        assert rows[0]["jobCount"] == 0

        employer_id = rows[0]["id"]
        verified = await client.patch(
            f"/api/admin/employers/{employer_id}/verify", json={"status": "VERIFIED"}, headers=admin.headers
        )
        assert verified.status_code == 200
        assert verified.json()["verificationStatus"] == VerificationStatus.VERIFIED.value
        assert verified.json()["verifiedAt"] is not None

        rejected = await client.patch(
            f"/api/admin/employers/{employer_id}/verify",
            json={"status": "REJECTED", "note": "Unverifiable"},
            headers=admin.headers,
        )
        assert rejected.json()["verifiedAt"] is None
        assert rejected.json()["verificationNote"] == "Unverifiable"

    async def test_verify_missing(self, client: AsyncClient, admin):
        response = await client.patch(
            "/api/admin/employers/missing/verify", json={"status": "VERIFIED"}, headers=admin.headers
        )
        assert response.status_code == 404


class TestPricing:
    async def test_plan_lifecycle(self, client: AsyncClient, admin):
        created = await client.post(
            "/api/admin/pricing",
            json={"name": "Pro", "price": 9.99, "features": ["AI tools"], "isPopular": True},
            headers=admin.headers,
        )
        assert created.status_code == 201
        plan = created.json()
        assert plan["interval"] == "MONTHLY"

        updated = await client.patch(f"/api/admin/pricing/{plan['id']}", json={"price": 12}, headers=admin.headers)
        assert updated.json()["price"] == 12

        listing = await client.get("/api/admin/pricing", headers=admin.headers)
        assert [(p["name"], p["subscriptionCount"]) for p in listing.json()] == [("Pro", 0)]

        removed = await client.delete(f"/api/admin/pricing/{plan['id']}", headers=admin.headers)
        assert removed.status_code == 204
        assert (await client.get("/api/admin/pricing", headers=admin.headers)).json() == []

    async def test_negative_price_rejected(self, client: AsyncClient, admin):
        response = await client.post("/api/admin/pricing", json={"name": "Bad", "price": -1}, headers=admin.headers)
        assert response.status_code == 400

    async def test_missing_plan(self, client: AsyncClient, admin):
        response = await client.delete("/api/admin/pricing/missing", headers=admin.headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Pricing plan not found"


class TestInboxAndAudit:
    async def test_mark_message_read(self, client: AsyncClient, admin):
        await client.post("/api/contact", json={"name": "Jo", "email": "jo@studentos.com", "message": "Hello"})
        messages = (await client.get("/api/admin/messages", headers=admin.headers)).json()
        assert len(messages) == 1
        response = await client.patch(f"/api/admin/messages/{messages[0]['id']}", headers=admin.headers)
        assert response.json()["isRead"] is True

    async def test_mark_missing_message(self, client: AsyncClient, admin):
        response = await client.patch("/api/admin/messages/missing", headers=admin.headers)
        assert response.status_code == 404

    async def test_audit_log_filters(self, client: AsyncClient, admin, student):
        await client.patch(f"/api/admin/users/{student.id}", json={"isActive": True}, headers=admin.headers)
        await client.post("/api/admin/pricing", json={"name": "Free", "price": 0}, headers=admin.headers)

        everything = await client.get("/api/admin/audit-logs", headers=admin.headers)
        assert everything.json()["pagination"]["total"] == 2

        filtered = await client.get(
            "/api/admin/audit-logs", params={"action": "UPDATE_USER"}, headers=admin.headers
        )
        logs = filtered.json()["logs"]
        assert [entry["targetId"] for entry in logs] == [student.id]

        other_admin = await client.get("/api/admin/audit-logs", params={"adminId": student.id}, headers=admin.headers)
        assert other_admin.json()["logs"] == []


class TestNotifications:
    async def test_send_to_one_account(self, client: AsyncClient, admin, student):
        payload = {"title": "Welcome", "message": "Hi there", "type": "SUCCESS", "email": student.user.email}
        response = await client.post("/api/admin/notifications", json=payload, headers=admin.headers)
        assert response.status_code == 201
        assert response.json() == {"message": "Notification sent to 1 user(s)", "recipients": 1}

        inbox = (await client.get("/api/notifications", headers=student.headers)).json()
        assert [n["title"] for n in inbox["notifications"]] == ["Welcome"]
        assert inbox["notifications"][0]["type"] == "SUCCESS"

        logs = await client.get("/api/admin/audit-logs", params={"action": "SEND_NOTIFICATION"}, headers=admin.headers)
        details = json.loads(logs.json()["logs"][0]["details"])
        assert details == {"title": "Welcome", "recipients": 1, "broadcast": False}

    async def test_broadcast_skips_inactive_accounts(self, client: AsyncClient, admin, student, make_account):
        inactive = await make_account(is_active=False)
        response = await client.post(
            "/api/admin/notifications", json={"title": "Maintenance", "broadcast": True}, headers=admin.headers
        )
        assert response.json()["recipients"] == 2

        history = (await client.get("/api/admin/notifications", headers=admin.headers)).json()
        assert history["pagination"]["total"] == 2
        recipients = {n["user"]["email"] for n in history["notifications"]}
        assert recipients == {admin.user.email, student.user.email}
        assert inactive.user.email not in recipients

    async def test_history_includes_recipient_name(self, client: AsyncClient, admin, student):
        await client.post(
            "/api/admin/notifications", json={"title": "Hello", "email": student.user.email}, headers=admin.headers
        )
        history = (await client.get("/api/admin/notifications", headers=admin.headers)).json()
        assert history["notifications"][0]["user"] == {
            "id": student.id,
            "email": student.user.email,
            "fullName": "Stu Dent",
        }

    async def test_unknown_email(self, client: AsyncClient, admin):
        response = await client.post(
            "/api/admin/notifications", json={"title": "Hi", "email": "nobody@studentos.com"}, headers=admin.headers
        )
        assert response.status_code == 404
        assert response.json()["error"] == "User not found"

    @pytest.mark.parametrize(
        "target",
        [{}, {"email": "someone@studentos.com", "broadcast": True}],
        ids=["no-target", "both-targets"],
    )
    async def test_needs_exactly_one_target(self, client: AsyncClient, admin, target):
        response = await client.post("/api/admin/notifications", json={"title": "Hi", **target}, headers=admin.headers)
        assert response.status_code == 400
        assert response.json()["details"][0]["message"] == "Provide either an email or broadcast, not both"

    async def test_employer_verification_notifies_employer(self, client: AsyncClient, admin, make_account):
        pending = await make_account(UserRole.EMPLOYER, full_name="Pending Ltd")
        rows = (await client.get("/api/admin/employers", params={"status": "PENDING"}, headers=admin.headers)).json()
        await client.patch(
            f"/api/admin/employers/{rows[0]['id']}/verify", json={"status": "VERIFIED"}, headers=admin.headers
        )

        inbox = (await client.get("/api/notifications", headers=pending.headers)).json()
        assert inbox["unreadCount"] == 1
        assert inbox["notifications"][0]["title"] == "Employer verification: verified"
        assert inbox["notifications"][0]["type"] == "SUCCESS"
