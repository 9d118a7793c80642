"""
Unit tests for admin roles, permissions and role assignment.
"""

from typing import Dict

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from studentos.core.database.entities import AdminRole, Permission
from studentos.core.database.repositories import AdminRoleRepository
from studentos.core.models.domain import UserRole

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def permissions(session: AsyncSession) -> Dict[str, Permission]:
    rows = [
        Permission(slug="system.roles", name="Manage Roles", category="System"),
        Permission(slug="users.view", name="View Users", category="Users"),
        Permission(slug="content.blog", name="Manage Blog", category="Content"),
    ]
    session.add_all(rows)
    await session.commit()
    return {p.slug: p for p in rows}


@pytest_asyncio.fixture
async def system_role(session: AsyncSession, permissions) -> AdminRole:
    role = AdminRole(name="Super Admin", is_system=True)
    return await AdminRoleRepository(session).create_with_permissions(role, [p.id for p in permissions.values()])


async def _create_role(client: AsyncClient, admin, name: str, permission_ids=()) -> dict:
    response = await client.post(
        "/api/admin/roles", json={"name": name, "permissionIds": list(permission_ids)}, headers=admin.headers
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestPermissions:
    async def test_catalogue_grouped_by_category(self, client: AsyncClient, admin, permissions):
        response = await client.get("/api/admin/permissions", headers=admin.headers)
        assert response.status_code == 200
        data = response.json()
        assert [p["category"] for p in data["permissions"]] == ["Content", "System", "Users"]
        assert set(data["grouped"]) == {"Content", "System", "Users"}
        assert data["grouped"]["Users"][0]["slug"] == "users.view"

    async def test_requires_admin(self, client: AsyncClient, student):
        response = await client.get("/api/admin/permissions", headers=student.headers)
        assert response.status_code == 403


class TestRoles:
    async def test_create_and_get(self, client: AsyncClient, admin, permissions):
        role = await _create_role(client, admin, "Editors", [permissions["content.blog"].id])
        assert role["isSystem"] is False
        assert [p["slug"] for p in role["permissions"]] == ["content.blog"]

        detail = await client.get(f"/api/admin/roles/{role['id']}", headers=admin.headers)
        assert detail.status_code == 200
        assert detail.json()["users"] == []

    async def test_duplicate_name(self, client: AsyncClient, admin, permissions):
        await _create_role(client, admin, "Editors")
        response = await client.post("/api/admin/roles", json={"name": "Editors"}, headers=admin.headers)
        assert response.status_code == 400
        assert response.json()["error"] == "A role with this name already exists"

    async def test_unknown_permission(self, client: AsyncClient, admin):
        response = await client.post(
            "/api/admin/roles", json={"name": "Ghosts", "permissionIds": ["missing"]}, headers=admin.headers
        )
        assert response.status_code == 400
        assert response.json()["error"] == "One or more permissions do not exist"

    async def test_rename(self, client: AsyncClient, admin):
        role = await _create_role(client, admin, "Editors")
        await _create_role(client, admin, "Support")
        clash = await client.patch(f"/api/admin/roles/{role['id']}", json={"name": "Support"}, headers=admin.headers)
        assert clash.status_code == 400

        same = await client.patch(f"/api/admin/roles/{role['id']}", json={"name": "Editors"}, headers=admin.headers)
        assert same.status_code == 200

        renamed = await client.patch(
            f"/api/admin/roles/{role['id']}", json={"name": "Writers", "description": "Blog"}, headers=admin.headers
        )
        assert renamed.json()["name"] == "Writers"
        assert renamed.json()["description"] == "Blog"

    async def test_replace_permissions_collapses_duplicates(self, client: AsyncClient, admin, permissions):
        role = await _create_role(client, admin, "Editors", [permissions["content.blog"].id])
        users_view = permissions["users.view"].id
        response = await client.put(
            f"/api/admin/roles/{role['id']}/permissions",
            json={"permissionIds": [users_view, users_view]},
            headers=admin.headers,
        )
        assert response.status_code == 200
        assert [p["slug"] for p in response.json()["permissions"]] == ["users.view"]

    async def test_list_with_user_counts(self, client: AsyncClient, admin, system_role):
        await client.patch(f"/api/admin/users/{admin.id}/role", json={"roleId": system_role.id}, headers=admin.headers)
        await _create_role(client, admin, "Editors")
        response = await client.get("/api/admin/roles", headers=admin.headers)
        assert [(r["name"], r["userCount"]) for r in response.json()] == [("Super Admin", 1), ("Editors", 0)]

    async def test_system_role_cannot_be_deleted(self, client: AsyncClient, admin, system_role):
        response = await client.delete(f"/api/admin/roles/{system_role.id}", headers=admin.headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Cannot delete system roles"

    async def test_assigned_role_cannot_be_deleted(self, client: AsyncClient, admin, make_account):
        role = await _create_role(client, admin, "Editors")
        other = await make_account(UserRole.ADMIN)
        await client.patch(f"/api/admin/users/{other.id}/role", json={"roleId": role["id"]}, headers=admin.headers)
        response = await client.delete(f"/api/admin/roles/{role['id']}", headers=admin.headers)
        assert response.status_code == 400
        assert "1 user(s)" in response.json()["error"]

    async def test_delete_custom_role(self, client: AsyncClient, admin):
        role = await _create_role(client, admin, "Editors")
        response = await client.delete(f"/api/admin/roles/{role['id']}", headers=admin.headers)
        assert response.status_code == 204
        assert (await client.get(f"/api/admin/roles/{role['id']}", headers=admin.headers)).status_code == 404


class TestAssignment:
    async def test_assign_replaces_previous_role(self, client: AsyncClient, admin, make_account):
        other = await make_account(UserRole.ADMIN, full_name="Other Admin")
        first = await _create_role(client, admin, "Editors")
        second = await _create_role(client, admin, "Support")

        await client.patch(f"/api/admin/users/{other.id}/role", json={"roleId": first["id"]}, headers=admin.headers)
        response = await client.patch(
            f"/api/admin/users/{other.id}/role", json={"roleId": second["id"]}, headers=admin.headers
        )
        assert response.status_code == 200
        assert response.json() == {
            "message": "Role assigned successfully",
            "roleId": second["id"],
            "roleName": "Support",
        }

        members = await client.get("/api/admin/roles/users", params={"search": "Other"}, headers=admin.headers)
        assert [r["name"] for r in members.json()["users"][0]["roles"]] == ["Support"]

    async def test_only_admins_get_roles(self, client: AsyncClient, admin, student):
        role = await _create_role(client, admin, "Editors")
        response = await client.patch(
            f"/api/admin/users/{student.id}/role", json={"roleId": role["id"]}, headers=admin.headers
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Can only assign admin roles to admin users"

    async def test_cannot_drop_own_role_management(self, client: AsyncClient, admin, system_role):
        editors = await _create_role(client, admin, "Editors")
        response = await client.patch(
            f"/api/admin/users/{admin.id}/role", json={"roleId": editors["id"]}, headers=admin.headers
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Cannot remove your own role management permission"

        allowed = await client.patch(
            f"/api/admin/users/{admin.id}/role", json={"roleId": system_role.id}, headers=admin.headers
        )
        assert allowed.status_code == 200

    async def test_unknown_user_or_role(self, client: AsyncClient, admin, make_account):
        missing_user = await client.patch("/api/admin/users/missing/role", json={"roleId": "x"}, headers=admin.headers)
        assert missing_user.status_code == 404
        other = await make_account(UserRole.ADMIN)
        missing_role = await client.patch(
            f"/api/admin/users/{other.id}/role", json={"roleId": "missing"}, headers=admin.headers
        )
        assert missing_role.status_code == 404
        assert missing_role.json()["error"] == "Role not found"

    async def test_member_listing_clamps_limit(self, client: AsyncClient, admin):
        response = await client.get("/api/admin/roles/users", params={"limit": 1000}, headers=admin.headers)
        assert response.status_code == 200
        data = response.json()
        assert data["pagination"]["limit"] == 100
        assert data["users"][0]["fullName"] == "Ada Admin"
