"""
Admin access-control repository.

Permissions, admin roles, role-permission sets and admin role assignments.
Replacing a role's permission set or a user's role assignment happens in a
single commit.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities import AdminRole, Permission, RolePermission, StudentProfile, User, UserAdminRole
from .base import BaseRepository


class PermissionRepository(BaseRepository[Permission]):
    """Repository for the permission catalogue."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Permission)

    async def list_ordered(self) -> List[Permission]:
        """All permissions ordered by category then name."""
        stmt = select(Permission).order_by(Permission.category.asc(), Permission.name.asc())
        return list((await self.session.execute(stmt)).scalars().all())

    async def get_many(self, permission_ids: Iterable[str]) -> List[Permission]:
        ids = set(permission_ids)
        if not ids:
            return []
        stmt = select(Permission).where(Permission.id.in_(ids))
        return list((await self.session.execute(stmt)).scalars().all())


class AdminRoleRepository(BaseRepository[AdminRole]):
    """Repository for admin roles and their assignments."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AdminRole)

    async def get_by_name(self, name: str) -> Optional[AdminRole]:
        stmt = select(AdminRole).where(AdminRole.name == name)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def list_ordered(self) -> List[AdminRole]:
        """All roles, oldest first."""
        stmt = select(AdminRole).order_by(AdminRole.created_at.asc())
        return list((await self.session.execute(stmt)).scalars().all())

    async def permissions_for(self, role_ids: Iterable[str]) -> dict[str, List[Permission]]:
        """Map of role id to its permissions ordered by category then name."""
        ids = list(role_ids)
        grouped: dict[str, List[Permission]] = {role_id: [] for role_id in ids}
        if not ids:
            return grouped
        stmt = (
            select(RolePermission.role_id, Permission)
            .join(Permission, Permission.id == RolePermission.permission_id)
            .where(RolePermission.role_id.in_(ids))
            .order_by(Permission.category.asc(), Permission.name.asc())
        )
        for role_id, permission in (await self.session.execute(stmt)).all():
            grouped[role_id].append(permission)
        return grouped

    async def user_counts(self, role_ids: Iterable[str]) -> dict[str, int]:
        ids = list(role_ids)
        if not ids:
            return {}
        stmt = (
            select(UserAdminRole.role_id, func.count())
            .where(UserAdminRole.role_id.in_(ids))
            .group_by(UserAdminRole.role_id)
        )
        return {role_id: int(count) for role_id, count in (await self.session.execute(stmt)).all()}

    async def count_users(self, role_id: str) -> int:
        stmt = select(func.count()).select_from(UserAdminRole).where(UserAdminRole.role_id == role_id)
        return int((await self.session.execute(stmt)).scalar_one())

    async def users_for(self, role_id: str) -> List[tuple[User, Optional[StudentProfile]]]:
        stmt = (
            select(User, StudentProfile)
            .join(UserAdminRole, UserAdminRole.user_id == User.id)
            .outerjoin(StudentProfile, StudentProfile.user_id == User.id)
            .where(UserAdminRole.role_id == role_id)
            .order_by(User.email.asc())
        )
        return [(row[0], row[1]) for row in (await self.session.execute(stmt)).all()]

    async def roles_for_users(self, user_ids: Iterable[str]) -> dict[str, List[AdminRole]]:
        ids = list(user_ids)
        grouped: dict[str, List[AdminRole]] = {user_id: [] for user_id in ids}
        if not ids:
            return grouped
        stmt = (
            select(UserAdminRole.user_id, AdminRole)
            .join(AdminRole, AdminRole.id == UserAdminRole.role_id)
            .where(UserAdminRole.user_id.in_(ids))
            .order_by(AdminRole.name.asc())
        )
        for user_id, role in (await self.session.execute(stmt)).all():
            grouped[user_id].append(role)
        return grouped

    async def create_with_permissions(self, role: AdminRole, permission_ids: Iterable[str]) -> AdminRole:
        self.session.add(role)
        for permission_id in sorted(set(permission_ids)):
            self.session.add(RolePermission(role_id=role.id, permission_id=permission_id))
        await self.session.commit()
        await self.session.refresh(role)
        return role

    async def replace_permissions(self, role: AdminRole, permission_ids: Iterable[str]) -> None:
        """Make the role's permission set exactly ``permission_ids``. Duplicates collapse."""
        await self.session.execute(delete(RolePermission).where(RolePermission.role_id == role.id))
        for permission_id in sorted(set(permission_ids)):
            self.session.add(RolePermission(role_id=role.id, permission_id=permission_id))
        await self.session.commit()

    async def assign_only(self, user_id: str, role_id: str) -> None:
        """Replace every role assignment of ``user_id`` with ``role_id``."""
        await self.session.execute(delete(UserAdminRole).where(UserAdminRole.user_id == user_id))
        self.session.add(UserAdminRole(user_id=user_id, role_id=role_id))
        await self.session.commit()

    async def delete_cascade(self, role: AdminRole) -> None:
        await self.session.execute(delete(RolePermission).where(RolePermission.role_id == role.id))
        await self.session.execute(delete(UserAdminRole).where(UserAdminRole.role_id == role.id))
        await self.session.delete(role)
        await self.session.commit()
