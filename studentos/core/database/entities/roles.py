"""
Admin access-control entity models.

Admins are granted named roles, each role carries a set of permissions
identified by slug (for example ``system.roles``). Every privileged change
made through the back-office is recorded in the audit log.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class Permission(Base, table=True):
    """Table: permissions"""

    __tablename__ = "permissions"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    slug: str = Field(unique=True, index=True)
    name: str
    category: str = Field(index=True)
    description: Optional[str] = Field(default=None)


class AdminRole(Base, table=True):
    """Named bundle of permissions. System roles are seeded and cannot be deleted.

    Table: admin_roles
    """

    __tablename__ = "admin_roles"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(unique=True, index=True)
    description: Optional[str] = Field(default=None)
    is_system: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)


class RolePermission(Base, table=True):
    """Table: role_permissions"""

    __tablename__ = "role_permissions"
    __table_args__ = (
        UniqueConstraint("role_id", "permission_id", name="uq_role_permission"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    role_id: str = Field(foreign_key="admin_roles.id", index=True, ondelete="CASCADE")
    permission_id: str = Field(foreign_key="permissions.id", index=True, ondelete="CASCADE")


class UserAdminRole(Base, table=True):
    """Table: user_admin_roles"""

    __tablename__ = "user_admin_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role_id", name="uq_user_admin_role"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    role_id: str = Field(foreign_key="admin_roles.id", index=True, ondelete="CASCADE")
    assigned_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)


class AuditLog(Base, table=True):
    """Record of a privileged back-office action.

    ``details`` holds a JSON document describing the change.

    Table: audit_logs
    """

    __tablename__ = "audit_logs"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    admin_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    action: str = Field(index=True)
    target_type: str
    target_id: Optional[str] = Field(default=None)
    details: Optional[str] = Field(default=None)
    ip_address: Optional[str] = Field(default=None)
    user_agent: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=UTCDateTime)
