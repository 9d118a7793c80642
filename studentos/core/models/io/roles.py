"""Admin roles and permissions I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from .base import CamelModel, Pagination


class PermissionRead(CamelModel):
    id: str
    slug: str
    name: str
    category: str
    description: Optional[str] = None


class PermissionCatalogue(CamelModel):
    permissions: List[PermissionRead]
    grouped: Dict[str, List[PermissionRead]]


class RoleRead(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    is_system: bool
    created_at: datetime
    updated_at: datetime
    permissions: List[PermissionRead] = Field(default_factory=list)


class RoleWithUserCount(RoleRead):
    user_count: int = 0


class RoleMember(CamelModel):
    id: str
    email: str
    full_name: Optional[str] = None


class RoleDetail(RoleRead):
    users: List[RoleMember] = Field(default_factory=list)


class RoleCreate(CamelModel):
    name: str = Field(min_length=2)
    description: Optional[str] = None
    permission_ids: List[str] = Field(default_factory=list)


class RoleUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=2)
    description: Optional[str] = None


class RolePermissionsUpdate(CamelModel):
    permission_ids: List[str]


class RoleRef(CamelModel):
    id: str
    name: str


class AdminMember(CamelModel):
    id: str
    email: str
    full_name: str
    avatar_url: Optional[str] = None
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime
    roles: List[RoleRef] = Field(default_factory=list)


class AdminMemberPage(CamelModel):
    users: List[AdminMember]
    pagination: Pagination


class RoleAssignment(CamelModel):
    role_id: str = Field(min_length=1)


class RoleAssigned(CamelModel):
    message: str
    role_id: str
    role_name: str
