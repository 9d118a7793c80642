"""
Admin Roles and Permissions Endpoints.

Fine-grained access control for ADMIN accounts: a catalogue of permissions,
named roles holding permission sets, and a single role assignment per admin.
System roles cannot be deleted, and an admin cannot take away their own
``system.roles`` permission. Every change is written to the audit log.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Request, Response, status

from studentos.core.database.entities import AdminRole
from studentos.core.database.repositories import AdminRoleRepository, PermissionRepository, UserRepository
from studentos.core.models.domain import ROLES_PERMISSION_SLUG, AuditAction, UserRole
from studentos.core.models.io.base import Pagination
from studentos.core.models.io.roles import (
    AdminMember,
    AdminMemberPage,
    PermissionCatalogue,
    PermissionRead,
    RoleAssigned,
    RoleAssignment,
    RoleCreate,
    RoleDetail,
    RoleMember,
    RolePermissionsUpdate,
    RoleRead,
    RoleRef,
    RoleUpdate,
    RoleWithUserCount,
)
from studentos.server.core.constant import MAX_PAGE_LIMIT
from studentos.server.services.audit import record_audit
from studentos.server.services.cards import read_with
from studentos.server.services.deps import AdminUser, SessionDep

router = APIRouter()

MEMBERS_PAGE_LIMIT = 20
UNKNOWN_MEMBER_NAME = "Unknown"


async def _get_role_or_404(repository: AdminRoleRepository, role_id: str) -> AdminRole:
    role = await repository.get_by_id(role_id)
    if role is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found")
    return role


async def _ensure_name_free(repository: AdminRoleRepository, name: str) -> None:
    if await repository.get_by_name(name) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="A role with this name already exists")


async def _ensure_permissions_exist(session, permission_ids: List[str]) -> None:
    wanted = set(permission_ids)
    found = await PermissionRepository(session).get_many(wanted)
    if len(found) != len(wanted):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="One or more permissions do not exist")


async def _role_read(repository: AdminRoleRepository, role: AdminRole) -> RoleRead:
    permissions = await repository.permissions_for([role.id])
    return read_with(RoleRead, role, permissions=[PermissionRead.model_validate(p) for p in permissions[role.id]])


# =====================================================================
# Permissions
# =====================================================================


@router.get(
    "/permissions",
    response_model=PermissionCatalogue,
    summary="Permission Catalogue",
    description="Every permission ordered by category then name, also grouped by category.",
)
async def list_permissions(admin: AdminUser, session: SessionDep) -> PermissionCatalogue:
    permissions = [PermissionRead.model_validate(p) for p in await PermissionRepository(session).list_ordered()]
    grouped: Dict[str, List[PermissionRead]] = {}
    for permission in permissions:
        grouped.setdefault(permission.category, []).append(permission)
    return PermissionCatalogue(permissions=permissions, grouped=grouped)


# =====================================================================
# Roles
# =====================================================================


@router.get(
    "/roles",
    response_model=List[RoleWithUserCount],
    summary="List Roles",
    description="Roles oldest first with their permissions and number of assigned admins.",
)
async def list_roles(admin: AdminUser, session: SessionDep) -> List[RoleWithUserCount]:
    repository = AdminRoleRepository(session)
    roles = await repository.list_ordered()
    role_ids = [r.id for r in roles]
    permissions = await repository.permissions_for(role_ids)
    counts = await repository.user_counts(role_ids)
    return [
        read_with(
            RoleWithUserCount,
            role,
            permissions=[PermissionRead.model_validate(p) for p in permissions[role.id]],
            user_count=counts.get(role.id, 0),
        )
        for role in roles
    ]


@router.get(
    "/roles/users",
    response_model=AdminMemberPage,
    summary="List Admin Members",
    description="ADMIN accounts with their assigned roles. ``limit`` is clamped to 1..100.",
)
async def list_admin_members(
    admin: AdminUser,
    session: SessionDep,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = MEMBERS_PAGE_LIMIT,
) -> AdminMemberPage:
    page = max(1, page)
    limit = min(MAX_PAGE_LIMIT, max(1, limit))

    users_repository = UserRepository(session)
    users, total = await users_repository.list_admins(page, limit, search=search)
    user_ids = [u.id for u in users]
    profiles = await users_repository.student_profiles_for(user_ids)
    roles = await AdminRoleRepository(session).roles_for_users(user_ids)

    members = []
    for user in users:
        profile = profiles.get(user.id)
        members.append(
            read_with(
                AdminMember,
                user,
                full_name=profile.full_name if profile and profile.full_name else UNKNOWN_MEMBER_NAME,
                avatar_url=profile.avatar_url if profile else None,
                roles=[RoleRef.model_validate(role) for role in roles[user.id]],
            )
        )
    return AdminMemberPage(users=members, pagination=Pagination.build(page, limit, total))


@router.get(
    "/roles/{role_id}",
    response_model=RoleDetail,
    summary="Get Role",
    description="A role with its permissions and assigned admins.",
    responses={404: {"description": "Role not found"}},
)
async def get_role(role_id: str, admin: AdminUser, session: SessionDep) -> RoleDetail:
    repository = AdminRoleRepository(session)
    role = await _get_role_or_404(repository, role_id)
    permissions = await repository.permissions_for([role.id])
    members = await repository.users_for(role.id)
    return read_with(
        RoleDetail,
        role,
        permissions=[PermissionRead.model_validate(p) for p in permissions[role.id]],
        users=[
            RoleMember(id=user.id, email=user.email, full_name=profile.full_name if profile else None)
            for user, profile in members
        ],
    )


@router.post(
    "/roles",
    response_model=RoleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Role",
    responses={400: {"description": "Duplicate name or unknown permission"}},
)
async def create_role(body: RoleCreate, request: Request, admin: AdminUser, session: SessionDep) -> RoleRead:
    repository = AdminRoleRepository(session)
    await _ensure_name_free(repository, body.name)
    await _ensure_permissions_exist(session, body.permission_ids)

    role = await repository.create_with_permissions(
        AdminRole(name=body.name, description=body.description), body.permission_ids
    )
    await record_audit(session, request, admin, AuditAction.CREATE_ROLE, "ROLE", role.id, {"name": role.name})
    return await _role_read(repository, role)


@router.patch(
    "/roles/{role_id}",
    response_model=RoleRead,
    summary="Update Role",
    responses={400: {"description": "Duplicate name"}, 404: {"description": "Role not found"}},
)
async def update_role(
    role_id: str, body: RoleUpdate, request: Request, admin: AdminUser, session: SessionDep
) -> RoleRead:
    repository = AdminRoleRepository(session)
    role = await _get_role_or_404(repository, role_id)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes and changes["name"] != role.name:
        await _ensure_name_free(repository, changes["name"])

    role = await repository.update(role, changes)
    await record_audit(session, request, admin, AuditAction.UPDATE_ROLE, "ROLE", role.id, changes)
    return await _role_read(repository, role)


@router.put(
    "/roles/{role_id}/permissions",
    response_model=RoleRead,
    summary="Replace Role Permissions",
    description="Make the role's permission set exactly the given ids. Duplicate ids collapse.",
    responses={400: {"description": "Unknown permission"}, 404: {"description": "Role not found"}},
)
async def replace_role_permissions(
    role_id: str, body: RolePermissionsUpdate, request: Request, admin: AdminUser, session: SessionDep
) -> RoleRead:
    repository = AdminRoleRepository(session)
    role = await _get_role_or_404(repository, role_id)
    await _ensure_permissions_exist(session, body.permission_ids)

    permission_ids = set(body.permission_ids)
    await repository.replace_permissions(role, permission_ids)
    await record_audit(
        session,
        request,
        admin,
        AuditAction.UPDATE_ROLE_PERMISSIONS,
        "ROLE",
        role.id,
        {"permissionCount": len(permission_ids)},
    )
    return await _role_read(repository, role)


@router.delete(
    "/roles/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Role",
    description="Only custom roles that no admin holds can be deleted.",
    responses={400: {"description": "System role or role still assigned"}, 404: {"description": "Role not found"}},
)
async def delete_role(role_id: str, request: Request, admin: AdminUser, session: SessionDep) -> Response:
    repository = AdminRoleRepository(session)
    role = await _get_role_or_404(repository, role_id)
    if role.is_system:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete system roles")

    assigned = await repository.count_users(role.id)
    if assigned > 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot delete role: {assigned} user(s) are still assigned to this role",
        )

    name = role.name
    await repository.delete_cascade(role)
    await record_audit(session, request, admin, AuditAction.DELETE_ROLE, "ROLE", role_id, {"name": name})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =====================================================================
# Assignment
# =====================================================================


@router.patch(
    "/users/{user_id}/role",
    response_model=RoleAssigned,
    summary="Assign Role",
    description="Replace every role of an admin with the given one.",
    responses={
        400: {"description": "Not an admin, or removing your own role management permission"},
        404: {"description": "User or role not found"},
    },
)
async def assign_role(
    user_id: str, body: RoleAssignment, request: Request, admin: AdminUser, session: SessionDep
) -> RoleAssigned:
    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if user.role != UserRole.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Can only assign admin roles to admin users"
        )

    repository = AdminRoleRepository(session)
    if user_id == admin.id:
        permissions = await repository.permissions_for([body.role_id])
        if not any(p.slug == ROLES_PERMISSION_SLUG for p in permissions[body.role_id]):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot remove your own role management permission",
            )

    role = await _get_role_or_404(repository, body.role_id)
    await repository.assign_only(user_id, role.id)
    await record_audit(
        session, request, admin, AuditAction.ASSIGN_ROLE, "USER", user_id, {"roleId": role.id, "roleName": role.name}
    )
    return RoleAssigned(message="Role assigned successfully", role_id=role.id, role_name=role.name)
