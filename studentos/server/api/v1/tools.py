"""
Admin Tool Catalogue and App Settings Endpoints.

Admins add, edit, disable and remove the tools students spend credits on, and
edit the key/value app settings. Every change is written to the audit log.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, Request, Response, status

from studentos.core.database.entities import Tool
from studentos.core.database.repositories import AppSettingRepository, ToolRepository
from studentos.core.models.domain import AuditAction
from studentos.core.models.io.tools import AdminToolRead, SettingsUpdate, SettingValue, ToolCreate, ToolRead, ToolUpdate
from studentos.server.services.audit import record_audit
from studentos.server.services.cards import read_with
from studentos.server.services.deps import AdminUser, SessionDep

router = APIRouter()


def setting_text(value: SettingValue) -> str:
    """Stored form of a setting value; booleans become ``true``/``false``."""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


async def _get_tool_or_404(repository: ToolRepository, tool_id: str) -> Tool:
    tool = await repository.get_by_id(tool_id)
    if tool is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tool not found")
    return tool


async def _ensure_slug_free(repository: ToolRepository, slug: str, tool_id: Optional[str] = None) -> None:
    existing = await repository.get_by_slug(slug)
    if existing is not None and existing.id != tool_id:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A tool with this slug already exists")


# =====================================================================
# Tools
# =====================================================================


@router.get(
    "/tools",
    response_model=List[AdminToolRead],
    summary="List Tools",
    description="Every tool, newest first, with how many times it was used.",
)
async def list_tools(admin: AdminUser, session: SessionDep) -> List[AdminToolRead]:
    rows = await ToolRepository(session).list_with_usage()
    return [read_with(AdminToolRead, tool, usage_count=uses) for tool, uses in rows]


@router.post(
    "/tools",
    response_model=ToolRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Tool",
    responses={409: {"description": "A tool with this slug already exists"}},
)
async def create_tool(body: ToolCreate, request: Request, admin: AdminUser, session: SessionDep) -> ToolRead:
    repository = ToolRepository(session)
    await _ensure_slug_free(repository, body.slug)
    tool = await repository.create(Tool(**body.model_dump()))
    await record_audit(session, request, admin, AuditAction.CREATE_TOOL, "TOOL", tool.id, {"slug": tool.slug})
    return ToolRead.model_validate(tool)


@router.patch(
    "/tools/{tool_id}",
    response_model=ToolRead,
    summary="Update Tool",
    responses={404: {"description": "Tool not found"}, 409: {"description": "A tool with this slug already exists"}},
)
async def update_tool(
    tool_id: str, body: ToolUpdate, request: Request, admin: AdminUser, session: SessionDep
) -> ToolRead:
    repository = ToolRepository(session)
    tool = await _get_tool_or_404(repository, tool_id)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if "slug" in changes:
        await _ensure_slug_free(repository, changes["slug"], tool.id)
    tool = await repository.update(tool, changes)
    await record_audit(session, request, admin, AuditAction.UPDATE_TOOL, "TOOL", tool.id, changes)
    return ToolRead.model_validate(tool)


@router.patch(
    "/tools/{tool_id}/toggle",
    response_model=ToolRead,
    summary="Enable or Disable Tool",
    responses={404: {"description": "Tool not found"}},
)
async def toggle_tool(tool_id: str, request: Request, admin: AdminUser, session: SessionDep) -> ToolRead:
    repository = ToolRepository(session)
    tool = await _get_tool_or_404(repository, tool_id)
    tool = await repository.update(tool, {"is_active": not tool.is_active})
    await record_audit(
        session, request, admin, AuditAction.UPDATE_TOOL, "TOOL", tool.id, {"is_active": tool.is_active}
    )
    return ToolRead.model_validate(tool)


@router.delete(
    "/tools/{tool_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Tool",
    description="Delete a tool together with its usage records.",
    responses={404: {"description": "Tool not found"}},
)
async def delete_tool(tool_id: str, request: Request, admin: AdminUser, session: SessionDep) -> Response:
    repository = ToolRepository(session)
    tool = await _get_tool_or_404(repository, tool_id)
    slug = tool.slug
    await repository.delete_cascade(tool)
    await record_audit(session, request, admin, AuditAction.DELETE_TOOL, "TOOL", tool_id, {"slug": slug})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =====================================================================
# App settings
# =====================================================================


@router.get("/settings", response_model=Dict[str, str], summary="App Settings")
async def get_settings(admin: AdminUser, session: SessionDep) -> Dict[str, str]:
    return await AppSettingRepository(session).as_dict()


@router.patch(
    "/settings",
    response_model=Dict[str, str],
    summary="Update App Settings",
    description="Set each given key; values are stored as text. Keys not in the body are left as they are.",
)
async def update_settings(
    request: Request, admin: AdminUser, session: SessionDep, body: SettingsUpdate = Body(...)
) -> Dict[str, str]:
    values = {key: setting_text(value) for key, value in body.items()}
    updated = await AppSettingRepository(session).upsert_many(values)
    await record_audit(session, request, admin, AuditAction.UPDATE_SETTINGS, "SETTINGS", None, values)
    return updated
