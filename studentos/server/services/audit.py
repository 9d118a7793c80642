"""Audit trail helper for admin endpoints."""

from typing import Any, Dict, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from studentos.core.database.entities import AuditLog, User
from studentos.core.database.repositories import AuditLogRepository
from studentos.core.logging_config import get_logger
from studentos.core.models.domain import AuditAction

from .deps import client_ip

logger = get_logger(__name__)


async def record_audit(
    session: AsyncSession,
    request: Request,
    admin: User,
    action: AuditAction,
    target_type: str,
    target_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> AuditLog:
    """Append an audit entry for ``admin`` with the caller's address and user agent."""
    entry = await AuditLogRepository(session).record(
        admin_id=admin.id,
        action=action.value,
        target_type=target_type,
        target_id=target_id,
        details=details,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    logger.info(f"Audit {action.value} on {target_type} {target_id} by {admin.email}")
    return entry
