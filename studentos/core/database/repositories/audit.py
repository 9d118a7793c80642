"""Audit log repository."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities import AuditLog, User
from .base import BaseRepository


class AuditLogRepository(BaseRepository[AuditLog]):
    """Repository for the admin audit trail."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AuditLog)

    async def record(
        self,
        admin_id: str,
        action: str,
        target_type: str,
        target_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AuditLog:
        """Append one audit entry. ``details`` is stored as a JSON document."""
        entry = AuditLog(
            admin_id=admin_id,
            action=action,
            target_type=target_type,
            target_id=target_id,
            details=json.dumps(details, default=str) if details is not None else None,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        return await self.create(entry)

    async def list_with_admin(
        self,
        page: int,
        limit: int,
        action: Optional[str] = None,
        admin_id: Optional[str] = None,
    ) -> tuple[List[tuple[AuditLog, Optional[str]]], int]:
        """Entries newest first, each paired with the acting admin's email."""
        stmt = select(AuditLog)
        if action:
            stmt = stmt.where(AuditLog.action == action)
        if admin_id:
            stmt = stmt.where(AuditLog.admin_id == admin_id)
        stmt = stmt.order_by(AuditLog.created_at.desc())
        entries, total = await self.paginate(stmt, page, limit)

        admin_ids = {entry.admin_id for entry in entries}
        emails: dict[str, str] = {}
        if admin_ids:
            result = await self.session.execute(select(User.id, User.email).where(User.id.in_(admin_ids)))
            emails = {user_id: email for user_id, email in result.all()}
        return [(entry, emails.get(entry.admin_id)) for entry in entries], total
