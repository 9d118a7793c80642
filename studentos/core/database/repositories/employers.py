"""Employer profile repository used by employer verification."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities import EmployerProfile, User
from .base import BaseRepository


class EmployerProfileRepository(BaseRepository[EmployerProfile]):
    """Repository for employer profiles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, EmployerProfile)

    async def list_with_users(self, verification_status: Optional[str] = None) -> List[tuple[EmployerProfile, User]]:
        """Employer profiles newest first, each with its owning account."""
        stmt = select(EmployerProfile, User).join(User, User.id == EmployerProfile.user_id)
        if verification_status:
            stmt = stmt.where(EmployerProfile.verification_status == verification_status)
        stmt = stmt.order_by(EmployerProfile.created_at.desc())
        return [(row[0], row[1]) for row in (await self.session.execute(stmt)).all()]
