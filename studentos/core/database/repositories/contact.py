"""Contact message repository."""

from __future__ import annotations

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities import ContactMessage
from .base import BaseRepository


class ContactMessageRepository(BaseRepository[ContactMessage]):
    """Repository for contact form messages."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ContactMessage)

    async def list_newest(self) -> List[ContactMessage]:
        stmt = select(ContactMessage).order_by(ContactMessage.created_at.desc())
        return list((await self.session.execute(stmt)).scalars().all())
