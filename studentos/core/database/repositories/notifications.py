"""Notification repository."""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities import Notification, User
from .base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Notification)

    async def get_owned(self, notification_id: str, user_id: str) -> Optional[Notification]:
        stmt = select(Notification).where(Notification.id == notification_id, Notification.user_id == user_id)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def latest(self, user_id: str, limit: int) -> List[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .limit(limit)
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def count_unread(self, user_id: str) -> int:
        return await self.count_where(Notification.user_id == user_id, Notification.is_read == False)  # noqa: E712

    async def mark_all_read(self, user_id: str) -> int:
        result = await self.session.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read == False)  # noqa: E712
            .values(is_read=True)
        )
        await self.session.commit()
        return result.rowcount or 0

    async def create_many(self, notifications: Iterable[Notification]) -> int:
        """Insert a batch in one commit and return how many rows were added."""
        rows = list(notifications)
        self.session.add_all(rows)
        await self.session.commit()
        return len(rows)

    async def active_user_ids(self) -> List[str]:
        result = await self.session.execute(select(User.id).where(User.is_active == True))  # noqa: E712
        return list(result.scalars().all())

    async def history(self, page: int, limit: int) -> tuple[List[tuple[Notification, Optional[str]]], int]:
        """Every notification across all users, newest first, each paired with the recipient's email."""
        stmt = select(Notification).order_by(Notification.created_at.desc())
        notifications, total = await self.paginate(stmt, page, limit)

        user_ids = {notification.user_id for notification in notifications}
        emails: dict[str, str] = {}
        if user_ids:
            result = await self.session.execute(select(User.id, User.email).where(User.id.in_(user_ids)))
            emails = {user_id: email for user_id, email in result.all()}
        return [(notification, emails.get(notification.user_id)) for notification in notifications], total
