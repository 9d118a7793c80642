"""
Habit tracker repository.

Days are UTC calendar days: "today" starts at midnight UTC.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities import Habit, HabitLog
from .base import BaseRepository


class HabitRepository(BaseRepository[Habit]):
    """Repository for habits and habit logs."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Habit)

    async def get_owned(self, habit_id: str, user_id: str) -> Optional[Habit]:
        """The habit if it exists and belongs to ``user_id``."""
        stmt = select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def list_active(self, user_id: str, limit: Optional[int] = None) -> List[Habit]:
        """Active habits, oldest first."""
        stmt = (
            select(Habit)
            .where(Habit.user_id == user_id, Habit.is_active == True)  # noqa: E712
            .order_by(Habit.created_at.asc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list((await self.session.execute(stmt)).scalars().all())

    async def logs_since(
        self, habit_ids: List[str], since: Optional[datetime] = None, per_habit_limit: Optional[int] = None
    ) -> dict[str, List[HabitLog]]:
        """Logs per habit, newest first, optionally bounded in time and count."""
        logs: dict[str, List[HabitLog]] = {habit_id: [] for habit_id in habit_ids}
        if not habit_ids:
            return logs
        stmt = select(HabitLog).where(HabitLog.habit_id.in_(habit_ids))
        if since is not None:
            stmt = stmt.where(HabitLog.completed_at >= since)
        stmt = stmt.order_by(HabitLog.completed_at.desc())
        for log in (await self.session.execute(stmt)).scalars().all():
            bucket = logs[log.habit_id]
            if per_habit_limit is None or len(bucket) < per_habit_limit:
                bucket.append(log)
        return logs

    async def get_log_since(self, habit_id: str, user_id: str, since: datetime) -> Optional[HabitLog]:
        stmt = (
            select(HabitLog)
            .where(HabitLog.habit_id == habit_id, HabitLog.user_id == user_id, HabitLog.completed_at >= since)
            .limit(1)
        )
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def add_log(self, habit_id: str, user_id: str, notes: Optional[str] = None) -> HabitLog:
        log = HabitLog(habit_id=habit_id, user_id=user_id, notes=notes)
        self.session.add(log)
        await self.session.commit()
        await self.session.refresh(log)
        return log

    async def delete_logs_since(self, habit_id: str, user_id: str, since: datetime) -> int:
        result = await self.session.execute(
            delete(HabitLog).where(
                HabitLog.habit_id == habit_id, HabitLog.user_id == user_id, HabitLog.completed_at >= since
            )
        )
        await self.session.commit()
        return result.rowcount or 0

    async def count_user_logs_since(self, user_id: str, since: datetime) -> int:
        stmt = select(func.count()).select_from(HabitLog).where(
            HabitLog.user_id == user_id, HabitLog.completed_at >= since
        )
        return int((await self.session.execute(stmt)).scalar_one())
