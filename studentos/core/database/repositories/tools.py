"""
Tool catalogue, credit and app settings repositories.

Spending credits is a single conditional ``UPDATE`` on the account row, so two
concurrent requests can never take the balance below zero.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from sqlalchemy import delete, func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities import AppSetting, Tool, ToolUsage, User
from .base import BaseRepository


class ToolRepository(BaseRepository[Tool]):
    """Repository for tools and their usage records."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Tool)

    async def get_by_slug(self, slug: str) -> Optional[Tool]:
        return (await self.session.execute(select(Tool).where(Tool.slug == slug))).scalar_one_or_none()

    async def list_with_usage(self) -> List[Tuple[Tool, int]]:
        """Every tool, newest first, with how many times it was used."""
        usage = (
            select(ToolUsage.tool_id, func.count().label("uses")).group_by(ToolUsage.tool_id).subquery()
        )
        stmt = (
            select(Tool, func.coalesce(usage.c.uses, 0))
            .outerjoin(usage, usage.c.tool_id == Tool.id)
            .order_by(Tool.created_at.desc())
        )
        return [(tool, int(uses)) for tool, uses in (await self.session.execute(stmt)).all()]

    async def delete_cascade(self, tool: Tool) -> None:
        await self.session.execute(delete(ToolUsage).where(ToolUsage.tool_id == tool.id))
        await self.session.delete(tool)
        await self.session.commit()

    async def balance_of(self, user_id: str) -> Tuple[int, Optional[str]]:
        """Credit balance and referral code, read from the database rather than the session."""
        stmt = select(User.credit_balance, User.referral_code).where(User.id == user_id)
        balance, referral_code = (await self.session.execute(stmt)).one()
        return int(balance), referral_code

    async def spend(self, user_id: str, tool: Tool) -> Optional[Tuple[int, ToolUsage]]:
        """Charge ``tool.credit_cost`` to the account and record the use in one commit.

        Returns:
            The remaining balance and the usage record, or None when the
            balance does not cover the cost (nothing is written then).
        """
        result = await self.session.execute(
            update(User)
            .where(User.id == user_id, User.credit_balance >= tool.credit_cost)
            .values(credit_balance=User.credit_balance - tool.credit_cost)
            .execution_options(synchronize_session=False)
        )
        if not result.rowcount:
            return None
        usage = ToolUsage(user_id=user_id, tool_id=tool.id, credits=tool.credit_cost)
        self.session.add(usage)
        await self.session.commit()
        await self.session.refresh(usage)
        balance, _ = await self.balance_of(user_id)
        return balance, usage

    async def usage_history(self, user_id: str, page: int, limit: int) -> Tuple[List[Tuple[ToolUsage, Tool]], int]:
        """The account's tool uses, newest first, each with its tool."""
        count_stmt = select(func.count()).select_from(ToolUsage).where(ToolUsage.user_id == user_id)
        total = await self.session.execute(count_stmt)
        stmt = (
            select(ToolUsage, Tool)
            .join(Tool, Tool.id == ToolUsage.tool_id)
            .where(ToolUsage.user_id == user_id)
            .order_by(ToolUsage.used_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        rows = [(usage, tool) for usage, tool in (await self.session.execute(stmt)).all()]
        return rows, int(total.scalar_one())


class AppSettingRepository(BaseRepository[AppSetting]):
    """Key/value settings edited from the admin panel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AppSetting)

    async def as_dict(self) -> Dict[str, str]:
        rows = (await self.session.execute(select(AppSetting).order_by(AppSetting.key))).scalars().all()
        return {row.key: row.value for row in rows}

    async def upsert_many(self, values: Dict[str, str]) -> Dict[str, str]:
        """Insert or overwrite each key, then return every setting."""
        for key, value in values.items():
            setting = await self.session.get(AppSetting, key)
            if setting is None:
                self.session.add(AppSetting(key=key, value=value))
            else:
                setting.value = value
                self.session.add(setting)
        await self.session.commit()
        return await self.as_dict()
