"""
Finance tracker repository.

Every query is scoped to one user; rows owned by someone else are treated as
missing.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from studentos.core.models.domain import TransactionType

from ..entities import Budget, FinanceCategory, Transaction
from .base import BaseRepository


class FinanceRepository(BaseRepository[Transaction]):
    """Repository for transactions, finance categories and budgets."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Transaction)

    async def get_transaction(self, transaction_id: str, user_id: str) -> Optional[Transaction]:
        stmt = select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def list_transactions(self, user_id: str, limit: Optional[int] = None) -> List[Transaction]:
        """Newest first by transaction date."""
        stmt = (
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.date.desc(), Transaction.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list((await self.session.execute(stmt)).scalars().all())

    async def delete_transaction(self, transaction: Transaction) -> None:
        await self.session.delete(transaction)
        await self.session.commit()

    async def total(
        self,
        user_id: str,
        kind: TransactionType,
        start: datetime,
        end: datetime,
        category_id: Optional[str] = None,
    ) -> float:
        """Sum of ``kind`` amounts dated in ``[start, end)``."""
        stmt = select(func.coalesce(func.sum(Transaction.amount), 0.0)).where(
            Transaction.user_id == user_id,
            Transaction.type == kind.value,
            Transaction.date >= start,
            Transaction.date < end,
        )
        if category_id is not None:
            stmt = stmt.where(Transaction.category_id == category_id)
        return float((await self.session.execute(stmt)).scalar_one())

    async def get_category(self, category_id: str, user_id: str) -> Optional[FinanceCategory]:
        stmt = select(FinanceCategory).where(FinanceCategory.id == category_id, FinanceCategory.user_id == user_id)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def list_categories(self, user_id: str) -> List[FinanceCategory]:
        stmt = select(FinanceCategory).where(FinanceCategory.user_id == user_id).order_by(FinanceCategory.name.asc())
        return list((await self.session.execute(stmt)).scalars().all())

    async def categories_by_id(self, category_ids: List[Optional[str]]) -> Dict[str, FinanceCategory]:
        ids = {category_id for category_id in category_ids if category_id}
        if not ids:
            return {}
        result = await self.session.execute(select(FinanceCategory).where(FinanceCategory.id.in_(ids)))
        return {category.id: category for category in result.scalars().all()}

    async def list_budgets(self, user_id: str) -> List[Budget]:
        stmt = select(Budget).where(Budget.user_id == user_id).order_by(Budget.created_at.asc())
        return list((await self.session.execute(stmt)).scalars().all())

    async def upsert_budget(self, user_id: str, category_id: str, period: str, amount: float) -> Budget:
        """Set the cap for (category, period), creating the budget on first use."""
        stmt = select(Budget).where(
            Budget.user_id == user_id, Budget.category_id == category_id, Budget.period == period
        )
        budget = (await self.session.execute(stmt)).scalar_one_or_none()
        if budget is None:
            budget = Budget(user_id=user_id, category_id=category_id, period=period, amount=amount)
        else:
            budget.amount = amount
        return await self.create(budget)
