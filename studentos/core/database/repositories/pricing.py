"""Pricing plan and subscription repository."""

from __future__ import annotations

from typing import List

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from studentos.core.models.domain import SubscriptionStatus

from ..entities import PricingPlan, Subscription
from .base import BaseRepository


class PricingPlanRepository(BaseRepository[PricingPlan]):
    """Repository for pricing plans."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PricingPlan)

    async def list_with_subscription_counts(self) -> List[tuple[PricingPlan, int]]:
        """All plans, cheapest first, with their number of subscriptions."""
        counts = (
            select(Subscription.plan_id, func.count().label("subscription_count"))
            .group_by(Subscription.plan_id)
            .subquery()
        )
        stmt = (
            select(PricingPlan, func.coalesce(counts.c.subscription_count, 0))
            .outerjoin(counts, counts.c.plan_id == PricingPlan.id)
            .order_by(PricingPlan.price.asc())
        )
        return [(row[0], int(row[1])) for row in (await self.session.execute(stmt)).all()]

    async def count_active_subscriptions(self) -> int:
        stmt = select(func.count()).select_from(Subscription).where(
            Subscription.status == SubscriptionStatus.ACTIVE.value
        )
        return int((await self.session.execute(stmt)).scalar_one())

    async def delete_cascade(self, plan: PricingPlan) -> None:
        await self.session.execute(delete(Subscription).where(Subscription.plan_id == plan.id))
        await self.session.delete(plan)
        await self.session.commit()
