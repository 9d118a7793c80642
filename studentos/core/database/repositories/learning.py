"""Saved learning plan repository."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities import LearningPlan, PlanPhase, PlanResource
from .base import BaseRepository

PhaseDraft = Tuple[PlanPhase, Sequence[PlanResource]]


class LearningPlanRepository(BaseRepository[LearningPlan]):
    """Repository for learning plans with their phases and resources."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, LearningPlan)

    async def latest(self, user_id: str) -> Optional[LearningPlan]:
        stmt = (
            select(LearningPlan)
            .where(LearningPlan.user_id == user_id)
            .order_by(LearningPlan.created_at.desc())
            .limit(1)
        )
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def phases_with_resources(self, plan_id: str) -> List[Tuple[PlanPhase, List[PlanResource]]]:
        """The plan's phases in order, each with its resources."""
        phases = (
            await self.session.execute(
                select(PlanPhase).where(PlanPhase.plan_id == plan_id).order_by(PlanPhase.order_index.asc())
            )
        ).scalars().all()
        resources: Dict[str, List[PlanResource]] = {phase.id: [] for phase in phases}
        if phases:
            stmt = (
                select(PlanResource)
                .where(PlanResource.phase_id.in_(list(resources)))
                .order_by(PlanResource.order_index)
            )
            for resource in (await self.session.execute(stmt)).scalars().all():
                resources[resource.phase_id].append(resource)
        return [(phase, resources[phase.id]) for phase in phases]

    async def _delete_plans(self, plan_ids) -> None:
        phase_ids = select(PlanPhase.id).where(PlanPhase.plan_id.in_(plan_ids))
        await self.session.execute(delete(PlanResource).where(PlanResource.phase_id.in_(phase_ids)))
        await self.session.execute(delete(PlanPhase).where(PlanPhase.plan_id.in_(plan_ids)))
        await self.session.execute(delete(LearningPlan).where(LearningPlan.id.in_(plan_ids)))

    async def replace(self, plan: LearningPlan, phases: Sequence[PhaseDraft]) -> LearningPlan:
        """Store ``plan`` as the user's only plan, removing any earlier one, in a single commit."""
        await self._delete_plans(select(LearningPlan.id).where(LearningPlan.user_id == plan.user_id))
        self.session.add(plan)
        for index, (phase, phase_resources) in enumerate(phases):
            phase.plan_id = plan.id
            phase.order_index = index
            self.session.add(phase)
            for position, resource in enumerate(phase_resources):
                resource.phase_id = phase.id
                resource.order_index = position
                self.session.add(resource)
        await self.session.commit()
        await self.session.refresh(plan)
        return plan

    async def delete_plan(self, plan: LearningPlan) -> None:
        await self._delete_plans([plan.id])
        await self.session.commit()

    async def get_owned_resource(self, resource_id: str, user_id: str) -> Optional[Tuple[PlanResource, PlanPhase]]:
        """The resource and its phase, if the resource sits in one of ``user_id``'s plans."""
        stmt = (
            select(PlanResource, PlanPhase)
            .join(PlanPhase, PlanPhase.id == PlanResource.phase_id)
            .join(LearningPlan, LearningPlan.id == PlanPhase.plan_id)
            .where(PlanResource.id == resource_id, LearningPlan.user_id == user_id)
        )
        row = (await self.session.execute(stmt)).first()
        return (row[0], row[1]) if row else None

    async def toggle_resource(self, resource: PlanResource, phase: PlanPhase) -> bool:
        """Flip the resource's completion and mark the phase complete exactly when all its resources are.

        Returns:
            Whether the phase is complete afterwards.
        """
        resource.is_completed = not resource.is_completed
        self.session.add(resource)
        await self.session.flush()
        siblings = (
            await self.session.execute(select(PlanResource.is_completed).where(PlanResource.phase_id == phase.id))
        ).scalars().all()
        phase.is_completed = all(siblings)
        self.session.add(phase)
        await self.session.commit()
        await self.session.refresh(resource)
        return phase.is_completed
