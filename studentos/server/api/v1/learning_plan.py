"""
Saved Learning Plan Endpoints.

A student keeps one learning plan: phases of resources they tick off as they
go. Generating a new plan replaces the old one. The plan comes from the AI
planner when it is configured and answers, otherwise from a template.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from studentos.core.database.entities import LearningPlan
from studentos.core.database.repositories import LearningPlanRepository, UserRepository
from studentos.core.logging_config import get_logger
from studentos.core.models.io.learning import (
    LearningPlanRead,
    PlanEnvelope,
    PlanGenerateRequest,
    PlanPhaseRead,
    PlanResourceRead,
    ResourceToggled,
)
from studentos.server.services.ai import AIService, get_optional_ai_service
from studentos.server.services.cards import read_with
from studentos.server.services.deps import CurrentUser, SessionDep
from studentos.server.services.learning import build_phases

logger = get_logger(__name__)

router = APIRouter()

OptionalAIServiceDep = Annotated[Optional[AIService], Depends(get_optional_ai_service)]


async def _plan_read(session: AsyncSession, plan: LearningPlan) -> LearningPlanRead:
    phases = await LearningPlanRepository(session).phases_with_resources(plan.id)
    return read_with(
        LearningPlanRead,
        plan,
        phases=[
            read_with(PlanPhaseRead, phase, resources=[PlanResourceRead.model_validate(r) for r in resources])
            for phase, resources in phases
        ],
    )


@router.get(
    "",
    response_model=PlanEnvelope,
    summary="Current Plan",
    description="The caller's learning plan with its phases and resources, or null when there is none.",
)
async def get_plan(user: CurrentUser, session: SessionDep) -> PlanEnvelope:
    plan = await LearningPlanRepository(session).latest(user.id)
    return PlanEnvelope(plan=await _plan_read(session, plan) if plan else None)


@router.post(
    "/generate",
    response_model=PlanEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Generate Plan",
    description="Build a plan for a topic from the caller's skills and save it in place of any earlier plan.",
)
async def generate_plan(
    body: PlanGenerateRequest, user: CurrentUser, session: SessionDep, ai: OptionalAIServiceDep
) -> PlanEnvelope:
    profile = await UserRepository(session).get_student_profile(user.id)
    skills = profile.skills if profile else []
    phases = await build_phases(ai, body.topic, body.weeks, skills)
    plan = await LearningPlanRepository(session).replace(
        LearningPlan(user_id=user.id, topic=body.topic, duration_weeks=body.weeks), phases
    )
    logger.info(f"Saved a {len(phases)}-phase learning plan on {body.topic!r} for user {user.id}")
    return PlanEnvelope(plan=await _plan_read(session, plan))


@router.patch(
    "/resources/{resource_id}/toggle",
    response_model=ResourceToggled,
    summary="Toggle Resource",
    description="Mark a resource done or not done. A phase is complete exactly when all of its resources are.",
    responses={404: {"description": "Resource not found"}},
)
async def toggle_resource(resource_id: str, user: CurrentUser, session: SessionDep) -> ResourceToggled:
    repository = LearningPlanRepository(session)
    row = await repository.get_owned_resource(resource_id, user.id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resource not found")
    resource, phase = row
    phase_completed = await repository.toggle_resource(resource, phase)
    return ResourceToggled(resource=PlanResourceRead.model_validate(resource), phase_completed=phase_completed)


@router.delete(
    "/{plan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Plan",
    responses={404: {"description": "Plan not found"}},
)
async def delete_plan(plan_id: str, user: CurrentUser, session: SessionDep) -> Response:
    repository = LearningPlanRepository(session)
    plan = await repository.get_by_id(plan_id)
    if plan is None or plan.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found")
    await repository.delete_plan(plan)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
