"""Saved learning plan I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from .base import CamelModel

MAX_PLAN_WEEKS = 52


class PlanGenerateRequest(CamelModel):
    topic: str = Field(min_length=1)
    weeks: int = Field(default=4, ge=1, le=MAX_PLAN_WEEKS)

    @field_validator("topic")
    @classmethod
    def _strip_topic(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Topic is required")
        return value


class PlanResourceRead(CamelModel):
    id: str
    title: str
    type: str
    url: Optional[str] = None
    duration_text: Optional[str] = None
    is_completed: bool


class PlanPhaseRead(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    order_index: int
    is_completed: bool
    resources: List[PlanResourceRead] = Field(default_factory=list)


class LearningPlanRead(CamelModel):
    id: str
    topic: str
    duration_weeks: int
    created_at: datetime
    phases: List[PlanPhaseRead] = Field(default_factory=list)


class PlanEnvelope(CamelModel):
    """``plan`` is null until the user generates one."""

    plan: Optional[LearningPlanRead] = None


class ResourceToggled(CamelModel):
    resource: PlanResourceRead
    phase_completed: bool
