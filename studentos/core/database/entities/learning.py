"""
Saved learning plan entity models.

A plan is split into ordered phases, each holding a few study resources the
student ticks off. A user keeps at most one plan; generating a new one
replaces it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from studentos.core.models.domain import ResourceType

from ..base import Base, UTCDateTime, new_id, utc_now


class LearningPlan(Base, table=True):
    """Table: learning_plans"""

    __tablename__ = "learning_plans"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    topic: str
    duration_weeks: int = Field(default=4)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)


class PlanPhase(Base, table=True):
    """Table: plan_phases"""

    __tablename__ = "plan_phases"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    plan_id: str = Field(foreign_key="learning_plans.id", index=True, ondelete="CASCADE")
    title: str
    description: Optional[str] = Field(default=None)
    order_index: int = Field(default=0)
    is_completed: bool = Field(default=False)


class PlanResource(Base, table=True):
    """Table: plan_resources"""

    __tablename__ = "plan_resources"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    phase_id: str = Field(foreign_key="plan_phases.id", index=True, ondelete="CASCADE")
    title: str
    type: str = Field(default=ResourceType.ARTICLE.value)
    url: Optional[str] = Field(default=None)
    duration_text: Optional[str] = Field(default=None)
    order_index: int = Field(default=0)
    is_completed: bool = Field(default=False)
