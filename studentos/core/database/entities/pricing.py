"""Pricing plan and subscription entity models."""

from __future__ import annotations

from datetime import datetime
from typing import List

from sqlalchemy import JSON, Column
from sqlmodel import Field

from studentos.core.models.domain import PlanInterval, SubscriptionStatus

from ..base import Base, UTCDateTime, new_id, utc_now


class PricingPlan(Base, table=True):
    """Table: pricing_plans"""

    __tablename__ = "pricing_plans"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    price: float = Field(default=0.0)
    interval: str = Field(default=PlanInterval.MONTHLY.value)
    features: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    is_active: bool = Field(default=True)
    is_popular: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)


class Subscription(Base, table=True):
    """Table: subscriptions"""

    __tablename__ = "subscriptions"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    plan_id: str = Field(foreign_key="pricing_plans.id", index=True, ondelete="CASCADE")
    status: str = Field(default=SubscriptionStatus.ACTIVE.value, index=True)
    started_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
