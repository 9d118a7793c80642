"""Habit tracker entity models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from studentos.core.models.domain import HabitFrequency

from ..base import Base, UTCDateTime, new_id, utc_now


class Habit(Base, table=True):
    """Tracked habit. Deleting a habit only deactivates it.

    Table: habits
    """

    __tablename__ = "habits"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    title: str
    icon: Optional[str] = Field(default=None)
    color: Optional[str] = Field(default=None)
    frequency: str = Field(default=HabitFrequency.daily.value)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)


class HabitLog(Base, table=True):
    """One completion of a habit.

    Table: habit_logs
    """

    __tablename__ = "habit_logs"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    habit_id: str = Field(foreign_key="habits.id", index=True, ondelete="CASCADE")
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    notes: Optional[str] = Field(default=None)
    completed_at: datetime = Field(default_factory=utc_now, index=True, sa_type=UTCDateTime)
