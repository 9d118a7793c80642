"""Habit tracker I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from studentos.core.models.domain import HabitFrequency

from .base import CamelModel


class HabitCreate(CamelModel):
    title: str = Field(min_length=1)
    icon: Optional[str] = None
    color: Optional[str] = None
    frequency: HabitFrequency = HabitFrequency.daily


class HabitUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    icon: Optional[str] = None
    color: Optional[str] = None
    frequency: Optional[HabitFrequency] = None


class HabitLogCreate(CamelModel):
    notes: Optional[str] = None


class HabitLogRead(CamelModel):
    id: str
    habit_id: str
    user_id: str
    notes: Optional[str] = None
    completed_at: datetime


class HabitRead(CamelModel):
    id: str
    user_id: str
    title: str
    icon: Optional[str] = None
    color: Optional[str] = None
    frequency: str
    is_active: bool
    created_at: datetime


class HabitWithProgress(HabitRead):
    logs: List[HabitLogRead] = Field(default_factory=list)
    completed_today: bool = False
    streak: int = 0


class HabitStats(CamelModel):
    total_habits: int
    completed_today: int
    longest_streak: int
    completion_rate: int
