"""Student dashboard I/O models."""

from __future__ import annotations

from typing import List, Optional

from .applications import ApplicationWithJob
from .base import CamelModel
from .profiles import StudentProfileRead


class DashboardHabit(CamelModel):
    id: str
    title: str
    icon: Optional[str] = None
    color: Optional[str] = None
    completed_today: bool
    weekly_count: int


class DashboardStats(CamelModel):
    active_applications: int
    ats_score: int
    habits_completed_today: int
    profile_completion: int


class DashboardResponse(CamelModel):
    profile: Optional[StudentProfileRead] = None
    recent_applications: List[ApplicationWithJob]
    habits: List[DashboardHabit]
    stats: DashboardStats
