"""Habit progress calculations. Days are UTC calendar days."""

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from studentos.core.database import utc_now
from studentos.core.database.entities import HabitLog


def today_start(now: Optional[datetime] = None) -> datetime:
    """Midnight (UTC) of the current day."""
    now = now or utc_now()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def compute_streak(logs: Iterable[HabitLog], today: Optional[date] = None) -> int:
    """Count the run of completions reaching back from today.

    Logs are walked newest first. A log on the cursor day or the day before
    extends the streak and moves the cursor to its day; any larger gap ends it.
    """
    cursor = today or utc_now().date()
    streak = 0
    for log in sorted(logs, key=lambda item: item.completed_at, reverse=True):
        day = log.completed_at.date()
        if (cursor - day).days in (0, 1):
            streak += 1
            cursor = day
        else:
            break
    return streak


def completed_since(logs: Iterable[HabitLog], since: datetime) -> bool:
    return any(log.completed_at >= since for log in logs)


def week_ago(now: Optional[datetime] = None) -> datetime:
    return (now or utc_now()) - timedelta(days=7)
