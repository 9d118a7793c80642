"""Budget periods for the finance tracker. Periods are UTC calendar months or years."""

from datetime import datetime
from typing import Optional, Tuple

from studentos.core.database import utc_now
from studentos.core.models.domain import BudgetPeriod


def month_window(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Start of the current month and start of the next one."""
    now = now or utc_now()
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        return start, start.replace(year=start.year + 1, month=1)
    return start, start.replace(month=start.month + 1)


def year_window(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    now = now or utc_now()
    start = now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    return start, start.replace(year=start.year + 1)


def period_window(period: str, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    if period == BudgetPeriod.yearly.value:
        return year_window(now)
    return month_window(now)
