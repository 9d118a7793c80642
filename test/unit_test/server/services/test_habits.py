"""Unit tests for habit streak and progress helpers."""

from datetime import date, datetime, timezone

from studentos.core.database.entities import HabitLog
from studentos.server.services.habits import compute_streak, completed_since, today_start, week_ago

TODAY = date(2026, 3, 10)


def _log(day: int, hour: int = 9) -> HabitLog:
    return HabitLog(habit_id="h", user_id="u", completed_at=datetime(2026, 3, day, hour, tzinfo=timezone.utc))


class TestComputeStreak:
    def test_no_logs(self):
        assert compute_streak([], TODAY) == 0

    def test_consecutive_days_ending_today(self):
        assert compute_streak([_log(8), _log(10), _log(9)], TODAY) == 3

    def test_streak_ending_yesterday_still_counts(self):
        assert compute_streak([_log(9), _log(8)], TODAY) == 2

    def test_gap_before_yesterday_breaks(self):
        assert compute_streak([_log(8), _log(7)], TODAY) == 0

    def test_gap_in_history_stops_count(self):
        assert compute_streak([_log(10), _log(9), _log(6), _log(5)], TODAY) == 2

    def test_several_logs_on_one_day_each_count(self):
        assert compute_streak([_log(10, 8), _log(10, 18), _log(9)], TODAY) == 3


def test_completed_since():
    logs = [_log(9, 23)]
    assert completed_since(logs, datetime(2026, 3, 9, tzinfo=timezone.utc)) is True
    assert completed_since(logs, datetime(2026, 3, 10, tzinfo=timezone.utc)) is False


def test_today_start_and_week_ago():
    now = datetime(2026, 3, 10, 15, 30, 12, 999, tzinfo=timezone.utc)
    assert today_start(now) == datetime(2026, 3, 10, tzinfo=timezone.utc)
    assert week_ago(now) == datetime(2026, 3, 3, 15, 30, 12, 999, tzinfo=timezone.utc)
