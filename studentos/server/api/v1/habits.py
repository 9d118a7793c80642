"""
Habit Tracker Endpoints.

Daily or weekly habits owned by the caller, with completion logs and streaks.
Habits belonging to other users are reported as missing.
"""

from datetime import timedelta
from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from studentos.core.database import utc_now
from studentos.core.database.entities import Habit
from studentos.core.database.repositories import HabitRepository
from studentos.core.models.io.habits import (
    HabitCreate,
    HabitLogCreate,
    HabitLogRead,
    HabitRead,
    HabitStats,
    HabitUpdate,
    HabitWithProgress,
)
from studentos.server.services.cards import read_with
from studentos.server.services.deps import CurrentUser, SessionDep
from studentos.server.services.habits import compute_streak, completed_since, today_start

router = APIRouter()

MAX_HABITS = 50
HISTORY_DAYS = 30
MAX_LOGS_PER_HABIT = 60


async def _get_owned_or_404(repository: HabitRepository, habit_id: str, user_id: str) -> Habit:
    habit = await repository.get_owned(habit_id, user_id)
    if habit is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Habit not found")
    return habit


@router.get(
    "",
    response_model=List[HabitWithProgress],
    summary="List Habits",
    description="Active habits, oldest first, each with the last 30 days of logs, today's completion and streak.",
)
async def list_habits(user: CurrentUser, session: SessionDep) -> List[HabitWithProgress]:
    repository = HabitRepository(session)
    habits = await repository.list_active(user.id, limit=MAX_HABITS)
    logs = await repository.logs_since(
        [h.id for h in habits], since=utc_now() - timedelta(days=HISTORY_DAYS), per_habit_limit=MAX_LOGS_PER_HABIT
    )
    start = today_start()
    return [
        read_with(
            HabitWithProgress,
            habit,
            logs=[HabitLogRead.model_validate(log) for log in logs[habit.id]],
            completed_today=completed_since(logs[habit.id], start),
            streak=compute_streak(logs[habit.id]),
        )
        for habit in habits
    ]


@router.get(
    "/stats",
    response_model=HabitStats,
    summary="Habit Stats",
    description="Totals over active habits. ``completionRate`` is the share of habits completed today.",
)
async def habit_stats(user: CurrentUser, session: SessionDep) -> HabitStats:
    repository = HabitRepository(session)
    habits = await repository.list_active(user.id)
    logs = await repository.logs_since([h.id for h in habits])
    start = today_start()

    completed_today = sum(1 for habit in habits if completed_since(logs[habit.id], start))
    longest_streak = max((compute_streak(logs[habit.id]) for habit in habits), default=0)
    return HabitStats(
        total_habits=len(habits),
        completed_today=completed_today,
        longest_streak=longest_streak,
        completion_rate=round(completed_today / len(habits) * 100) if habits else 0,
    )


@router.post("", response_model=HabitRead, status_code=status.HTTP_201_CREATED, summary="Create Habit")
async def create_habit(body: HabitCreate, user: CurrentUser, session: SessionDep) -> HabitRead:
    habit = await HabitRepository(session).create(Habit(user_id=user.id, **body.model_dump()))
    return HabitRead.model_validate(habit)


@router.patch(
    "/{habit_id}",
    response_model=HabitRead,
    summary="Update Habit",
    responses={404: {"description": "Habit not found"}},
)
async def update_habit(habit_id: str, body: HabitUpdate, user: CurrentUser, session: SessionDep) -> HabitRead:
    repository = HabitRepository(session)
    habit = await _get_owned_or_404(repository, habit_id, user.id)
    habit = await repository.update(habit, body.model_dump(exclude_unset=True))
    return HabitRead.model_validate(habit)


@router.delete(
    "/{habit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Archive Habit",
    description="Soft delete: the habit is deactivated and its logs are kept.",
    responses={404: {"description": "Habit not found"}},
)
async def delete_habit(habit_id: str, user: CurrentUser, session: SessionDep) -> Response:
    repository = HabitRepository(session)
    habit = await _get_owned_or_404(repository, habit_id, user.id)
    await repository.update(habit, {"is_active": False})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{habit_id}/log",
    response_model=HabitLogRead,
    status_code=status.HTTP_201_CREATED,
    summary="Log Completion",
    responses={404: {"description": "Habit not found"}, 409: {"description": "Already logged today"}},
)
async def log_habit(habit_id: str, body: HabitLogCreate, user: CurrentUser, session: SessionDep) -> HabitLogRead:
    repository = HabitRepository(session)
    await _get_owned_or_404(repository, habit_id, user.id)
    if await repository.get_log_since(habit_id, user.id, today_start()) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already logged today")
    log = await repository.add_log(habit_id, user.id, notes=body.notes)
    return HabitLogRead.model_validate(log)


@router.delete(
    "/{habit_id}/log",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Undo Today's Completion",
    responses={404: {"description": "Habit not found"}},
)
async def unlog_habit(habit_id: str, user: CurrentUser, session: SessionDep) -> Response:
    repository = HabitRepository(session)
    await _get_owned_or_404(repository, habit_id, user.id)
    await repository.delete_logs_since(habit_id, user.id, today_start())
    return Response(status_code=status.HTTP_204_NO_CONTENT)
