"""
User Profile Endpoints.

The caller's own profile and the student dashboard.
"""

from fastapi import APIRouter, HTTPException, status

from studentos.core.database.repositories import ApplicationRepository, HabitRepository, UserRepository
from studentos.core.models.io.applications import ApplicationWithJob, JobSummary
from studentos.core.models.io.dashboard import DashboardHabit, DashboardResponse, DashboardStats
from studentos.core.models.io.profiles import ProfileRead, StudentProfileRead, StudentProfileUpdate
from studentos.server.services.auth import profile_completion, profile_read
from studentos.server.services.cards import read_with
from studentos.server.services.deps import CurrentUser, SessionDep
from studentos.server.services.habits import completed_since, today_start, week_ago

router = APIRouter()

RECENT_APPLICATIONS = 5


@router.get(
    "/profile",
    response_model=ProfileRead,
    summary="Get Profile",
    description="The caller's student profile, or employer profile for employer accounts.",
    responses={404: {"description": "Profile not found"}},
)
async def get_profile(user: CurrentUser, session: SessionDep):
    profile = await UserRepository(session).get_profile(user.id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile_read(profile)


@router.patch(
    "/profile",
    response_model=StudentProfileRead,
    summary="Update Profile",
    description="Partially update the caller's student profile and recompute its completion.",
    responses={404: {"description": "Profile not found"}},
)
async def update_profile(body: StudentProfileUpdate, user: CurrentUser, session: SessionDep) -> StudentProfileRead:
    """
    Update the caller's student profile.

    Only the fields present in the body change. ``profileCompletion`` is the
    share of the nine tracked profile fields that are filled in.
    """
    users = UserRepository(session)
    profile = await users.get_student_profile(user.id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")

    for key, value in body.model_dump(exclude_unset=True).items():
        setattr(profile, key, value)
    profile.profile_completion = profile_completion(profile)
    profile = await users.save_profile(profile)
    return StudentProfileRead.model_validate(profile)


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Student Dashboard",
    description="Profile, recent applications, this week's habit progress and headline stats.",
)
async def dashboard(user: CurrentUser, session: SessionDep) -> DashboardResponse:
    profile = await UserRepository(session).get_student_profile(user.id)
    applications = ApplicationRepository(session)
    habits = HabitRepository(session)

    recent = await applications.list_for_user(user.id, limit=RECENT_APPLICATIONS)
    start_of_today = today_start()
    active_habits = await habits.list_active(user.id)
    weekly_logs = await habits.logs_since([habit.id for habit in active_habits], since=week_ago())

    return DashboardResponse(
        profile=StudentProfileRead.model_validate(profile) if profile else None,
        recent_applications=[
            read_with(ApplicationWithJob, application, job=JobSummary.model_validate(job))
            for application, job in recent
        ],
        habits=[
            DashboardHabit(
                id=habit.id,
                title=habit.title,
                icon=habit.icon,
                color=habit.color,
                completed_today=completed_since(weekly_logs[habit.id], start_of_today),
                weekly_count=len(weekly_logs[habit.id]),
            )
            for habit in active_habits
        ],
        stats=DashboardStats(
            active_applications=await applications.count_open_for_user(user.id),
            ats_score=(profile.ats_score or 0) if profile else 0,
            habits_completed_today=await habits.count_user_logs_since(user.id, start_of_today),
            profile_completion=profile.profile_completion if profile else 0,
        ),
    )
