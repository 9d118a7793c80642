"""
Employer Workspace Endpoints.

The caller's company profile, hiring counters and the applications received
across all of the company's jobs. Available to EMPLOYER and ADMIN accounts.
Applicants are notified in-app when the status of their application changes.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from studentos.core.database.entities import EmployerProfile
from studentos.core.database.repositories import (
    ApplicationRepository,
    EmployerProfileRepository,
    JobRepository,
    UserRepository,
)
from studentos.core.logging_config import get_logger
from studentos.core.models.domain import ApplicationStatus
from studentos.core.models.io.applications import (
    ApplicationPage,
    ApplicationRead,
    EmployerApplication,
    EmployerApplicationUpdate,
    JobSummary,
)
from studentos.core.models.io.base import Pagination
from studentos.core.models.io.profiles import (
    EmployerProfileRead,
    EmployerProfileUpdate,
    EmployerProfileWithJobs,
    EmployerStats,
)
from studentos.server.core.constant import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from studentos.server.services.cards import applicant_summary, read_with
from studentos.server.services.deps import EmployerUser, SessionDep
from studentos.server.services.notifications import notify

logger = get_logger(__name__)

router = APIRouter()

DEFAULT_COMPANY_NAME = "My Company"
VALID_APPLICATION_STATUSES = {s.value for s in ApplicationStatus}


@router.get(
    "/me",
    response_model=Optional[EmployerProfileWithJobs],
    summary="Get Company Profile",
    description="The caller's employer profile with its job count, or null when none exists yet.",
)
async def get_company_profile(user: EmployerUser, session: SessionDep) -> Optional[EmployerProfileWithJobs]:
    profile = await UserRepository(session).get_employer_profile(user.id)
    if profile is None:
        return None
    counts = await JobRepository(session).count_for_employers([profile.id])
    return read_with(EmployerProfileWithJobs, profile, job_count=counts.get(profile.id, 0))


@router.patch(
    "/me",
    response_model=EmployerProfileRead,
    summary="Upsert Company Profile",
    description="Create or update the caller's employer profile. Verification state is not writable here.",
)
async def upsert_company_profile(
    body: EmployerProfileUpdate, user: EmployerUser, session: SessionDep
) -> EmployerProfileRead:
    changes = body.model_dump(exclude_unset=True)
    repository = EmployerProfileRepository(session)
    profile = await UserRepository(session).get_employer_profile(user.id)

    if profile is None:
        changes["company_name"] = changes.get("company_name") or DEFAULT_COMPANY_NAME
        profile = await repository.create(EmployerProfile(user_id=user.id, **changes))
        logger.info(f"Created employer profile {profile.id} for user {user.id}")
    else:
        profile = await repository.update(profile, changes)
    return EmployerProfileRead.model_validate(profile)


@router.get(
    "/stats",
    response_model=EmployerStats,
    summary="Hiring Stats",
    description="Active jobs and applicant counters; all zero when the caller has no company profile.",
)
async def get_stats(user: EmployerUser, session: SessionDep) -> EmployerStats:
    profile = await UserRepository(session).get_employer_profile(user.id)
    if profile is None:
        return EmployerStats()
    counters = await ApplicationRepository(session).employer_stats(profile.id)
    active_jobs = await JobRepository(session).count_active_for_employer(profile.id)
    return EmployerStats(active_jobs=active_jobs, **counters)


@router.get(
    "/applications",
    response_model=ApplicationPage,
    summary="Received Applications",
    description="Applications to any of the caller's jobs, newest first.",
)
async def list_applications(
    user: EmployerUser,
    session: SessionDep,
    status_filter: Optional[ApplicationStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="Matches the applicant name or job title"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> ApplicationPage:
    profile = await UserRepository(session).get_employer_profile(user.id)
    if profile is None:
        return ApplicationPage(applications=[], pagination=Pagination.build(page, limit, 0))

    repository = ApplicationRepository(session)
    applications, total = await repository.list_for_employer(
        profile.id, page, limit, status=status_filter.value if status_filter else None, search=search
    )
    applicants = await repository.applicants([a.user_id for a in applications])
    jobs = await repository.jobs_for(applications)
    return ApplicationPage(
        applications=[
            read_with(
                EmployerApplication,
                a,
                job=JobSummary.model_validate(jobs[a.job_id]),
                applicant=applicant_summary(*applicants[a.user_id]),
            )
            for a in applications
        ],
        pagination=Pagination.build(page, limit, total),
    )


@router.patch(
    "/applications/{application_id}",
    response_model=ApplicationRead,
    summary="Update Received Application",
    description="Change the status or notes of an application to one of the caller's jobs.",
    responses={
        400: {"description": "Invalid status"},
        403: {"description": "Not the owner of the job"},
        404: {"description": "Application not found"},
    },
)
async def update_application(
    application_id: str, body: EmployerApplicationUpdate, user: EmployerUser, session: SessionDep
) -> ApplicationRead:
    if body.status is not None and body.status not in VALID_APPLICATION_STATUSES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid status")

    profile = await UserRepository(session).get_employer_profile(user.id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Employer profile not found")

    repository = ApplicationRepository(session)
    row = await repository.get_with_job(application_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
    application, job = row
    if job.employer_id != profile.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to update this application")

    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    previous_status = application.status
    application = await repository.update(application, changes)
    if application.status != previous_status:
        await notify(
            session,
            application.user_id,
            f"Application update: {job.title}",
            f"Your application status changed to {application.status}.",
            link="/applications",
        )
    return ApplicationRead.model_validate(application)
