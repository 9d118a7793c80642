"""
Job Application Endpoints.

Applications are visible to the applicant, the employer owning the job and
admins. Employers move applications through the hiring pipeline; applicants
may only withdraw.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from studentos.core.database.entities import Job, JobApplication, User
from studentos.core.database.repositories import ApplicationRepository, JobRepository, UserRepository
from studentos.core.logging_config import get_logger
from studentos.core.models.domain import ApplicationStatus, UserRole
from studentos.core.models.io.applications import (
    ApplicationDetail,
    ApplicationPage,
    ApplicationRead,
    ApplicationStatusUpdate,
    EmployerApplication,
    JobSummary,
)
from studentos.core.models.io.base import Pagination
from studentos.core.models.io.jobs import JobRead
from studentos.server.core.constant import MAX_PAGE_LIMIT
from studentos.server.services.cards import applicant_summary, employer_card, read_with
from studentos.server.services.deps import CurrentUser, EmployerUser, SessionDep

logger = get_logger(__name__)

router = APIRouter()

JOB_APPLICATIONS_PAGE_LIMIT = 20


async def _owns_job(session, user: User, job: Job) -> bool:
    """Whether ``user`` administers the job: ADMIN, or the employer that posted it."""
    if user.role == UserRole.ADMIN.value:
        return True
    employer = await UserRepository(session).get_employer_profile(user.id)
    return employer is not None and employer.id == job.employer_id


async def _get_with_job_or_404(session, application_id: str) -> tuple[JobApplication, Job]:
    row = await ApplicationRepository(session).get_with_job(application_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
    return row


@router.get(
    "/job/{job_id}",
    response_model=ApplicationPage,
    summary="Applications for a Job",
    description="Applicants of one job, newest first. Only the employer that posted the job, or an admin.",
    responses={403: {"description": "Not the owner of the job"}, 404: {"description": "Job not found"}},
)
async def list_job_applications(
    job_id: str,
    user: EmployerUser,
    session: SessionDep,
    status_filter: Optional[ApplicationStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(JOB_APPLICATIONS_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> ApplicationPage:
    job = await JobRepository(session).get_by_id(job_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    if not await _owns_job(session, user, job):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    repository = ApplicationRepository(session)
    applications, total = await repository.list_for_job(
        job.id, page, limit, status=status_filter.value if status_filter else None
    )
    applicants = await repository.applicants([a.user_id for a in applications])
    summary = JobSummary.model_validate(job)
    return ApplicationPage(
        applications=[
            read_with(EmployerApplication, a, job=summary, applicant=applicant_summary(*applicants[a.user_id]))
            for a in applications
        ],
        pagination=Pagination.build(page, limit, total),
    )


@router.get(
    "/{application_id}",
    response_model=ApplicationDetail,
    summary="Get Application",
    description="An application with its job, employer and applicant profile.",
    responses={403: {"description": "Access denied"}, 404: {"description": "Application not found"}},
)
async def get_application(application_id: str, user: CurrentUser, session: SessionDep) -> ApplicationDetail:
    application, job = await _get_with_job_or_404(session, application_id)
    if application.user_id != user.id and not await _owns_job(session, user, job):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    applicants = await ApplicationRepository(session).applicants([application.user_id])
    employer = await JobRepository(session).get_employer(job)
    return read_with(
        ApplicationDetail,
        application,
        job=JobRead.model_validate(job),
        employer=employer_card(employer),
        applicant=applicant_summary(*applicants[application.user_id]),
    )


@router.patch(
    "/{application_id}/status",
    response_model=ApplicationRead,
    summary="Update Application Status",
    responses={403: {"description": "Not the owner of the job"}, 404: {"description": "Application not found"}},
)
async def update_application_status(
    application_id: str, body: ApplicationStatusUpdate, user: EmployerUser, session: SessionDep
) -> ApplicationRead:
    application, job = await _get_with_job_or_404(session, application_id)
    if not await _owns_job(session, user, job):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to update this application")

    application = await ApplicationRepository(session).update(application, body.model_dump(exclude_unset=True))
    logger.info(f"Application {application.id} moved to {application.status} by {user.id}")
    return ApplicationRead.model_validate(application)


@router.delete(
    "/{application_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Withdraw Application",
    description="The applicant withdraws; the application is kept with status WITHDRAWN.",
    responses={404: {"description": "Application not found"}},
)
async def withdraw_application(application_id: str, user: CurrentUser, session: SessionDep) -> Response:
    repository = ApplicationRepository(session)
    application = await repository.get_by_id(application_id)
    if application is None or application.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
    await repository.update(application, {"status": ApplicationStatus.WITHDRAWN.value})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
