"""
Job Board Endpoints.

Public job search for students (bookmarks, applications) and job management
for employers. Admins may manage any job.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from studentos.core.database.entities import EmployerProfile, Job, JobApplication, User
from studentos.core.database.repositories import ApplicationRepository, JobRepository, UserRepository
from studentos.core.logging_config import get_logger
from studentos.core.models.domain import JobStatus, LocationType, UserRole, VerificationStatus
from studentos.core.models.io.applications import ApplicationWithJob, JobSummary, MyApplication
from studentos.core.models.io.base import Pagination
from studentos.core.models.io.jobs import (
    ApplyRequest,
    JobCreate,
    JobDetail,
    JobListItem,
    JobPage,
    JobRead,
    JobUpdate,
    OwnApplication,
    SavedJobRead,
)
from studentos.server.core.constant import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from studentos.server.services.cards import employer_card, read_with
from studentos.server.services.deps import CurrentUser, EmployerUser, OptionalUser, SessionDep

logger = get_logger(__name__)

router = APIRouter()


async def _get_job_or_404(repository: JobRepository, job_id: str) -> Job:
    job = await repository.get_by_id(job_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return job


async def _managed_job(session, user: User, job_id: str, action: str) -> Job:
    """Job that ``user`` may change: admins manage any job, employers only their own."""
    repository = JobRepository(session)
    if user.role == UserRole.ADMIN.value:
        return await _get_job_or_404(repository, job_id)

    employer = await UserRepository(session).get_employer_profile(user.id)
    if employer is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Employer profile required")
    job = await _get_job_or_404(repository, job_id)
    if job.employer_id != employer.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Not authorized to {action} this job")
    return job


@router.get(
    "",
    response_model=JobPage,
    summary="Search Jobs",
    description="Active jobs, newest first, with filters and pagination.",
)
async def list_jobs(
    session: SessionDep,
    user: OptionalUser,
    search: Optional[str] = Query(None, description="Case-insensitive match on title, company or location"),
    location_type: Optional[LocationType] = Query(None, alias="locationType"),
    department: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    max_salary: Optional[int] = Query(None, alias="maxSalary", ge=0),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> JobPage:
    """
    Search active jobs.

    Each item carries its employer card and applicant count; authenticated
    callers also see whether they saved or applied to it.
    """
    repository = JobRepository(session)
    jobs, total = await repository.list_active(
        page,
        limit,
        search=search,
        location_type=location_type.value if location_type else None,
        department=department,
        min_salary=min_salary,
        max_salary=max_salary,
    )
    job_ids = [job.id for job in jobs]
    employers = await repository.employers_for(jobs)
    counts = await repository.applicant_counts(job_ids)
    saved = await repository.saved_ids(user.id, job_ids) if user else set()
    applied = await repository.applied_ids(user.id, job_ids) if user else set()

    return JobPage(
        jobs=[
            read_with(
                JobListItem,
                job,
                employer=employer_card(employers.get(job.employer_id)),
                applicant_count=counts.get(job.id, 0),
                is_saved=job.id in saved,
                has_applied=job.id in applied,
            )
            for job in jobs
        ],
        pagination=Pagination.build(page, limit, total),
    )


@router.get(
    "/saved/list",
    response_model=List[JobListItem],
    summary="Saved Jobs",
    description="The caller's bookmarked jobs, most recently saved first.",
)
async def list_saved_jobs(user: CurrentUser, session: SessionDep) -> List[JobListItem]:
    repository = JobRepository(session)
    rows = await repository.list_saved(user.id)
    employers = await repository.employers_for(job for job, _ in rows)
    return [
        read_with(
            JobListItem,
            job,
            employer=employer_card(employers.get(job.employer_id)),
            is_saved=True,
            saved_at=saved_at,
        )
        for job, saved_at in rows
    ]


@router.get(
    "/applications/list",
    response_model=List[MyApplication],
    summary="My Applications",
    description="Every application of the caller with its job and employer, newest first.",
)
async def list_my_applications(user: CurrentUser, session: SessionDep) -> List[MyApplication]:
    rows = await ApplicationRepository(session).list_for_user(user.id)
    employers = await JobRepository(session).employers_for(job for _, job in rows)
    return [
        read_with(
            MyApplication,
            application,
            job=JobRead.model_validate(job),
            employer=employer_card(employers.get(job.employer_id)),
        )
        for application, job in rows
    ]


@router.get(
    "/employer/list",
    response_model=List[JobListItem],
    summary="Employer Jobs",
    description="Jobs posted by the caller's company, in any status, with applicant counts.",
)
async def list_employer_jobs(user: EmployerUser, session: SessionDep) -> List[JobListItem]:
    employer = await UserRepository(session).get_employer_profile(user.id)
    if employer is None:
        return []
    repository = JobRepository(session)
    jobs = await repository.list_for_employer(employer.id)
    counts = await repository.applicant_counts(job.id for job in jobs)
    card = employer_card(employer)
    return [read_with(JobListItem, job, employer=card, applicant_count=counts.get(job.id, 0)) for job in jobs]


@router.post(
    "",
    response_model=JobRead,
    status_code=status.HTTP_201_CREATED,
    summary="Post Job",
    description="Post a job for the caller's company. The company must be verified unless the caller is an admin.",
    responses={
        400: {"description": "Employer profile required"},
        403: {"description": "Employer not verified"},
    },
)
async def create_job(body: JobCreate, user: EmployerUser, session: SessionDep) -> JobRead:
    employer: Optional[EmployerProfile] = await UserRepository(session).get_employer_profile(user.id)
    if employer is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Employer profile required")
    if user.role != UserRole.ADMIN.value and employer.verification_status != VerificationStatus.VERIFIED.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your company must be verified before posting jobs",
        )

    data = body.model_dump()
    data["company"] = body.company or employer.company_name
    job = await JobRepository(session).create(Job(employer_id=employer.id, **data))
    logger.info(f"Employer {employer.id} posted job {job.id}")
    return JobRead.model_validate(job)


@router.get(
    "/{job_id}",
    response_model=JobDetail,
    summary="Get Job",
    responses={404: {"description": "Job not found"}},
)
async def get_job(job_id: str, session: SessionDep, user: OptionalUser) -> JobDetail:
    """A job with its employer, plus the caller's bookmark and application if any."""
    repository = JobRepository(session)
    job = await _get_job_or_404(repository, job_id)
    employer = await repository.get_employer(job)

    is_saved = False
    application: Optional[JobApplication] = None
    if user:
        is_saved = await repository.get_saved(user.id, job.id) is not None
        application = await ApplicationRepository(session).get_for_user(job.id, user.id)

    return read_with(
        JobDetail,
        job,
        employer=employer_card(employer),
        applicant_count=(await repository.applicant_counts([job.id])).get(job.id, 0),
        is_saved=is_saved,
        has_applied=application is not None,
        application=OwnApplication.model_validate(application) if application else None,
    )


@router.post(
    "/{job_id}/apply",
    response_model=ApplicationWithJob,
    status_code=status.HTTP_201_CREATED,
    summary="Apply to Job",
    responses={
        404: {"description": "Job not found or not accepting applications"},
        409: {"description": "Already applied"},
    },
)
async def apply_to_job(job_id: str, body: ApplyRequest, user: CurrentUser, session: SessionDep) -> ApplicationWithJob:
    job = await JobRepository(session).get_by_id(job_id)
    if job is None or job.status != JobStatus.ACTIVE.value:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")

    applications = ApplicationRepository(session)
    if await applications.get_for_user(job.id, user.id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already applied")

    application = await applications.create(JobApplication(job_id=job.id, user_id=user.id, **body.model_dump()))
    logger.info(f"User {user.id} applied to job {job.id}")
    return read_with(ApplicationWithJob, application, job=JobSummary.model_validate(job))


@router.post(
    "/{job_id}/save",
    response_model=SavedJobRead,
    status_code=status.HTTP_201_CREATED,
    summary="Save Job",
    responses={404: {"description": "Job not found"}, 409: {"description": "Already saved"}},
)
async def save_job(job_id: str, user: CurrentUser, session: SessionDep) -> SavedJobRead:
    repository = JobRepository(session)
    await _get_job_or_404(repository, job_id)
    if await repository.get_saved(user.id, job_id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already saved")
    return SavedJobRead.model_validate(await repository.save_for_user(user.id, job_id))


@router.delete(
    "/{job_id}/save",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unsave Job",
    responses={404: {"description": "Job not saved"}},
)
async def unsave_job(job_id: str, user: CurrentUser, session: SessionDep) -> Response:
    repository = JobRepository(session)
    saved = await repository.get_saved(user.id, job_id)
    if saved is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not saved")
    await repository.unsave_for_user(saved)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{job_id}",
    response_model=JobRead,
    summary="Update Job",
    responses={
        400: {"description": "Employer profile required"},
        403: {"description": "Not the owner of the job"},
        404: {"description": "Job not found"},
    },
)
async def update_job(job_id: str, body: JobUpdate, user: EmployerUser, session: SessionDep) -> JobRead:
    job = await _managed_job(session, user, job_id, "update")
    changes = body.model_dump(exclude_unset=True)
    salary_min = changes.get("salary_min", job.salary_min)
    salary_max = changes.get("salary_max", job.salary_max)
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="salaryMin must not exceed salaryMax")
    job = await JobRepository(session).update(job, changes)
    return JobRead.model_validate(job)


@router.delete(
    "/{job_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Job",
    responses={
        400: {"description": "Employer profile required"},
        403: {"description": "Not the owner of the job"},
        404: {"description": "Job not found"},
    },
)
async def delete_job(job_id: str, user: EmployerUser, session: SessionDep) -> Response:
    job = await _managed_job(session, user, job_id, "delete")
    await JobRepository(session).delete_cascade(job)
    logger.info(f"Job {job_id} deleted by {user.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
