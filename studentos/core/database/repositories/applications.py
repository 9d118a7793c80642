"""
Job application repository.

Applications are read by three audiences: the applicant, the employer owning
the job and admins. Queries here return applications together with the job
and applicant data each audience needs.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from studentos.core.models.domain import (
    CLOSED_APPLICATION_STATUSES,
    SHORTLISTED_APPLICATION_STATUSES,
    ApplicationStatus,
)

from ..entities import Job, JobApplication, StudentProfile, User
from .base import BaseRepository


class ApplicationRepository(BaseRepository[JobApplication]):
    """Repository for job applications."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, JobApplication)

    async def get_for_user(self, job_id: str, user_id: str) -> Optional[JobApplication]:
        stmt = select(JobApplication).where(JobApplication.job_id == job_id, JobApplication.user_id == user_id)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def get_with_job(self, application_id: str) -> Optional[tuple[JobApplication, Job]]:
        stmt = (
            select(JobApplication, Job)
            .join(Job, Job.id == JobApplication.job_id)
            .where(JobApplication.id == application_id)
        )
        row = (await self.session.execute(stmt)).first()
        return (row[0], row[1]) if row else None

    async def list_for_user(self, user_id: str, limit: Optional[int] = None) -> List[tuple[JobApplication, Job]]:
        """The user's applications with their job, most recent first."""
        stmt = (
            select(JobApplication, Job)
            .join(Job, Job.id == JobApplication.job_id)
            .where(JobApplication.user_id == user_id)
            .order_by(JobApplication.applied_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def list_for_job(
        self, job_id: str, page: int, limit: int, status: Optional[str] = None
    ) -> tuple[List[JobApplication], int]:
        stmt = select(JobApplication).where(JobApplication.job_id == job_id)
        if status:
            stmt = stmt.where(JobApplication.status == status)
        stmt = stmt.order_by(JobApplication.applied_at.desc())
        return await self.paginate(stmt, page, limit)

    async def list_for_employer(
        self,
        employer_id: str,
        page: int,
        limit: int,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> tuple[List[JobApplication], int]:
        """Applications to any of the employer's jobs, newest first.

        ``search`` matches the applicant's full name or the job title.
        """
        stmt = (
            select(JobApplication)
            .join(Job, Job.id == JobApplication.job_id)
            .outerjoin(StudentProfile, StudentProfile.user_id == JobApplication.user_id)
            .where(Job.employer_id == employer_id)
        )
        if status:
            stmt = stmt.where(JobApplication.status == status)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(StudentProfile.full_name.ilike(pattern), Job.title.ilike(pattern)))
        stmt = stmt.order_by(JobApplication.applied_at.desc())
        return await self.paginate(stmt, page, limit)

    async def applicants(self, user_ids: List[str]) -> dict[str, tuple[User, Optional[StudentProfile]]]:
        """Map of user id to (account, student profile) for a batch of applicants."""
        if not user_ids:
            return {}
        stmt = (
            select(User, StudentProfile)
            .outerjoin(StudentProfile, StudentProfile.user_id == User.id)
            .where(User.id.in_(set(user_ids)))
        )
        return {row[0].id: (row[0], row[1]) for row in (await self.session.execute(stmt)).all()}

    async def jobs_for(self, applications: List[JobApplication]) -> dict[str, Job]:
        job_ids = {application.job_id for application in applications}
        if not job_ids:
            return {}
        result = await self.session.execute(select(Job).where(Job.id.in_(job_ids)))
        return {job.id: job for job in result.scalars().all()}

    async def employer_stats(self, employer_id: str) -> dict[str, int]:
        """Applicant counters across every job of the employer."""
        on_own_jobs = JobApplication.job_id.in_(select(Job.id).where(Job.employer_id == employer_id))
        return {
            "total_applicants": await self.count_where(on_own_jobs),
            "new_applications": await self.count_where(
                on_own_jobs, JobApplication.status == ApplicationStatus.NEW.value
            ),
            "shortlisted": await self.count_where(
                on_own_jobs, JobApplication.status.in_(SHORTLISTED_APPLICATION_STATUSES)
            ),
        }

    async def count_open_for_user(self, user_id: str) -> int:
        """Applications of the user that are neither rejected nor withdrawn."""
        return await self.count_where(
            JobApplication.user_id == user_id, JobApplication.status.notin_(CLOSED_APPLICATION_STATUSES)
        )
