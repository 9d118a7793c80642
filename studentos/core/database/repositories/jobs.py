"""
Job board repository.

Listing and lookup of job postings with their employer, per-user bookmarks,
and the employer's own postings.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from studentos.core.models.domain import JobStatus

from ..entities import EmployerProfile, Job, JobApplication, SavedJob
from .base import BaseRepository, QueryBuilder


class JobRepository(BaseRepository[Job]):
    """Repository for job postings and saved jobs."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Job)

    async def list_active(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
        location_type: Optional[str] = None,
        department: Optional[str] = None,
        min_salary: Optional[int] = None,
        max_salary: Optional[int] = None,
    ) -> tuple[List[Job], int]:
        """Active postings, newest first."""
        stmt = select(Job).where(Job.status == JobStatus.ACTIVE.value)
        stmt = QueryBuilder.apply_filters(stmt, Job, {"location_type": location_type, "department": department})
        if min_salary is not None:
            stmt = stmt.where(Job.salary_min >= min_salary)
        if max_salary is not None:
            stmt = stmt.where(Job.salary_max <= max_salary)
        stmt = QueryBuilder.apply_search(stmt, [Job.title, Job.company, Job.location], search)
        stmt = stmt.order_by(Job.posted_at.desc())
        return await self.paginate(stmt, page, limit)

    async def list_for_employer(self, employer_id: str) -> List[Job]:
        stmt = select(Job).where(Job.employer_id == employer_id).order_by(Job.posted_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def employers_for(self, jobs: Iterable[Job]) -> dict[str, EmployerProfile]:
        """Map of employer profile id to profile for the given jobs."""
        employer_ids = {job.employer_id for job in jobs}
        if not employer_ids:
            return {}
        result = await self.session.execute(select(EmployerProfile).where(EmployerProfile.id.in_(employer_ids)))
        return {profile.id: profile for profile in result.scalars().all()}

    async def get_employer(self, job: Job) -> Optional[EmployerProfile]:
        return await self.session.get(EmployerProfile, job.employer_id)

    async def applicant_counts(self, job_ids: Iterable[str]) -> dict[str, int]:
        ids = list(job_ids)
        if not ids:
            return {}
        stmt = (
            select(JobApplication.job_id, func.count())
            .where(JobApplication.job_id.in_(ids))
            .group_by(JobApplication.job_id)
        )
        result = await self.session.execute(stmt)
        return {job_id: int(count) for job_id, count in result.all()}

    async def saved_ids(self, user_id: str, job_ids: Iterable[str]) -> set[str]:
        ids = list(job_ids)
        if not ids:
            return set()
        stmt = select(SavedJob.job_id).where(SavedJob.user_id == user_id, SavedJob.job_id.in_(ids))
        return set((await self.session.execute(stmt)).scalars().all())

    async def applied_ids(self, user_id: str, job_ids: Iterable[str]) -> set[str]:
        ids = list(job_ids)
        if not ids:
            return set()
        stmt = select(JobApplication.job_id).where(JobApplication.user_id == user_id, JobApplication.job_id.in_(ids))
        return set((await self.session.execute(stmt)).scalars().all())

    async def get_saved(self, user_id: str, job_id: str) -> Optional[SavedJob]:
        stmt = select(SavedJob).where(SavedJob.user_id == user_id, SavedJob.job_id == job_id)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def save_for_user(self, user_id: str, job_id: str) -> SavedJob:
        saved = SavedJob(user_id=user_id, job_id=job_id)
        self.session.add(saved)
        await self.session.commit()
        await self.session.refresh(saved)
        return saved

    async def unsave_for_user(self, saved: SavedJob) -> None:
        await self.session.delete(saved)
        await self.session.commit()

    async def list_saved(self, user_id: str) -> List[tuple[Job, datetime]]:
        stmt = (
            select(Job, SavedJob.saved_at)
            .join(SavedJob, SavedJob.job_id == Job.id)
            .where(SavedJob.user_id == user_id)
            .order_by(SavedJob.saved_at.desc())
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def count_active_for_employer(self, employer_id: str) -> int:
        return await self.count_where(Job.employer_id == employer_id, Job.status == JobStatus.ACTIVE.value)

    async def count_for_employers(self, employer_ids: Iterable[str]) -> dict[str, int]:
        ids = list(employer_ids)
        if not ids:
            return {}
        stmt = select(Job.employer_id, func.count()).where(Job.employer_id.in_(ids)).group_by(Job.employer_id)
        return {employer_id: int(count) for employer_id, count in (await self.session.execute(stmt)).all()}

    async def delete_cascade(self, job: Job) -> None:
        await self.session.execute(delete(JobApplication).where(JobApplication.job_id == job.id))
        await self.session.execute(delete(SavedJob).where(SavedJob.job_id == job.id))
        await self.session.delete(job)
        await self.session.commit()
