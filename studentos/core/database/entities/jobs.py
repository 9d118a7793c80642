"""
Job board entity models.

Jobs are owned by an employer profile. Students bookmark jobs and apply to
them, one application per (job, user) pair.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field

from studentos.core.models.domain import ApplicationStatus, JobStatus, LocationType

from ..base import Base, UTCDateTime, new_id, utc_now


class Job(Base, table=True):
    """Job posting.

    Table: jobs
    """

    __tablename__ = "jobs"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    employer_id: str = Field(foreign_key="employer_profiles.id", index=True, ondelete="CASCADE")
    title: str
    company: str
    location: str
    location_type: str = Field(default=LocationType.ONSITE.value)
    salary_min: Optional[int] = Field(default=None)
    salary_max: Optional[int] = Field(default=None)
    department: Optional[str] = Field(default=None)
    description: str
    requirements: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    responsibilities: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    benefits: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    status: str = Field(default=JobStatus.ACTIVE.value, index=True)
    posted_at: datetime = Field(default_factory=utc_now, index=True, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)


class SavedJob(Base, table=True):
    """Bookmark of a job by a user.

    Table: saved_jobs
    """

    __tablename__ = "saved_jobs"
    __table_args__ = (
        UniqueConstraint("user_id", "job_id", name="uq_saved_job"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    job_id: str = Field(foreign_key="jobs.id", index=True, ondelete="CASCADE")
    saved_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)


class JobApplication(Base, table=True):
    """Application of a user to a job.

    Table: job_applications
    """

    __tablename__ = "job_applications"
    __table_args__ = (
        UniqueConstraint("job_id", "user_id", name="uq_job_application"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    job_id: str = Field(foreign_key="jobs.id", index=True, ondelete="CASCADE")
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    cover_letter: Optional[str] = Field(default=None)
    cv_url: Optional[str] = Field(default=None)
    status: str = Field(default=ApplicationStatus.NEW.value, index=True)
    notes: Optional[str] = Field(default=None)
    applied_at: datetime = Field(default_factory=utc_now, index=True, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)
