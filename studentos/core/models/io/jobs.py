"""Job board I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from studentos.core.models.domain import JobStatus, LocationType

from .base import CamelModel, Pagination


class EmployerCard(CamelModel):
    """Employer summary embedded in job listings."""

    company_name: str
    logo_url: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None


class JobCreate(CamelModel):
    """Payload for posting a job. ``company`` defaults to the employer's company name."""

    title: str = Field(min_length=1)
    company: Optional[str] = None
    location: str = Field(min_length=1)
    location_type: LocationType = LocationType.ONSITE
    salary_min: Optional[int] = Field(default=None, ge=0)
    salary_max: Optional[int] = Field(default=None, ge=0)
    department: Optional[str] = None
    description: str = Field(min_length=1)
    requirements: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    status: JobStatus = JobStatus.ACTIVE

    @model_validator(mode="after")
    def salary_range(self) -> "JobCreate":
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salaryMin must not exceed salaryMax")
        return self


class JobUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    company: Optional[str] = None
    location: Optional[str] = None
    location_type: Optional[LocationType] = None
    salary_min: Optional[int] = Field(default=None, ge=0)
    salary_max: Optional[int] = Field(default=None, ge=0)
    department: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[List[str]] = None
    responsibilities: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    status: Optional[JobStatus] = None


class JobRead(CamelModel):
    id: str
    employer_id: str
    title: str
    company: str
    location: str
    location_type: str
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    department: Optional[str] = None
    description: str
    requirements: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    status: str
    posted_at: datetime
    updated_at: datetime


class JobListItem(JobRead):
    employer: Optional[EmployerCard] = None
    applicant_count: int = 0
    is_saved: bool = False
    has_applied: bool = False
    saved_at: Optional[datetime] = None


class JobPage(CamelModel):
    jobs: List[JobListItem]
    pagination: Pagination


class ApplyRequest(CamelModel):
    cover_letter: Optional[str] = None
    cv_url: Optional[str] = None


class SavedJobRead(CamelModel):
    id: str
    user_id: str
    job_id: str
    saved_at: datetime


class OwnApplication(CamelModel):
    """The caller's application to a job, shown on the job page."""

    id: str
    status: str
    cover_letter: Optional[str] = None
    cv_url: Optional[str] = None
    applied_at: datetime


class JobDetail(JobListItem):
    application: Optional[OwnApplication] = None
