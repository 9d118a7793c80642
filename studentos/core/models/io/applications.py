"""Job application I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from studentos.core.models.domain import ApplicationStatus

from .base import CamelModel, Pagination
from .jobs import EmployerCard, JobRead


class ApplicationRead(CamelModel):
    id: str
    job_id: str
    user_id: str
    cover_letter: Optional[str] = None
    cv_url: Optional[str] = None
    status: str
    notes: Optional[str] = None
    applied_at: datetime
    updated_at: datetime


class JobSummary(CamelModel):
    id: str
    title: str
    company: str
    location: str


class ApplicantSummary(CamelModel):
    """Applicant card shown to employers."""

    id: str
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    university: Optional[str] = None
    major: Optional[str] = None
    education_level: Optional[str] = None
    country: Optional[str] = None
    graduation_year: Optional[int] = None
    skills: List[str] = Field(default_factory=list)


class ApplicationWithJob(ApplicationRead):
    job: JobSummary


class MyApplication(ApplicationRead):
    """An application as listed for the applicant, with the job and its employer."""

    job: JobRead
    employer: Optional[EmployerCard] = None


class ApplicationDetail(ApplicationRead):
    job: JobRead
    employer: Optional[EmployerCard] = None
    applicant: ApplicantSummary


class EmployerApplication(ApplicationRead):
    job: JobSummary
    applicant: ApplicantSummary


class ApplicationPage(CamelModel):
    applications: List[EmployerApplication]
    pagination: Pagination


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus
    notes: Optional[str] = None


class EmployerApplicationUpdate(CamelModel):
    status: Optional[str] = None
    notes: Optional[str] = None
