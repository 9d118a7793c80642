"""
Profile I/O models.

Read models for the student and employer profiles, and the partial-update
payloads accepted by the profile endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union

from pydantic import AnyUrl, Field, TypeAdapter, ValidationError, field_validator

from .base import CamelModel


class StudentProfileRead(CamelModel):
    """Student profile as returned to its owner."""

    id: str
    user_id: str
    full_name: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    education_level: Optional[str] = None
    university: Optional[str] = None
    graduation_year: Optional[int] = None
    major: Optional[str] = None
    country: Optional[str] = None
    cv_url: Optional[str] = None
    goals: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    ats_score: Optional[int] = None
    profile_completion: int = 0


class EmployerProfileRead(CamelModel):
    """Employer (company) profile."""

    id: str
    user_id: str
    company_name: str
    tagline: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    verification_status: str
    verified_at: Optional[datetime] = None
    verification_note: Optional[str] = None
    created_at: datetime


ProfileRead = Union[StudentProfileRead, EmployerProfileRead]


_url_adapter = TypeAdapter(AnyUrl)


def _upper(value: Optional[str]) -> Optional[str]:
    return value.upper() if value else value


class OnboardingRequest(CamelModel):
    """Second sign-up step. ``educationLevel`` is stored upper-cased."""

    education_level: Optional[str] = None
    university: Optional[str] = None
    graduation_year: Optional[int] = None
    major: Optional[str] = None
    country: Optional[str] = None
    goals: Optional[List[str]] = None

    normalize_level = field_validator("education_level")(_upper)


class StudentProfileUpdate(CamelModel):
    """Partial update of the caller's student profile."""

    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    education_level: Optional[str] = None
    university: Optional[str] = None
    graduation_year: Optional[int] = None
    major: Optional[str] = None
    country: Optional[str] = None
    cv_url: Optional[str] = None
    goals: Optional[List[str]] = None
    skills: Optional[List[str]] = None

    normalize_level = field_validator("education_level")(_upper)

    @field_validator("avatar_url")
    @classmethod
    def avatar_must_be_url(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            try:
                _url_adapter.validate_python(value)
            except ValidationError as exc:
                raise ValueError("Invalid URL") from exc
        return value


class EmployerProfileUpdate(CamelModel):
    """Upsert payload for the caller's employer profile.

    Verification fields are owned by admins and are not accepted here.
    """

    company_name: Optional[str] = None
    tagline: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class EmployerProfileWithJobs(EmployerProfileRead):
    job_count: int = 0


class ProfileEnvelope(CamelModel):
    profile: StudentProfileRead


class EmployerStats(CamelModel):
    """Hiring counters across the employer's jobs. ``shortlisted`` covers SCREENING and INTERVIEW."""

    active_jobs: int = 0
    total_applicants: int = 0
    new_applications: int = 0
    shortlisted: int = 0
