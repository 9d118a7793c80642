"""Scholarship I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from studentos.core.database.base import as_utc

from .base import CamelModel, Pagination


class ScholarshipBase(CamelModel):
    title: str = Field(min_length=1)
    institution: str = Field(min_length=1)
    country: str
    study_level: str
    award_type: Optional[str] = None
    award_amount: Optional[str] = None
    deadline: datetime
    description: Optional[str] = None
    eligibility: List[str] = Field(default_factory=list)
    application_url: Optional[str] = None
    is_active: bool = True

    deadline_utc = field_validator("deadline")(as_utc)


class ScholarshipCreate(ScholarshipBase):
    """Payload for creating a scholarship (admin)."""


class ScholarshipUpdate(CamelModel):
    """Partial update of a scholarship (admin)."""

    title: Optional[str] = Field(default=None, min_length=1)
    institution: Optional[str] = Field(default=None, min_length=1)
    country: Optional[str] = None
    study_level: Optional[str] = None
    award_type: Optional[str] = None
    award_amount: Optional[str] = None
    deadline: Optional[datetime] = None
    description: Optional[str] = None
    eligibility: Optional[List[str]] = None
    application_url: Optional[str] = None
    is_active: Optional[bool] = None

    deadline_utc = field_validator("deadline")(as_utc)


class ScholarshipRead(ScholarshipBase):
    id: str
    created_at: datetime
    updated_at: datetime
    is_saved: bool = False
    saved_at: Optional[datetime] = None


class ScholarshipPage(CamelModel):
    scholarships: List[ScholarshipRead]
    pagination: Pagination


class SavedScholarshipRead(CamelModel):
    id: str
    user_id: str
    scholarship_id: str
    saved_at: datetime


class ScholarshipStats(CamelModel):
    total: int
    active: int
    inactive: int
    expiring_soon: int
    total_saves: int
