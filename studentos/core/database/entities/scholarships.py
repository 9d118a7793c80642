"""Scholarship entity models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class Scholarship(Base, table=True):
    """Scholarship listing curated by admins.

    Table: scholarships
    """

    __tablename__ = "scholarships"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    title: str
    institution: str
    country: str = Field(index=True)
    study_level: str = Field(index=True)
    award_type: Optional[str] = Field(default=None)
    award_amount: Optional[str] = Field(default=None)
    deadline: datetime = Field(index=True, sa_type=UTCDateTime)
    description: Optional[str] = Field(default=None)
    eligibility: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    application_url: Optional[str] = Field(default=None)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)


class SavedScholarship(Base, table=True):
    """Bookmark of a scholarship by a user.

    Table: saved_scholarships
    """

    __tablename__ = "saved_scholarships"
    __table_args__ = (
        UniqueConstraint("user_id", "scholarship_id", name="uq_saved_scholarship"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    scholarship_id: str = Field(foreign_key="scholarships.id", index=True, ondelete="CASCADE")
    saved_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
