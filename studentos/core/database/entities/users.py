"""
User account entity models.

This module contains the account table together with the 1:1 student and
employer profiles and the persisted refresh tokens.
"""

from __future__ import annotations

import secrets
from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field

from studentos.core.models.domain import AuthProvider, UserRole, VerificationStatus

from ..base import Base, UTCDateTime, new_id, utc_now

SIGNUP_CREDITS = 100


def new_referral_code() -> str:
    return secrets.token_hex(4).upper()


class User(Base, table=True):
    """Login account.

    ``password_hash`` is empty for accounts created through the Google OAuth
    exchange; such accounts cannot use password login.
    ``credit_balance`` is what the account can still spend on paid tools.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: Optional[str] = Field(default=None)
    role: str = Field(default=UserRole.STUDENT.value, index=True)
    is_active: bool = Field(default=True)
    email_verified: bool = Field(default=False)
    auth_provider: str = Field(default=AuthProvider.email.value)
    provider_id: Optional[str] = Field(default=None)
    credit_balance: int = Field(default=SIGNUP_CREDITS)
    referral_code: Optional[str] = Field(default_factory=new_referral_code, unique=True, max_length=16)
    last_login_at: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"


class StudentProfile(Base, table=True):
    """Student-facing profile, one per STUDENT (and ADMIN) account.

    Table: student_profiles
    """

    __tablename__ = "student_profiles"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", unique=True, index=True, ondelete="CASCADE")
    full_name: str
    avatar_url: Optional[str] = Field(default=None)
    bio: Optional[str] = Field(default=None)
    education_level: Optional[str] = Field(default=None)
    university: Optional[str] = Field(default=None)
    graduation_year: Optional[int] = Field(default=None)
    major: Optional[str] = Field(default=None)
    country: Optional[str] = Field(default=None)
    cv_url: Optional[str] = Field(default=None)
    goals: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    skills: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    ats_score: Optional[int] = Field(default=None)
    profile_completion: int = Field(default=0)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)


class EmployerProfile(Base, table=True):
    """Company profile owned by an EMPLOYER account.

    Jobs may only be posted once ``verification_status`` is ``VERIFIED``.

    Table: employer_profiles
    """

    __tablename__ = "employer_profiles"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", unique=True, index=True, ondelete="CASCADE")
    company_name: str
    tagline: Optional[str] = Field(default=None)
    industry: Optional[str] = Field(default=None)
    company_size: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    website: Optional[str] = Field(default=None)
    logo_url: Optional[str] = Field(default=None)
    city: Optional[str] = Field(default=None)
    state: Optional[str] = Field(default=None)
    country: Optional[str] = Field(default=None)
    verification_status: str = Field(default=VerificationStatus.PENDING.value, index=True)
    verified_at: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
    verification_note: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)


class RefreshToken(Base, table=True):
    """Issued refresh token. Deleting the row revokes the token.

    Table: refresh_tokens
    """

    __tablename__ = "refresh_tokens"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    token: str = Field(unique=True, index=True)
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    expires_at: datetime = Field(sa_type=UTCDateTime)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
