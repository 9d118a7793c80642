"""
Admin back-office I/O models.

Platform statistics, user management, employer verification, pricing plans
and the audit log.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from studentos.core.models.domain import PlanInterval, UserRole, VerificationStatus

from .base import CamelModel, Pagination
from .profiles import EmployerProfileRead


class AdminStats(CamelModel):
    total_users: int
    active_users: int
    total_scholarships: int
    total_jobs: int
    total_applications: int
    recent_transactions: int
    new_users_this_week: int


class AdminUserRead(CamelModel):
    id: str
    email: str
    role: str
    is_active: bool
    email_verified: bool
    auth_provider: str
    created_at: datetime
    last_login_at: Optional[datetime] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    company_name: Optional[str] = None
    logo_url: Optional[str] = None


class AdminUserPage(CamelModel):
    users: List[AdminUserRead]
    pagination: Pagination


class AdminUserCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=8)
    role: UserRole = UserRole.STUDENT
    full_name: str = Field(min_length=2)


class AdminUserCreated(CamelModel):
    id: str
    email: str
    role: str


class AdminUserUpdate(CamelModel):
    is_active: Optional[bool] = None
    role: Optional[UserRole] = None


class EmployerAccount(CamelModel):
    email: str
    is_active: bool
    created_at: datetime


class AdminEmployerRead(EmployerProfileRead):
    user: EmployerAccount
    job_count: int = 0


class EmployerVerificationUpdate(CamelModel):
    status: VerificationStatus
    note: Optional[str] = None


class PricingPlanCreate(CamelModel):
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    interval: PlanInterval = PlanInterval.MONTHLY
    features: List[str] = Field(default_factory=list)
    is_active: bool = True
    is_popular: bool = False


class PricingPlanUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    interval: Optional[PlanInterval] = None
    features: Optional[List[str]] = None
    is_active: Optional[bool] = None
    is_popular: Optional[bool] = None


class PricingPlanRead(CamelModel):
    id: str
    name: str
    price: float
    interval: str
    features: List[str] = Field(default_factory=list)
    is_active: bool
    is_popular: bool
    created_at: datetime
    updated_at: datetime
    subscription_count: int = 0


class AuditLogRead(CamelModel):
    id: str
    admin_id: str
    admin_email: Optional[str] = None
    action: str
    target_type: str
    target_id: Optional[str] = None
    details: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime


class AuditLogPage(CamelModel):
    logs: List[AuditLogRead]
    pagination: Pagination
