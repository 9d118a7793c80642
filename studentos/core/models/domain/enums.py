"""Domain enums shared by entities, repositories and API schemas."""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Account role. Route guards authorize on this value."""

    STUDENT = "STUDENT"
    EMPLOYER = "EMPLOYER"
    ADMIN = "ADMIN"


class AuthProvider(str, Enum):
    """How an account authenticates."""

    email = "email"
    google = "google"


class VerificationStatus(str, Enum):
    """Admin review state of an employer organisation."""

    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class LocationType(str, Enum):
    REMOTE = "REMOTE"
    HYBRID = "HYBRID"
    ONSITE = "ONSITE"


class JobStatus(str, Enum):
    """Lifecycle of a job posting. Only ``ACTIVE`` jobs are public."""

    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    CLOSED = "CLOSED"
    DRAFT = "DRAFT"


class ApplicationStatus(str, Enum):
    """Hiring pipeline stage of a job application."""

    NEW = "NEW"
    SCREENING = "SCREENING"
    INTERVIEW = "INTERVIEW"
    OFFER = "OFFER"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


CLOSED_APPLICATION_STATUSES = (ApplicationStatus.REJECTED.value, ApplicationStatus.WITHDRAWN.value)
SHORTLISTED_APPLICATION_STATUSES = (ApplicationStatus.SCREENING.value, ApplicationStatus.INTERVIEW.value)


class HabitFrequency(str, Enum):
    daily = "daily"
    weekly = "weekly"


class PostStatus(str, Enum):
    """Publication state of a blog post."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class EducationLevel(str, Enum):
    HIGH_SCHOOL = "HIGH_SCHOOL"
    UNDERGRADUATE = "UNDERGRADUATE"
    GRADUATE = "GRADUATE"
    PHD = "PHD"


class PlanInterval(str, Enum):
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class SubscriptionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"


class AuditAction(str, Enum):
    """Actions recorded in the admin audit log."""

    CREATE_ROLE = "CREATE_ROLE"
    UPDATE_ROLE = "UPDATE_ROLE"
    UPDATE_ROLE_PERMISSIONS = "UPDATE_ROLE_PERMISSIONS"
    DELETE_ROLE = "DELETE_ROLE"
    ASSIGN_ROLE = "ASSIGN_ROLE"
    VERIFY_EMPLOYER = "VERIFY_EMPLOYER"
    CREATE_PRICING_PLAN = "CREATE_PRICING_PLAN"
    UPDATE_PRICING_PLAN = "UPDATE_PRICING_PLAN"
    DELETE_PRICING_PLAN = "DELETE_PRICING_PLAN"
    CREATE_USER = "CREATE_USER"
    UPDATE_USER = "UPDATE_USER"
    DELETE_USER = "DELETE_USER"
    CREATE_TOOL = "CREATE_TOOL"
    UPDATE_TOOL = "UPDATE_TOOL"
    DELETE_TOOL = "DELETE_TOOL"
    UPDATE_SETTINGS = "UPDATE_SETTINGS"
    SEND_NOTIFICATION = "SEND_NOTIFICATION"


ROLES_PERMISSION_SLUG = "system.roles"


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class BudgetPeriod(str, Enum):
    """Window a budget's spending is measured over."""

    monthly = "monthly"
    yearly = "yearly"


class NotificationType(str, Enum):
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"


class ResourceType(str, Enum):
    """Kind of study material in a learning plan phase."""

    VIDEO = "VIDEO"
    ARTICLE = "ARTICLE"
