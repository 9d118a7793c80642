"""Domain-level enums and constants shared across the StudentOS backend."""

from .enums import (
    CLOSED_APPLICATION_STATUSES,
    ROLES_PERMISSION_SLUG,
    SHORTLISTED_APPLICATION_STATUSES,
    ApplicationStatus,
    AuditAction,
    AuthProvider,
    BudgetPeriod,
    EducationLevel,
    HabitFrequency,
    JobStatus,
    LocationType,
    NotificationType,
    PlanInterval,
    PostStatus,
    ResourceType,
    SubscriptionStatus,
    TransactionType,
    UserRole,
    VerificationStatus,
)

__all__ = [
    "CLOSED_APPLICATION_STATUSES",
    "ROLES_PERMISSION_SLUG",
    "SHORTLISTED_APPLICATION_STATUSES",
    "ApplicationStatus",
    "AuditAction",
    "AuthProvider",
    "BudgetPeriod",
    "EducationLevel",
    "HabitFrequency",
    "JobStatus",
    "LocationType",
    "NotificationType",
    "PlanInterval",
    "PostStatus",
    "ResourceType",
    "SubscriptionStatus",
    "TransactionType",
    "UserRole",
    "VerificationStatus",
]
