"""
Database repository layer using SQLModel.

This package contains all repository classes organized by business domain.
Each module provides type-safe data access operations for its corresponding
SQLModel entity models.

Modules:
- base: BaseRepository and QueryBuilder utilities
- users: Accounts, profiles and refresh tokens
- scholarships: Scholarships and bookmarks
- jobs: Job postings and bookmarks
- applications: Job applications
- employers: Employer profiles for verification
- habits: Habits and habit logs
- blog: Blog posts
- community: Community posts, comments and likes
- roles: Permissions, admin roles and assignments
- audit: Admin audit log
- pricing: Pricing plans and subscriptions
- contact: Contact form messages
- finance: Transactions, finance categories and budgets
- notifications: In-app notifications
- tools: Tool catalogue, credit spending and app settings
- learning: Saved learning plans
"""

from .applications import ApplicationRepository
from .audit import AuditLogRepository
from .base import BaseRepository, QueryBuilder
from .blog import BlogPostRepository
from .community import CommunityRepository
from .contact import ContactMessageRepository
from .employers import EmployerProfileRepository
from .finance import FinanceRepository
from .habits import HabitRepository
from .jobs import JobRepository
from .learning import LearningPlanRepository
from .notifications import NotificationRepository
from .pricing import PricingPlanRepository
from .roles import AdminRoleRepository, PermissionRepository
from .scholarships import ScholarshipRepository
from .tools import AppSettingRepository, ToolRepository
from .users import RefreshTokenRepository, UserRepository

__all__ = [
    "AdminRoleRepository",
    "AppSettingRepository",
    "ApplicationRepository",
    "AuditLogRepository",
    "BaseRepository",
    "BlogPostRepository",
    "CommunityRepository",
    "ContactMessageRepository",
    "EmployerProfileRepository",
    "FinanceRepository",
    "HabitRepository",
    "JobRepository",
    "LearningPlanRepository",
    "NotificationRepository",
    "PermissionRepository",
    "PricingPlanRepository",
    "QueryBuilder",
    "RefreshTokenRepository",
    "ScholarshipRepository",
    "ToolRepository",
    "UserRepository",
]
