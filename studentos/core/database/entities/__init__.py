"""
Database entity models.

This package contains all database entity models organized by business domain.

Modules:
- users: Accounts, student/employer profiles and refresh tokens
- scholarships: Scholarship listings and bookmarks
- jobs: Job postings, bookmarks and applications
- habits: Habits and their completion logs
- blog: Blog posts
- community: Community feed posts, comments and likes
- roles: Admin permissions, roles, assignments and the audit log
- pricing: Pricing plans and subscriptions
- contact: Contact form messages
- finance: Finance categories, transactions and budgets
- notifications: In-app notifications
- tools: Tool catalogue, credit usage and app settings
- learning: Saved learning plans, their phases and resources
"""

from .blog import BlogPost
from .community import Comment, CommunityPost, Like
from .contact import ContactMessage
from .finance import Budget, FinanceCategory, Transaction
from .habits import Habit, HabitLog
from .jobs import Job, JobApplication, SavedJob
from .learning import LearningPlan, PlanPhase, PlanResource
from .notifications import Notification
from .pricing import PricingPlan, Subscription
from .roles import AdminRole, AuditLog, Permission, RolePermission, UserAdminRole
from .scholarships import SavedScholarship, Scholarship
from .tools import AppSetting, Tool, ToolUsage
from .users import EmployerProfile, RefreshToken, StudentProfile, User

__all__ = [
    "AdminRole",
    "AppSetting",
    "AuditLog",
    "BlogPost",
    "Budget",
    "Comment",
    "CommunityPost",
    "ContactMessage",
    "EmployerProfile",
    "FinanceCategory",
    "Habit",
    "HabitLog",
    "Job",
    "JobApplication",
    "LearningPlan",
    "Like",
    "Notification",
    "Permission",
    "PlanPhase",
    "PlanResource",
    "PricingPlan",
    "RefreshToken",
    "RolePermission",
    "SavedJob",
    "SavedScholarship",
    "Scholarship",
    "StudentProfile",
    "Subscription",
    "Tool",
    "ToolUsage",
    "Transaction",
    "User",
    "UserAdminRole",
]
