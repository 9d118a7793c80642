"""Initial schema and seed data for StudentOS

Revision ID: 20260301_000000
Revises: None
Create Date: 2026-03-01 00:00:00.000000

This is the initial migration that creates all tables and seeds default data
for the StudentOS API. This includes:
- Accounts, student/employer profiles and refresh tokens
- Scholarships, jobs, applications and bookmarks
- Habits, blog posts and the community feed
- Admin permissions, roles, audit log, pricing plans and contact messages
- Default permissions and system roles
- The admin and sample employer accounts, sample jobs, scholarships and pricing plans

Revision format: YYYYMMDD_HHMMSS_description

"""

import uuid
from datetime import datetime, timezone
from typing import Sequence, Union

import sqlalchemy as sa
from passlib.context import CryptContext

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ID = sa.String(64)

PERMISSIONS = [
    # (slug, name, category, description)
    ("users.view", "View users", "users", "List and inspect user accounts"),
    ("users.manage", "Manage users", "users", "Create, update and delete user accounts"),
    ("employers.view", "View employers", "employers", "List employer profiles"),
    ("employers.verify", "Verify employers", "employers", "Approve or reject employer verification"),
    ("content.blog", "Manage blog", "content", "Create, edit and publish blog posts"),
    ("content.scholarships", "Manage scholarships", "content", "Create and edit scholarship listings"),
    ("content.jobs", "Manage jobs", "content", "Moderate job postings"),
    ("content.community", "Moderate community", "content", "Moderate community posts and comments"),
    ("pricing.manage", "Manage pricing", "pricing", "Create and edit pricing plans"),
    ("support.messages", "Read messages", "support", "Read and resolve contact messages"),
    ("system.audit", "View audit log", "system", "Inspect the admin audit log"),
    ("system.roles", "Manage roles", "system", "Create roles and assign permissions"),
]

SYSTEM_ROLES = {
    "Super Admin": ("Full access to every admin feature", [slug for slug, *_ in PERMISSIONS]),
    "Content Manager": (
        "Manages blog, scholarship, job and community content",
        ["content.blog", "content.scholarships", "content.jobs", "content.community"],
    ),
    "Support": ("Handles users and contact messages", ["users.view", "employers.view", "support.messages"]),
}


def _id() -> str:
    return uuid.uuid4().hex


def upgrade() -> None:
    """Create all tables and seed initial data."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", ID, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("email_verified", sa.Boolean(), nullable=False),
        sa.Column("auth_provider", sa.String(32), nullable=False),
        sa.Column("provider_id", sa.String(255), nullable=True),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_users_email", "email", unique=True),
        sa.Index("ix_users_role", "role"),
    )

    # Create student_profiles table
    op.create_table(
        "student_profiles",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("education_level", sa.String(64), nullable=True),
        sa.Column("university", sa.String(255), nullable=True),
        sa.Column("graduation_year", sa.Integer(), nullable=True),
        sa.Column("major", sa.String(255), nullable=True),
        sa.Column("country", sa.String(128), nullable=True),
        sa.Column("cv_url", sa.Text(), nullable=True),
        sa.Column("goals", sa.JSON(), nullable=False),
        sa.Column("skills", sa.JSON(), nullable=False),
        sa.Column("ats_score", sa.Integer(), nullable=True),
        sa.Column("profile_completion", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_student_profiles_user_id", "user_id", unique=True),
    )

    # Create employer_profiles table
    op.create_table(
        "employer_profiles",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("company_name", sa.String(255), nullable=False),
        sa.Column("tagline", sa.String(255), nullable=True),
        sa.Column("industry", sa.String(128), nullable=True),
        sa.Column("company_size", sa.String(64), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("city", sa.String(128), nullable=True),
        sa.Column("state", sa.String(128), nullable=True),
        sa.Column("country", sa.String(128), nullable=True),
        sa.Column("verification_status", sa.String(32), nullable=False),
        sa.Column("verified_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("verification_note", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_employer_profiles_user_id", "user_id", unique=True),
        sa.Index("ix_employer_profiles_verification_status", "verification_status"),
    )

    # Create refresh_tokens table
    op.create_table(
        "refresh_tokens",
        sa.Column("id", ID, nullable=False),
        sa.Column("token", sa.String(512), nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_refresh_tokens_token", "token", unique=True),
        sa.Index("ix_refresh_tokens_user_id", "user_id"),
    )

    # Create scholarships table
    op.create_table(
        "scholarships",
        sa.Column("id", ID, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("institution", sa.String(255), nullable=False),
        sa.Column("country", sa.String(128), nullable=False),
        sa.Column("study_level", sa.String(64), nullable=False),
        sa.Column("award_type", sa.String(128), nullable=True),
        sa.Column("award_amount", sa.String(128), nullable=True),
        sa.Column("deadline", sa.DateTime(timezone=True), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("eligibility", sa.JSON(), nullable=False),
        sa.Column("application_url", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_scholarships_country", "country"),
        sa.Index("ix_scholarships_study_level", "study_level"),
        sa.Index("ix_scholarships_deadline", "deadline"),
    )

    # Create saved_scholarships table
    op.create_table(
        "saved_scholarships",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("scholarship_id", ID, nullable=False),
        sa.Column("saved_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["scholarship_id"], ["scholarships.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "scholarship_id", name="uq_saved_scholarship"),
        sa.Index("ix_saved_scholarships_user_id", "user_id"),
        sa.Index("ix_saved_scholarships_scholarship_id", "scholarship_id"),
    )

    # Create jobs table
    op.create_table(
        "jobs",
        sa.Column("id", ID, nullable=False),
        sa.Column("employer_id", ID, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("company", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("location_type", sa.String(32), nullable=False),
        sa.Column("salary_min", sa.Integer(), nullable=True),
        sa.Column("salary_max", sa.Integer(), nullable=True),
        sa.Column("department", sa.String(128), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("requirements", sa.JSON(), nullable=False),
        sa.Column("responsibilities", sa.JSON(), nullable=False),
        sa.Column("benefits", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("posted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["employer_id"], ["employer_profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_jobs_employer_id", "employer_id"),
        sa.Index("ix_jobs_status", "status"),
        sa.Index("ix_jobs_posted_at", "posted_at"),
    )

    # Create saved_jobs table
    op.create_table(
        "saved_jobs",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("job_id", ID, nullable=False),
        sa.Column("saved_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "job_id", name="uq_saved_job"),
        sa.Index("ix_saved_jobs_user_id", "user_id"),
        sa.Index("ix_saved_jobs_job_id", "job_id"),
    )

    # Create job_applications table
    op.create_table(
        "job_applications",
        sa.Column("id", ID, nullable=False),
        sa.Column("job_id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("cover_letter", sa.Text(), nullable=True),
        sa.Column("cv_url", sa.Text(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("applied_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("job_id", "user_id", name="uq_job_application"),
        sa.Index("ix_job_applications_job_id", "job_id"),
        sa.Index("ix_job_applications_user_id", "user_id"),
        sa.Index("ix_job_applications_status", "status"),
        sa.Index("ix_job_applications_applied_at", "applied_at"),
    )

    # Create habits table
    op.create_table(
        "habits",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("icon", sa.String(64), nullable=True),
        sa.Column("color", sa.String(32), nullable=True),
        sa.Column("frequency", sa.String(32), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_habits_user_id", "user_id"),
    )

    # Create habit_logs table
    op.create_table(
        "habit_logs",
        sa.Column("id", ID, nullable=False),
        sa.Column("habit_id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["habit_id"], ["habits.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_habit_logs_habit_id", "habit_id"),
        sa.Index("ix_habit_logs_user_id", "user_id"),
        sa.Index("ix_habit_logs_completed_at", "completed_at"),
    )

    # Create blog_posts table
    op.create_table(
        "blog_posts",
        sa.Column("id", ID, nullable=False),
        sa.Column("author_id", ID, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("cover_image_url", sa.Text(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_blog_posts_slug", "slug", unique=True),
        sa.Index("ix_blog_posts_author_id", "author_id"),
        sa.Index("ix_blog_posts_status", "status"),
        sa.Index("ix_blog_posts_published_at", "published_at"),
    )

    # Create community_posts table
    op.create_table(
        "community_posts",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_community_posts_user_id", "user_id"),
        sa.Index("ix_community_posts_created_at", "created_at"),
    )

    # Create comments table
    op.create_table(
        "comments",
        sa.Column("id", ID, nullable=False),
        sa.Column("post_id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["community_posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_comments_post_id", "post_id"),
        sa.Index("ix_comments_user_id", "user_id"),
    )

    # Create likes table
    op.create_table(
        "likes",
        sa.Column("id", ID, nullable=False),
        sa.Column("post_id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["community_posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", "user_id", name="uq_like"),
        sa.Index("ix_likes_post_id", "post_id"),
        sa.Index("ix_likes_user_id", "user_id"),
    )

    # Create permissions table
    op.create_table(
        "permissions",
        sa.Column("id", ID, nullable=False),
        sa.Column("slug", sa.String(128), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(64), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_permissions_slug", "slug", unique=True),
        sa.Index("ix_permissions_category", "category"),
    )

    # Create admin_roles table
    op.create_table(
        "admin_roles",
        sa.Column("id", ID, nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_system", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_admin_roles_name", "name", unique=True),
    )

    # Create role_permissions table
    op.create_table(
        "role_permissions",
        sa.Column("id", ID, nullable=False),
        sa.Column("role_id", ID, nullable=False),
        sa.Column("permission_id", ID, nullable=False),
        sa.ForeignKeyConstraint(["role_id"], ["admin_roles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["permission_id"], ["permissions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("role_id", "permission_id", name="uq_role_permission"),
        sa.Index("ix_role_permissions_role_id", "role_id"),
        sa.Index("ix_role_permissions_permission_id", "permission_id"),
    )

    # Create user_admin_roles table
    op.create_table(
        "user_admin_roles",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("role_id", ID, nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["role_id"], ["admin_roles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "role_id", name="uq_user_admin_role"),
        sa.Index("ix_user_admin_roles_user_id", "user_id"),
        sa.Index("ix_user_admin_roles_role_id", "role_id"),
    )

    # Create audit_logs table
    op.create_table(
        "audit_logs",
        sa.Column("id", ID, nullable=False),
        sa.Column("admin_id", ID, nullable=False),
        sa.Column("action", sa.String(64), nullable=False),
        sa.Column("target_type", sa.String(64), nullable=False),
        sa.Column("target_id", ID, nullable=True),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["admin_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_audit_logs_admin_id", "admin_id"),
        sa.Index("ix_audit_logs_action", "action"),
        sa.Index("ix_audit_logs_created_at", "created_at"),
    )

    # Create pricing_plans table
    op.create_table(
        "pricing_plans",
        sa.Column("id", ID, nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("interval", sa.String(32), nullable=False),
        sa.Column("features", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_popular", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    # Create subscriptions table
    op.create_table(
        "subscriptions",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("plan_id", ID, nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["plan_id"], ["pricing_plans.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_subscriptions_user_id", "user_id"),
        sa.Index("ix_subscriptions_plan_id", "plan_id"),
        sa.Index("ix_subscriptions_status", "status"),
    )

    # Create contact_messages table
    op.create_table(
        "contact_messages",
        sa.Column("id", ID, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("subject", sa.String(255), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_contact_messages_created_at", "created_at"),
    )

    _seed()


def _seed() -> None:
    """Insert permissions, system roles, demo accounts and sample content."""
    now = datetime.now(timezone.utc)
    passwords = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)

    # Permissions and system roles
    permission_ids = {slug: _id() for slug, *_ in PERMISSIONS}
    op.bulk_insert(
        sa.table(
            "permissions",
            sa.column("id"),
            sa.column("slug"),
            sa.column("name"),
            sa.column("category"),
            sa.column("description"),
        ),
        [
            {"id": permission_ids[slug], "slug": slug, "name": name, "category": category, "description": description}
            for slug, name, category, description in PERMISSIONS
        ],
    )

    role_ids = {name: _id() for name in SYSTEM_ROLES}
    op.bulk_insert(
        sa.table(
            "admin_roles",
            sa.column("id"),
            sa.column("name"),
            sa.column("description"),
            sa.column("is_system", sa.Boolean()),
            sa.column("created_at", sa.DateTime(timezone=True)),
            sa.column("updated_at", sa.DateTime(timezone=True)),
        ),
        [
            {
                "id": role_ids[name],
                "name": name,
                "description": description,
                "is_system": True,
                "created_at": now,
                "updated_at": now,
            }
            for name, (description, _) in SYSTEM_ROLES.items()
        ],
    )
    op.bulk_insert(
        sa.table("role_permissions", sa.column("id"), sa.column("role_id"), sa.column("permission_id")),
        [
            {"id": _id(), "role_id": role_ids[name], "permission_id": permission_ids[slug]}
            for name, (_, slugs) in SYSTEM_ROLES.items()
            for slug in slugs
        ],
    )

    # Admin and sample employer accounts
    admin_id, employer_user_id, employer_id = _id(), _id(), _id()
    op.bulk_insert(
        sa.table(
            "users",
            sa.column("id"),
            sa.column("email"),
            sa.column("password_hash"),
            sa.column("role"),
            sa.column("is_active", sa.Boolean()),
            sa.column("email_verified", sa.Boolean()),
            sa.column("auth_provider"),
            sa.column("created_at", sa.DateTime(timezone=True)),
            sa.column("updated_at", sa.DateTime(timezone=True)),
        ),
        [
            {
                "id": user_id,
                "email": email,
                "password_hash": passwords.hash(password),
                "role": role,
                "is_active": True,
                "email_verified": True,
                "auth_provider": "email",
                "created_at": now,
                "updated_at": now,
            }
            for user_id, email, password, role in (
                (admin_id, "admin@studentos.com", "admin123", "ADMIN"),
                (employer_user_id, "hr@techflow.com", "employer123", "EMPLOYER"),
            )
        ],
    )
    op.bulk_insert(
        sa.table(
            "student_profiles",
            sa.column("id"),
            sa.column("user_id"),
            sa.column("full_name"),
            sa.column("goals", sa.JSON()),
            sa.column("skills", sa.JSON()),
            sa.column("profile_completion", sa.Integer()),
            sa.column("updated_at", sa.DateTime(timezone=True)),
        ),
        [
            {
                "id": _id(),
                "user_id": admin_id,
                "full_name": "Admin User",
                "goals": [],
                "skills": [],
                "profile_completion": 100,
                "updated_at": now,
            }
        ],
    )
    op.bulk_insert(
        sa.table(
            "user_admin_roles",
            sa.column("id"),
            sa.column("user_id"),
            sa.column("role_id"),
            sa.column("assigned_at", sa.DateTime(timezone=True)),
        ),
        [{"id": _id(), "user_id": admin_id, "role_id": role_ids["Super Admin"], "assigned_at": now}],
    )
    op.bulk_insert(
        sa.table(
            "employer_profiles",
            sa.column("id"),
            sa.column("user_id"),
            sa.column("company_name"),
            sa.column("tagline"),
            sa.column("industry"),
            sa.column("company_size"),
            sa.column("description"),
            sa.column("website"),
            sa.column("city"),
            sa.column("state"),
            sa.column("country"),
            sa.column("verification_status"),
            sa.column("verified_at", sa.DateTime(timezone=True)),
            sa.column("created_at", sa.DateTime(timezone=True)),
            sa.column("updated_at", sa.DateTime(timezone=True)),
        ),
        [
            {
                "id": employer_id,
                "user_id": employer_user_id,
                "company_name": "TechFlow Inc.",
                "tagline": "Innovating the future of tech",
                "industry": "Software Development",
                "company_size": "11-50 employees",
                "description": "TechFlow is a cutting-edge software company focused on building innovative solutions.",
                "website": "https://techflow.com",
                "city": "San Francisco",
                "state": "CA",
                "country": "United States",
                "verification_status": "VERIFIED",
                "verified_at": now,
                "created_at": now,
                "updated_at": now,
            }
        ],
    )

    # Sample jobs
    jobs = [
        {
            "title": "Junior Frontend Developer",
            "location": "San Francisco, CA",
            "location_type": "REMOTE",
            "salary_min": 70000,
            "salary_max": 90000,
            "department": "Engineering",
            "description": "We are looking for a passionate Junior Frontend Developer to join our growing team.",
            "requirements": ["React/Vue experience", "TypeScript knowledge", "CSS/Tailwind proficiency"],
            "responsibilities": ["Build responsive UIs", "Collaborate with design team", "Write clean code"],
            "benefits": ["Remote work", "Health insurance", "401k matching"],
        },
        {
            "title": "UX/UI Design Intern",
            "location": "New York, NY",
            "location_type": "HYBRID",
            "salary_min": 40000,
            "salary_max": 50000,
            "department": "Design",
            "description": "Join our design team and help create beautiful user experiences.",
            "requirements": ["Figma proficiency", "Portfolio required", "Design fundamentals"],
            "responsibilities": ["Create wireframes", "Design prototypes", "User research"],
            "benefits": ["Mentorship program", "Flexible hours"],
        },
    ]
    op.bulk_insert(
        sa.table(
            "jobs",
            sa.column("id"),
            sa.column("employer_id"),
            sa.column("title"),
            sa.column("company"),
            sa.column("location"),
            sa.column("location_type"),
            sa.column("salary_min", sa.Integer()),
            sa.column("salary_max", sa.Integer()),
            sa.column("department"),
            sa.column("description"),
            sa.column("requirements", sa.JSON()),
            sa.column("responsibilities", sa.JSON()),
            sa.column("benefits", sa.JSON()),
            sa.column("status"),
            sa.column("posted_at", sa.DateTime(timezone=True)),
            sa.column("updated_at", sa.DateTime(timezone=True)),
        ),
        [
            {
                **job,
                "id": _id(),
                "employer_id": employer_id,
                "company": "TechFlow Inc.",
                "status": "ACTIVE",
                "posted_at": now,
                "updated_at": now,
            }
            for job in jobs
        ],
    )

    # Sample scholarships
    scholarships = [
        {
            "title": "Global Excellence Scholarship",
            "institution": "Harvard University",
            "country": "United States",
            "study_level": "Undergraduate",
            "award_type": "Full Tuition",
            "award_amount": "Up to $50,000/year",
            "deadline": datetime(2027, 3, 15, tzinfo=timezone.utc),
            "description": "Merit-based scholarship for outstanding international students.",
            "application_url": "https://harvard.edu/scholarships",
        },
        {
            "title": "Future Leaders Award",
            "institution": "Oxford University",
            "country": "United Kingdom",
            "study_level": "Postgraduate",
            "award_type": "Partial Funding",
            "award_amount": "£15,000",
            "deadline": datetime(2027, 4, 1, tzinfo=timezone.utc),
            "description": "For students demonstrating exceptional leadership potential.",
            "application_url": "https://ox.ac.uk/scholarships",
        },
        {
            "title": "STEM Innovation Grant",
            "institution": "MIT",
            "country": "United States",
            "study_level": "Undergraduate",
            "award_type": "Research Grant",
            "award_amount": "$25,000",
            "deadline": datetime(2027, 2, 28, tzinfo=timezone.utc),
            "description": "Supporting innovative research in science and technology.",
            "application_url": "https://mit.edu/grants",
        },
    ]
    op.bulk_insert(
        sa.table(
            "scholarships",
            sa.column("id"),
            sa.column("title"),
            sa.column("institution"),
            sa.column("country"),
            sa.column("study_level"),
            sa.column("award_type"),
            sa.column("award_amount"),
            sa.column("deadline", sa.DateTime(timezone=True)),
            sa.column("description"),
            sa.column("eligibility", sa.JSON()),
            sa.column("application_url"),
            sa.column("is_active", sa.Boolean()),
            sa.column("created_at", sa.DateTime(timezone=True)),
            sa.column("updated_at", sa.DateTime(timezone=True)),
        ),
        [
            {**item, "id": _id(), "eligibility": [], "is_active": True, "created_at": now, "updated_at": now}
            for item in scholarships
        ],
    )

    # Pricing plans
    plans = [
        ("Free", 0.0, ["Basic job search", "Limited scholarships", "3 CV analyses/month"], False),
        (
            "Pro",
            9.99,
            [
                "Unlimited job search",
                "All scholarships",
                "Unlimited CV analyses",
                "AI cover letters",
                "Priority support",
            ],
            True,
        ),
        (
            "Enterprise",
            29.99,
            ["Everything in Pro", "Team features", "Custom integrations", "Dedicated support"],
            False,
        ),
    ]
    op.bulk_insert(
        sa.table(
            "pricing_plans",
            sa.column("id"),
            sa.column("name"),
            sa.column("price", sa.Float()),
            sa.column("interval"),
            sa.column("features", sa.JSON()),
            sa.column("is_active", sa.Boolean()),
            sa.column("is_popular", sa.Boolean()),
            sa.column("created_at", sa.DateTime(timezone=True)),
            sa.column("updated_at", sa.DateTime(timezone=True)),
        ),
        [
            {
                "id": _id(),
                "name": name,
                "price": price,
                "interval": "MONTHLY",
                "features": features,
                "is_active": True,
                "is_popular": popular,
                "created_at": now,
                "updated_at": now,
            }
            for name, price, features, popular in plans
        ],
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("contact_messages")
    op.drop_table("subscriptions")
    op.drop_table("pricing_plans")
    op.drop_table("audit_logs")
    op.drop_table("user_admin_roles")
    op.drop_table("role_permissions")
    op.drop_table("admin_roles")
    op.drop_table("permissions")
    op.drop_table("likes")
    op.drop_table("comments")
    op.drop_table("community_posts")
    op.drop_table("blog_posts")
    op.drop_table("habit_logs")
    op.drop_table("habits")
    op.drop_table("job_applications")
    op.drop_table("saved_jobs")
    op.drop_table("jobs")
    op.drop_table("saved_scholarships")
    op.drop_table("scholarships")
    op.drop_table("refresh_tokens")
    op.drop_table("employer_profiles")
    op.drop_table("student_profiles")
    op.drop_table("users")
