"""Finance tracker, notifications, tool credits and saved learning plans

Revision ID: 20260401_000000
Revises: 20260301_000000
Create Date: 2026-04-01 00:00:00.000000

Adds:
- Credit balance and referral code on accounts
- Finance categories, transactions and budgets
- In-app notifications
- Tool catalogue, tool usage records and app settings, seeded with the AI tools
- Saved learning plans with their phases and resources

"""

import uuid
from datetime import datetime, timezone
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260401_000000"
down_revision: Union[str, None] = "20260301_000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ID = sa.String(64)

TOOLS = [
    # (name, slug, description, category, icon, credit_cost)
    ("CV Analyzer", "cv-analyzer", "ATS score and improvement tips for your CV", "career", "file-text", 10),
    ("Cover Letter Generator", "cover-letter", "A tailored cover letter for a job posting", "career", "mail", 5),
    ("Learning Plan", "learning-plan", "A week-by-week plan towards a learning goal", "learning", "map", 5),
    ("Plagiarism Checker", "plagiarism-check", "Originality check for your writing", "writing", "shield", 5),
    ("Presentation Generator", "presentation", "Slide outline with speaker notes", "writing", "presentation", 10),
    ("Habit Tracker", "habit-tracker", "Daily and weekly habits with streaks", "productivity", "check-circle", 0),
]


def _id() -> str:
    return uuid.uuid4().hex


def upgrade() -> None:
    """Create the new tables, add the credit columns and seed the tool catalogue."""

    # Credits on accounts
    op.add_column("users", sa.Column("credit_balance", sa.Integer(), nullable=False, server_default="100"))
    op.add_column("users", sa.Column("referral_code", sa.String(16), nullable=True))
    op.create_index("ix_users_referral_code", "users", ["referral_code"], unique=True)

    # Create finance_categories table
    op.create_table(
        "finance_categories",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("color", sa.String(32), nullable=True),
        sa.Column("icon", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_finance_categories_user_id", "user_id"),
    )

    # Create transactions table
    op.create_table(
        "transactions",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("category_id", ID, nullable=True),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["finance_categories.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_transactions_user_id", "user_id"),
        sa.Index("ix_transactions_category_id", "category_id"),
        sa.Index("ix_transactions_type", "type"),
        sa.Index("ix_transactions_date", "date"),
    )

    # Create budgets table
    op.create_table(
        "budgets",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("category_id", ID, nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("period", sa.String(16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["finance_categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "category_id", "period", name="uq_budget"),
        sa.Index("ix_budgets_user_id", "user_id"),
        sa.Index("ix_budgets_category_id", "category_id"),
    )

    # Create notifications table
    op.create_table(
        "notifications",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("link", sa.Text(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_notifications_user_id", "user_id"),
        sa.Index("ix_notifications_is_read", "is_read"),
        sa.Index("ix_notifications_created_at", "created_at"),
    )

    # Create tools table
    op.create_table(
        "tools",
        sa.Column("id", ID, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(64), nullable=False),
        sa.Column("icon", sa.String(64), nullable=True),
        sa.Column("credit_cost", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_tools_slug", "slug", unique=True),
    )

    # Create tool_usages table
    op.create_table(
        "tool_usages",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("tool_id", ID, nullable=False),
        sa.Column("credits", sa.Integer(), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tool_id"], ["tools.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_tool_usages_user_id", "user_id"),
        sa.Index("ix_tool_usages_tool_id", "tool_id"),
        sa.Index("ix_tool_usages_used_at", "used_at"),
    )

    # Create app_settings table
    op.create_table(
        "app_settings",
        sa.Column("key", sa.String(128), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("key"),
    )

    # Create learning_plans table
    op.create_table(
        "learning_plans",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("topic", sa.String(255), nullable=False),
        sa.Column("duration_weeks", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_learning_plans_user_id", "user_id"),
    )

    # Create plan_phases table
    op.create_table(
        "plan_phases",
        sa.Column("id", ID, nullable=False),
        sa.Column("plan_id", ID, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["plan_id"], ["learning_plans.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_plan_phases_plan_id", "plan_id"),
    )

    # Create plan_resources table
    op.create_table(
        "plan_resources",
        sa.Column("id", ID, nullable=False),
        sa.Column("phase_id", ID, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("duration_text", sa.String(64), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["phase_id"], ["plan_phases.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_plan_resources_phase_id", "phase_id"),
    )

    # ========== SEED DATA ==========

    now = datetime.now(timezone.utc)
    op.bulk_insert(
        sa.table(
            "tools",
            sa.column("id"),
            sa.column("name"),
            sa.column("slug"),
            sa.column("description"),
            sa.column("category"),
            sa.column("icon"),
            sa.column("credit_cost", sa.Integer()),
            sa.column("is_active", sa.Boolean()),
            sa.column("created_at", sa.DateTime(timezone=True)),
            sa.column("updated_at", sa.DateTime(timezone=True)),
        ),
        [
            {
                "id": _id(),
                "name": name,
                "slug": slug,
                "description": description,
                "category": category,
                "icon": icon,
                "credit_cost": cost,
                "is_active": True,
                "created_at": now,
                "updated_at": now,
            }
            for name, slug, description, category, icon, cost in TOOLS
        ],
    )


def downgrade() -> None:
    """Drop the new tables and the credit columns."""
    op.drop_table("plan_resources")
    op.drop_table("plan_phases")
    op.drop_table("learning_plans")
    op.drop_table("app_settings")
    op.drop_table("tool_usages")
    op.drop_table("tools")
    op.drop_table("notifications")
    op.drop_table("budgets")
    op.drop_table("transactions")
    op.drop_table("finance_categories")
    op.drop_index("ix_users_referral_code", table_name="users")
    op.drop_column("users", "referral_code")
    op.drop_column("users", "credit_balance")
