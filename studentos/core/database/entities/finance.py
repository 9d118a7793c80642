"""Personal finance tracker entity models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from studentos.core.models.domain import BudgetPeriod

from ..base import Base, UTCDateTime, new_id, utc_now


class FinanceCategory(Base, table=True):
    """User-defined income or expense category.

    Table: finance_categories
    """

    __tablename__ = "finance_categories"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    name: str
    type: str
    color: Optional[str] = Field(default=None)
    icon: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)


class Transaction(Base, table=True):
    """One income or expense entry. ``amount`` is always positive; ``type`` carries the sign.

    Table: transactions
    """

    __tablename__ = "transactions"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    category_id: Optional[str] = Field(
        default=None, foreign_key="finance_categories.id", index=True, ondelete="SET NULL"
    )
    amount: float
    type: str = Field(index=True)
    description: Optional[str] = Field(default=None)
    date: datetime = Field(default_factory=utc_now, index=True, sa_type=UTCDateTime)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)


class Budget(Base, table=True):
    """Spending cap for one category per period. At most one per (user, category, period).

    Table: budgets
    """

    __tablename__ = "budgets"
    __table_args__ = (
        UniqueConstraint("user_id", "category_id", "period", name="uq_budget"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    category_id: str = Field(foreign_key="finance_categories.id", index=True, ondelete="CASCADE")
    amount: float
    period: str = Field(default=BudgetPeriod.monthly.value)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)
