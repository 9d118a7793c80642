"""Finance tracker I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from studentos.core.database.base import as_utc
from studentos.core.models.domain import BudgetPeriod, TransactionType

from .base import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1)
    type: TransactionType
    color: Optional[str] = None
    icon: Optional[str] = None


class CategoryRead(CamelModel):
    id: str
    name: str
    type: str
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: datetime


class TransactionCreate(CamelModel):
    amount: float = Field(gt=0)
    type: TransactionType
    category_id: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = Field(default=None, description="Defaults to now")

    date_utc = field_validator("date")(as_utc)


class TransactionRead(CamelModel):
    id: str
    amount: float
    type: str
    category_id: Optional[str] = None
    category: Optional[CategoryRead] = None
    description: Optional[str] = None
    date: datetime
    created_at: datetime


class FinanceSummary(CamelModel):
    """Totals for the current calendar month (UTC)."""

    income: float
    expense: float
    balance: float
    recent_transactions: List[TransactionRead] = Field(default_factory=list)


class BudgetUpsert(CamelModel):
    category_id: str
    amount: float = Field(gt=0)
    period: BudgetPeriod = BudgetPeriod.monthly


class BudgetRead(CamelModel):
    id: str
    category_id: str
    category: Optional[CategoryRead] = None
    amount: float
    period: str
    created_at: datetime
    updated_at: datetime


class BudgetProgress(BudgetRead):
    spent: float = 0.0
    remaining: float = 0.0
