"""
Tool catalogue and credit I/O models.

Admins manage the catalogue and the app settings; students read their balance,
spend credits on a tool and page through what they spent.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import Field

from .base import CamelModel, Pagination

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class ToolCreate(CamelModel):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1, pattern=SLUG_PATTERN)
    description: Optional[str] = None
    category: str = Field(min_length=1)
    icon: Optional[str] = None
    credit_cost: int = Field(default=0, ge=0)
    is_active: bool = True


class ToolUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1, pattern=SLUG_PATTERN)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, min_length=1)
    icon: Optional[str] = None
    credit_cost: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class ToolRead(CamelModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    category: str
    icon: Optional[str] = None
    credit_cost: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class AdminToolRead(ToolRead):
    usage_count: int = 0


class ToolSummary(CamelModel):
    name: str
    slug: str
    icon: Optional[str] = None
    category: str


class CreditBalance(CamelModel):
    balance: int
    referral_code: Optional[str] = None


class CreditUseRequest(CamelModel):
    tool_slug: str = Field(min_length=1)


class CreditUseResult(CamelModel):
    """Outcome of a tool use. Free tools report no ``remainingBalance``."""

    tool_name: str
    credit_cost: int
    remaining_balance: Optional[int] = None
    usage_id: Optional[str] = None
    message: str


class InsufficientCredits(CamelModel):
    required: int
    available: int
    shortfall: int
    tool_name: str


class CreditUsageRead(CamelModel):
    id: str
    tool: ToolSummary
    credits: int
    used_at: datetime


class CreditHistory(CamelModel):
    history: List[CreditUsageRead] = Field(default_factory=list)
    pagination: Pagination


SettingValue = Union[str, int, float, bool]
SettingsUpdate = Dict[str, SettingValue]
