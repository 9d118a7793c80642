"""
Tool catalogue and credit entity models.

Tools are the paid features (mostly the AI helpers) a student spends credits
on. Every paid use is recorded as a :class:`ToolUsage`; the balance itself
lives on the account row.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class Tool(Base, table=True):
    """Table: tools"""

    __tablename__ = "tools"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    slug: str = Field(unique=True, index=True)
    description: Optional[str] = Field(default=None)
    category: str
    icon: Optional[str] = Field(default=None)
    credit_cost: int = Field(default=0)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)


class ToolUsage(Base, table=True):
    """Credits spent on one use of a tool.

    Table: tool_usages
    """

    __tablename__ = "tool_usages"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    tool_id: str = Field(foreign_key="tools.id", index=True, ondelete="CASCADE")
    credits: int
    used_at: datetime = Field(default_factory=utc_now, index=True, sa_type=UTCDateTime)


class AppSetting(Base, table=True):
    """Admin-editable key/value setting. Values are stored as strings.

    Table: app_settings
    """

    __tablename__ = "app_settings"
    __table_args__ = ({"extend_existing": True},)

    key: str = Field(primary_key=True)
    value: str
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)
