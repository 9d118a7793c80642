"""In-app notification entity model."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from studentos.core.models.domain import NotificationType

from ..base import Base, UTCDateTime, new_id, utc_now


class Notification(Base, table=True):
    """Table: notifications"""

    __tablename__ = "notifications"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    title: str
    message: Optional[str] = Field(default=None)
    type: str = Field(default=NotificationType.INFO.value)
    link: Optional[str] = Field(default=None)
    is_read: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=UTCDateTime)
