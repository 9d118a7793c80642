"""Notification I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, model_validator

from studentos.core.models.domain import NotificationType

from .base import CamelModel, Pagination


class NotificationCreate(CamelModel):
    title: str = Field(min_length=1)
    message: Optional[str] = None
    type: NotificationType = NotificationType.INFO
    link: Optional[str] = None


class NotificationRead(CamelModel):
    id: str
    title: str
    message: Optional[str] = None
    type: str
    link: Optional[str] = None
    is_read: bool
    created_at: datetime


class NotificationInbox(CamelModel):
    notifications: List[NotificationRead] = Field(default_factory=list)
    unread_count: int = 0


class MarkedRead(CamelModel):
    updated: int


class NotificationSend(NotificationCreate):
    """Admin message to one account (by email) or, with ``broadcast``, to every active account."""

    email: Optional[EmailStr] = None
    broadcast: bool = False

    @model_validator(mode="after")
    def _one_target(self) -> "NotificationSend":
        if self.broadcast == (self.email is not None):
            raise ValueError("Provide either an email or broadcast, not both")
        return self


class NotificationSent(CamelModel):
    message: str
    recipients: int


class NotificationRecipient(CamelModel):
    id: str
    email: str
    full_name: Optional[str] = None


class SentNotificationRead(NotificationRead):
    user: Optional[NotificationRecipient] = None


class NotificationHistory(CamelModel):
    notifications: List[SentNotificationRead] = Field(default_factory=list)
    pagination: Pagination
