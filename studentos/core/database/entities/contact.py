"""Contact form entity model."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class ContactMessage(Base, table=True):
    """Message submitted through the public contact form.

    Table: contact_messages
    """

    __tablename__ = "contact_messages"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    email: str
    subject: Optional[str] = Field(default=None)
    message: str
    is_read: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=UTCDateTime)
