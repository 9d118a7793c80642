"""Community feed entity models: posts, comments and likes."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class CommunityPost(Base, table=True):
    """Table: community_posts"""

    __tablename__ = "community_posts"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    content: str
    image_url: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=UTCDateTime)


class Comment(Base, table=True):
    """Table: comments"""

    __tablename__ = "comments"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    post_id: str = Field(foreign_key="community_posts.id", index=True, ondelete="CASCADE")
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    content: str
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)


class Like(Base, table=True):
    """Table: likes"""

    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_like"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    post_id: str = Field(foreign_key="community_posts.id", index=True, ondelete="CASCADE")
    user_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
