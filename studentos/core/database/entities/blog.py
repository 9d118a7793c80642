"""Blog post entity model."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field

from studentos.core.models.domain import PostStatus

from ..base import Base, UTCDateTime, new_id, utc_now


class BlogPost(Base, table=True):
    """Admin-authored article addressed by its slug.

    Table: blog_posts
    """

    __tablename__ = "blog_posts"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    author_id: str = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    title: str
    slug: str = Field(unique=True, index=True)
    content: str
    excerpt: Optional[str] = Field(default=None)
    cover_image_url: Optional[str] = Field(default=None)
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    status: str = Field(default=PostStatus.DRAFT.value, index=True)
    published_at: Optional[datetime] = Field(default=None, index=True, sa_type=UTCDateTime)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)
