"""Blog I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from studentos.core.models.domain import PostStatus

from .base import CamelModel, Pagination


class AuthorCard(CamelModel):
    """Public author summary used by the blog and the community feed."""

    id: str
    name: str
    avatar: Optional[str] = None


class BlogPostCreate(CamelModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    excerpt: Optional[str] = None
    cover_image_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    status: PostStatus = PostStatus.DRAFT


class BlogPostUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    cover_image_url: Optional[str] = None
    tags: Optional[List[str]] = None
    status: Optional[PostStatus] = None


class BlogPostRead(CamelModel):
    id: str
    author_id: str
    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    cover_image_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    status: str
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class BlogPostWithAuthor(BlogPostRead):
    author: AuthorCard


class BlogPage(CamelModel):
    posts: List[BlogPostWithAuthor]
    pagination: Pagination
