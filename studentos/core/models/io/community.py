"""Community feed I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import CamelModel, Pagination
from .blog import AuthorCard


class CommunityPostCreate(CamelModel):
    content: str = Field(min_length=1, max_length=5000)
    image_url: Optional[str] = None


class CommentCreate(CamelModel):
    content: str = Field(min_length=1)


class CommentRead(CamelModel):
    id: str
    post_id: str
    content: str
    created_at: datetime
    author: AuthorCard


class CommunityPostRead(CamelModel):
    id: str
    content: str
    image_url: Optional[str] = None
    created_at: datetime
    author: AuthorCard
    comment_count: int = 0
    like_count: int = 0
    is_liked: bool = False


class CommunityPostDetail(CommunityPostRead):
    comments: List[CommentRead] = Field(default_factory=list)


class CommunityPage(CamelModel):
    posts: List[CommunityPostRead]
    pagination: Pagination


class LikeResponse(CamelModel):
    liked: bool
