"""Blog post repository."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import String, cast
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from studentos.core.models.domain import PostStatus

from ..entities import BlogPost
from .base import BaseRepository


class BlogPostRepository(BaseRepository[BlogPost]):
    """Repository for blog posts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, BlogPost)

    async def get_by_slug(self, slug: str) -> Optional[BlogPost]:
        stmt = select(BlogPost).where(BlogPost.slug == slug)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def slugs_like(self, base_slug: str) -> set[str]:
        """Existing slugs equal to ``base_slug`` or starting with ``base_slug-``."""
        stmt = select(BlogPost.slug).where(
            (BlogPost.slug == base_slug) | BlogPost.slug.like(f"{base_slug}-%")
        )
        return set((await self.session.execute(stmt)).scalars().all())

    async def list_published(self, page: int, limit: int, tag: Optional[str] = None) -> tuple[List[BlogPost], int]:
        """Published posts, most recently published first."""
        stmt = select(BlogPost).where(BlogPost.status == PostStatus.PUBLISHED.value)
        if tag:
            # Tags are a JSON array of strings; match the quoted element.
            stmt = stmt.where(cast(BlogPost.tags, String).like(f'%"{tag}"%'))
        stmt = stmt.order_by(BlogPost.published_at.desc())
        return await self.paginate(stmt, page, limit)

    async def list_all(self) -> List[BlogPost]:
        stmt = select(BlogPost).order_by(BlogPost.created_at.desc())
        return list((await self.session.execute(stmt)).scalars().all())
