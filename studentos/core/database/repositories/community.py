"""Community feed repository: posts, comments and likes."""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities import Comment, CommunityPost, Like
from .base import BaseRepository


class CommunityRepository(BaseRepository[CommunityPost]):
    """Repository for the community feed."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CommunityPost)

    async def list_feed(self, page: int, limit: int) -> tuple[List[CommunityPost], int]:
        stmt = select(CommunityPost).order_by(CommunityPost.created_at.desc())
        return await self.paginate(stmt, page, limit)

    async def _counts(self, model, post_ids: List[str]) -> dict[str, int]:
        if not post_ids:
            return {}
        stmt = select(model.post_id, func.count()).where(model.post_id.in_(post_ids)).group_by(model.post_id)
        return {post_id: int(count) for post_id, count in (await self.session.execute(stmt)).all()}

    async def comment_counts(self, post_ids: Iterable[str]) -> dict[str, int]:
        return await self._counts(Comment, list(post_ids))

    async def like_counts(self, post_ids: Iterable[str]) -> dict[str, int]:
        return await self._counts(Like, list(post_ids))

    async def liked_ids(self, user_id: str, post_ids: Iterable[str]) -> set[str]:
        ids = list(post_ids)
        if not ids:
            return set()
        stmt = select(Like.post_id).where(Like.user_id == user_id, Like.post_id.in_(ids))
        return set((await self.session.execute(stmt)).scalars().all())

    async def list_comments(self, post_id: str) -> List[Comment]:
        """Comments of a post, oldest first."""
        stmt = select(Comment).where(Comment.post_id == post_id).order_by(Comment.created_at.asc())
        return list((await self.session.execute(stmt)).scalars().all())

    async def add_comment(self, post_id: str, user_id: str, content: str) -> Comment:
        comment = Comment(post_id=post_id, user_id=user_id, content=content)
        self.session.add(comment)
        await self.session.commit()
        await self.session.refresh(comment)
        return comment

    async def get_comment(self, comment_id: str) -> Optional[Comment]:
        return await self.session.get(Comment, comment_id)

    async def delete_comment(self, comment: Comment) -> None:
        await self.session.delete(comment)
        await self.session.commit()

    async def get_like(self, post_id: str, user_id: str) -> Optional[Like]:
        stmt = select(Like).where(Like.post_id == post_id, Like.user_id == user_id)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def add_like(self, post_id: str, user_id: str) -> Like:
        like = Like(post_id=post_id, user_id=user_id)
        self.session.add(like)
        await self.session.commit()
        await self.session.refresh(like)
        return like

    async def delete_like(self, like: Like) -> None:
        await self.session.delete(like)
        await self.session.commit()

    async def delete_cascade(self, post: CommunityPost) -> None:
        await self.session.execute(delete(Comment).where(Comment.post_id == post.id))
        await self.session.execute(delete(Like).where(Like.post_id == post.id))
        await self.session.delete(post)
        await self.session.commit()
