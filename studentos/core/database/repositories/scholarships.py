"""
Scholarship repository.

Public listing with filters, per-user bookmarks and the admin catalogue view.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities import SavedScholarship, Scholarship
from .base import BaseRepository, QueryBuilder


class ScholarshipRepository(BaseRepository[Scholarship]):
    """Repository for scholarships and saved scholarships."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Scholarship)

    async def list_active(
        self,
        page: int,
        limit: int,
        country: Optional[str] = None,
        study_level: Optional[str] = None,
        search: Optional[str] = None,
    ) -> tuple[List[Scholarship], int]:
        """Active scholarships, soonest deadline first."""
        stmt = select(Scholarship).where(Scholarship.is_active == True)  # noqa: E712
        stmt = QueryBuilder.apply_filters(stmt, Scholarship, {"country": country, "study_level": study_level})
        stmt = QueryBuilder.apply_search(stmt, [Scholarship.title, Scholarship.institution], search)
        stmt = stmt.order_by(Scholarship.deadline.asc())
        return await self.paginate(stmt, page, limit)

    async def list_admin(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> tuple[List[Scholarship], int]:
        """Every scholarship regardless of state, newest first."""
        stmt = select(Scholarship)
        if is_active is not None:
            stmt = stmt.where(Scholarship.is_active == is_active)
        stmt = QueryBuilder.apply_search(stmt, [Scholarship.title, Scholarship.institution], search)
        stmt = stmt.order_by(Scholarship.created_at.desc())
        return await self.paginate(stmt, page, limit)

    async def stats(self, expiring_before: datetime, now: datetime) -> dict[str, int]:
        total = await self.count_where()
        active = await self.count_where(Scholarship.is_active == True)  # noqa: E712
        expiring = await self.count_where(
            Scholarship.is_active == True,  # noqa: E712
            Scholarship.deadline >= now,
            Scholarship.deadline <= expiring_before,
        )
        saves = (await self.session.execute(select(func.count()).select_from(SavedScholarship))).scalar_one()
        return {
            "total": total,
            "active": active,
            "inactive": total - active,
            "expiring_soon": expiring,
            "total_saves": int(saves),
        }

    async def saved_ids(self, user_id: str, scholarship_ids: Iterable[str]) -> set[str]:
        """Subset of ``scholarship_ids`` bookmarked by ``user_id``."""
        ids = list(scholarship_ids)
        if not ids:
            return set()
        stmt = select(SavedScholarship.scholarship_id).where(
            SavedScholarship.user_id == user_id, SavedScholarship.scholarship_id.in_(ids)
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def get_saved(self, user_id: str, scholarship_id: str) -> Optional[SavedScholarship]:
        stmt = select(SavedScholarship).where(
            SavedScholarship.user_id == user_id, SavedScholarship.scholarship_id == scholarship_id
        )
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def save_for_user(self, user_id: str, scholarship_id: str) -> SavedScholarship:
        saved = SavedScholarship(user_id=user_id, scholarship_id=scholarship_id)
        self.session.add(saved)
        await self.session.commit()
        await self.session.refresh(saved)
        return saved

    async def unsave_for_user(self, saved: SavedScholarship) -> None:
        await self.session.delete(saved)
        await self.session.commit()

    async def list_saved(self, user_id: str) -> List[tuple[Scholarship, datetime]]:
        """Bookmarked scholarships with their save time, newest save first."""
        stmt = (
            select(Scholarship, SavedScholarship.saved_at)
            .join(SavedScholarship, SavedScholarship.scholarship_id == Scholarship.id)
            .where(SavedScholarship.user_id == user_id)
            .order_by(SavedScholarship.saved_at.desc())
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def delete_cascade(self, scholarship: Scholarship) -> None:
        await self.session.execute(delete(SavedScholarship).where(SavedScholarship.scholarship_id == scholarship.id))
        await self.session.delete(scholarship)
        await self.session.commit()
