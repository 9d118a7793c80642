"""
Shared repository plumbing.

Every table-specific repository subclasses :class:`BaseRepository` and gets
commit-on-write CRUD plus the page/count helpers the list endpoints use.
:class:`QueryBuilder` holds the statement transforms (equality filters,
free-text search, limit/offset) that those repositories compose.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

EntityType = TypeVar("EntityType", bound=SQLModel)


class BaseRepository(Generic[EntityType]):
    """CRUD for one SQLModel table.

    ``create``, ``update`` and ``delete`` commit straight away. Subclasses that
    must land several rows atomically stage them on the session themselves and
    commit once.
    """

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        self.session = session
        self.model = model

    async def create(self, entity: EntityType) -> EntityType:
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def get_by_id(self, entity_id: str) -> Optional[EntityType]:
        return await self.session.get(self.model, entity_id)

    async def update(self, entity: EntityType, changes: Optional[Dict[str, Any]] = None) -> EntityType:
        """Set each attribute in ``changes`` on ``entity``, commit and reload it."""
        for attribute, value in (changes or {}).items():
            setattr(entity, attribute, value)
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity_id: str) -> bool:
        """Remove the row with ``entity_id``; ``False`` when there was none."""
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    async def count_where(self, *conditions: Any) -> int:
        stmt = select(func.count()).select_from(self.model)
        for condition in conditions:
            stmt = stmt.where(condition)
        return int((await self.session.execute(stmt)).scalar_one())

    async def paginate(self, stmt, page: int, limit: int) -> Tuple[List[Any], int]:
        """
        Fetch one page of ``stmt`` together with the total number of matches.

        The total is counted over ``stmt`` with its ordering dropped, so the
        caller can pass the same filtered, ordered statement it pages over.

        Args:
            stmt: Filtered and ordered select statement
            page: Page number, starting at 1
            limit: Page size
        """
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = int((await self.session.execute(count_stmt)).scalar_one())
        page_stmt = QueryBuilder.apply_pagination(stmt, limit, (page - 1) * limit)
        rows = (await self.session.execute(page_stmt)).scalars().all()
        return list(rows), total


class QueryBuilder:
    """Statement transforms shared by the repositories."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """AND an equality clause onto ``stmt`` per filter; unknown columns and ``None`` values are ignored."""
        for column_name, value in filters.items():
            if value is None or not hasattr(model, column_name):
                continue
            stmt = stmt.where(getattr(model, column_name) == value)
        return stmt

    @staticmethod
    def apply_search(stmt, columns: Sequence[Any], search: Optional[str]):
        """Keep rows where any of ``columns`` contains ``search``, ignoring case."""
        if not search:
            return stmt
        pattern = f"%{search}%"
        return stmt.where(or_(*(column.ilike(pattern) for column in columns)))

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        return stmt
