"""
Process-wide engine and session factory.

Both are built from ``DATABASE_URL`` at import time. Request handlers get a
session through the :func:`get_session` dependency, which tests override.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from studentos.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

engine = create_engine(settings.database_url)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """Create missing tables when ``AUTO_CREATE_TABLES`` is on; otherwise Alembic owns the schema."""
    if settings.auto_create_tables:
        await create_all(engine)
