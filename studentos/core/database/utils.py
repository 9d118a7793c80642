"""
Engine and session factory helpers.

``DATABASE_URL`` is often handed out by hosting providers as a bare
``postgres://`` URL; :func:`normalize_url` points it at the asyncpg driver.
SQLite URLs (tests, local development) pass through unchanged.
"""

from __future__ import annotations

import re

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .base import Base

_POSTGRES_SCHEME = re.compile(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://")


def normalize_url(db_url: str) -> str:
    return _POSTGRES_SCHEME.sub("postgresql+asyncpg://", db_url, count=1)


def create_engine(db_url: str) -> AsyncEngine:
    """Build the async engine, checking pooled connections before reuse."""
    return create_async_engine(normalize_url(db_url), pool_pre_ping=True)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Routers serialize entities after commit, so attributes must stay loaded.
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create every table known to the ORM metadata.

    Used by the test suite and by ``AUTO_CREATE_TABLES`` in development;
    deployed databases are migrated with Alembic.
    """
    from . import entities  # noqa: F401  registers the tables on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
