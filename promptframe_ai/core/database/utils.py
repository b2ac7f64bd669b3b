"""
Engine and session factory helpers.

``create_engine`` forces the asyncpg driver for PostgreSQL URLs,
``create_sessionmaker`` builds the factory used by requests and background
jobs, and ``create_all`` builds the schema for SQLite and tests.
"""

from __future__ import annotations

import re

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession

from .base import Base

POSTGRES_URL = re.compile(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://")


def create_engine(db_url: str) -> AsyncEngine:
    """Async engine for ``db_url``.

    ``postgres://``, ``postgresql://`` and ``postgresql+<driver>://`` all become
    ``postgresql+asyncpg://``. SQLite URLs are used as given and may be shared
    across threads.
    """
    url = POSTGRES_URL.sub("postgresql+asyncpg://", db_url, count=1)
    if url.startswith("sqlite"):
        return create_async_engine(url, connect_args={"check_same_thread": False})
    return create_async_engine(url, pool_pre_ping=True)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Rows stay readable after commit; background jobs keep using them
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create every table that is missing. PostgreSQL deployments use Alembic instead."""
    from . import entities  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
