"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that are used throughout the application for database access.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlmodel.ext.asyncio.session import AsyncSession

from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

logger = get_logger(__name__)

# Create global engine and session factory
engine = create_engine(settings.database_url)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Initialize the database.

    SQLite databases (local development) get their tables created from the ORM
    metadata. PostgreSQL deployments are migrated by Alembic before the server
    starts, so nothing is created here.
    """
    if engine.dialect.name == "sqlite":
        await create_all(engine)
        logger.info("Created tables from ORM metadata")
        return
    logger.debug("Skipping table creation, schema is managed by Alembic")
