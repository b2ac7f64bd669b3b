"""
Base database models and utilities.

This module provides the foundational database components used across
all entities in the centralized database layer using SQLModel.
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import ConfigDict
from sqlmodel import SQLModel


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def new_id() -> str:
    """Generate a string UUID primary key."""
    return str(uuid4())


def utc_now() -> datetime:
    """Get current UTC datetime as naive datetime.

    Naive values keep SQLite and PostgreSQL ``timestamp without time zone``
    columns comparable.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
