"""
Project session entity model.

A project session groups the jobs a user runs while working on one set of
concepts. Sessions without a ``name`` are unsaved working sessions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class ProjectSession(Base, table=True):
    """Persistent project session.

    Table: project_sessions
    """

    __tablename__ = "project_sessions"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: Optional[str] = Field(default=None, foreign_key="users.id", index=True, max_length=36)
    name: Optional[str] = Field(default=None, description="Saved name, null for working sessions")
    display_name: str
    style_id: Optional[str] = Field(default=None, foreign_key="image_styles.id", max_length=36)
    visual_concepts: List[str] = Field(default_factory=list, sa_type=JSON)
    settings: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    is_temporary: bool = Field(default=False)
    has_unsaved_changes: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"ProjectSession(id={self.id}, display_name={self.display_name})"
