"""
Project session I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import CamelModel, PartialUpdate
from .generation import SessionSettings


class ProjectSessionRead(CamelModel):
    """Schema for reading a project session from the API."""

    id: str
    user_id: Optional[str] = None
    name: Optional[str] = None
    display_name: str
    style_id: Optional[str] = None
    visual_concepts: List[str]
    settings: Dict[str, Any]
    is_temporary: bool
    has_unsaved_changes: bool
    created_at: datetime
    updated_at: datetime


class ProjectSessionCreate(CamelModel):
    name: Optional[str] = None
    display_name: str = Field(min_length=1)
    style_id: Optional[str] = None
    visual_concepts: List[str] = Field(default_factory=list)
    settings: SessionSettings = Field(default_factory=SessionSettings)
    is_temporary: bool = False
    has_unsaved_changes: bool = False


class ProjectSessionUpdate(PartialUpdate):
    not_nullable = frozenset({"display_name", "visual_concepts", "settings", "is_temporary", "has_unsaved_changes"})

    name: Optional[str] = None
    display_name: Optional[str] = Field(default=None, min_length=1)
    style_id: Optional[str] = None
    visual_concepts: Optional[List[str]] = None
    settings: Optional[SessionSettings] = None
    is_temporary: Optional[bool] = None
    has_unsaved_changes: Optional[bool] = None


class MigrateJobsRequest(CamelModel):
    source_session_id: Optional[str] = None


class MigratedJobsResponse(CamelModel):
    message: str
    migrated_count: int


class TemporaryClearedResponse(CamelModel):
    message: str
    deleted_count: int
