"""
Prompt configuration entity models.

This module holds the tables that tune how the AI calls are phrased:
per-user default prompts, admin-managed system prompts and media adapters.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class PromptType(str, Enum):
    """Slot a system prompt fills."""

    STYLE_EXTRACTION_INSTRUCTIONS = "style_extraction_instructions"
    STYLE_EXTRACTION_SCHEMA = "style_extraction_schema"
    COMPOSITION_EXTRACTION_INSTRUCTIONS = "composition_extraction_instructions"
    COMPOSITION_EXTRACTION_SCHEMA = "composition_extraction_schema"
    CONCEPT_EXTRACTION_INSTRUCTIONS = "concept_extraction_instructions"
    CONCEPT_EXTRACTION_SCHEMA = "concept_extraction_schema"
    CONCEPT_OUTPUT_SCHEMA = "concept_output_schema"
    INTELLIGENT_REFINE = "intelligent_refine"


class UserPreferences(Base, table=True):
    """Default extraction prompts remembered per user.

    Table: user_preferences
    """

    __tablename__ = "user_preferences"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", unique=True, index=True, max_length=36)
    default_extraction_prompt: str
    default_concept_prompt: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class SystemPrompt(Base, table=True):
    """Admin-managed system prompt. One prompt per type may be active.

    Table: system_prompts
    """

    __tablename__ = "system_prompts"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    name: str
    description: Optional[str] = Field(default=None)
    prompt_text: str
    prompt_type: str = Field(index=True, max_length=64)
    is_active: bool = Field(default=False)
    is_default: bool = Field(default=False)
    created_by: Optional[str] = Field(default=None, foreign_key="users.id", max_length=36)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"SystemPrompt(id={self.id}, type={self.prompt_type}, active={self.is_active})"


class MediaAdapter(Base, table=True):
    """Medium-specific prompt adjustments (photography, illustration...).

    Table: media_adapters
    """

    __tablename__ = "media_adapters"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    name: str
    description: Optional[str] = Field(default=None)
    vocabulary_adjustments: Optional[str] = Field(default=None)
    lighting_adjustments: Optional[str] = Field(default=None)
    surface_adjustments: Optional[str] = Field(default=None)
    conceptual_adjustments: Optional[str] = Field(default=None)
    is_default: bool = Field(default=False)
    created_by: Optional[str] = Field(default=None, foreign_key="users.id", max_length=36)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"MediaAdapter(id={self.id}, name={self.name}, default={self.is_default})"
