"""
User preference, system prompt and media adapter I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from promptframe_ai.core.database.entities.prompts import PromptType

from .base import CamelModel, PartialUpdate


class UserPreferencesRead(CamelModel):
    id: str
    user_id: str
    default_extraction_prompt: str
    default_concept_prompt: str
    created_at: datetime
    updated_at: datetime


class UserPreferencesUpdate(CamelModel):
    default_extraction_prompt: Optional[str] = None
    default_concept_prompt: Optional[str] = None


class SystemPromptRead(CamelModel):
    """Schema for reading a system prompt from the API."""

    id: str
    name: str
    description: Optional[str] = None
    prompt_text: str
    prompt_type: str
    is_active: bool
    is_default: bool
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class SystemPromptCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    prompt_text: str = Field(min_length=1)
    prompt_type: PromptType
    is_active: bool = False
    is_default: bool = False


class SystemPromptUpdate(PartialUpdate):
    not_nullable = frozenset({"name", "prompt_text", "prompt_type", "is_default"})

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    prompt_text: Optional[str] = Field(default=None, min_length=1)
    prompt_type: Optional[PromptType] = None
    is_default: Optional[bool] = None


class MediaAdapterRead(CamelModel):
    """Schema for reading a media adapter from the API."""

    id: str
    name: str
    description: Optional[str] = None
    vocabulary_adjustments: Optional[str] = None
    lighting_adjustments: Optional[str] = None
    surface_adjustments: Optional[str] = None
    conceptual_adjustments: Optional[str] = None
    is_default: bool
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class MediaAdapterCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    vocabulary_adjustments: Optional[str] = None
    lighting_adjustments: Optional[str] = None
    surface_adjustments: Optional[str] = None
    conceptual_adjustments: Optional[str] = None
    is_default: bool = False


class MediaAdapterUpdate(PartialUpdate):
    not_nullable = frozenset({"name", "is_default"})

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    vocabulary_adjustments: Optional[str] = None
    lighting_adjustments: Optional[str] = None
    surface_adjustments: Optional[str] = None
    conceptual_adjustments: Optional[str] = None
    is_default: Optional[bool] = None
