"""
Image style I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from .base import CamelModel, PartialUpdate


class ImageStyleRead(CamelModel):
    """Schema for reading an image style from the API."""

    id: str
    name: str
    description: Optional[str] = None
    style_prompt: Optional[str] = None
    reference_image_url: Optional[str] = None
    is_ai_extracted: bool = False
    composition_prompt: Optional[str] = None
    concept_prompt: Optional[str] = None
    preview_image_url: Optional[str] = None
    ai_style_data: Optional[Dict[str, Any]] = None
    created_at: datetime
    created_by: Optional[str] = None


class ImageStyleCreate(CamelModel):
    """Schema for creating an image style. The owner is the current user."""

    name: str = Field(min_length=1)
    description: Optional[str] = None
    style_prompt: Optional[str] = None
    reference_image_url: Optional[str] = None
    is_ai_extracted: bool = False
    composition_prompt: Optional[str] = None
    concept_prompt: Optional[str] = None
    preview_image_url: Optional[str] = None
    ai_style_data: Optional[Dict[str, Any]] = None


class ImageStyleUpdate(PartialUpdate):
    """Partial style update; unknown fields such as ``createdBy`` are ignored."""

    not_nullable = frozenset({"name", "is_ai_extracted"})

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    style_prompt: Optional[str] = None
    reference_image_url: Optional[str] = None
    is_ai_extracted: Optional[bool] = None
    composition_prompt: Optional[str] = None
    concept_prompt: Optional[str] = None
    preview_image_url: Optional[str] = None
    ai_style_data: Optional[Dict[str, Any]] = None
