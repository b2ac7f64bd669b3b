"""
Generation job, generated image and generation settings I/O models.

``model``, ``size`` and ``quality`` are plain strings here; whether a
combination is supported is decided by ``studio.capabilities`` so the API
can answer with a descriptive 400 instead of a validation error.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import CamelModel


class GenerationSettings(CamelModel):
    """Image model settings for one generation request."""

    model: str = Field(default="gpt-image-1", description="dall-e-2, dall-e-3 or gpt-image-1")
    quality: str = "standard"
    size: str = Field(default="1024x1024", description="1024x1024, 1536x1024 or 1024x1536")
    transparency: bool = False
    variations: int = Field(default=1, ge=1, le=10, description="Images per concept")


class SessionSettings(GenerationSettings):
    """Generation settings stored with a project session."""

    variations: int = Field(default=1, ge=1, le=4)


class GenerateRequest(CamelModel):
    job_name: str = Field(min_length=1)
    style_id: str
    concepts: List[str] = Field(min_length=1)
    settings: GenerationSettings
    session_id: Optional[str] = None


class RegenerateRequest(CamelModel):
    """Edit or re-render an existing image.

    At least one of ``instruction`` and ``settings`` must be given.
    """

    source_image_id: str
    instruction: Optional[str] = None
    session_id: Optional[str] = None
    settings: Optional[GenerationSettings] = None
    use_original_as_reference: bool = True


class JobStartedResponse(CamelModel):
    job_id: str
    message: str
    modified_concept: Optional[str] = None


class GenerationJobRead(CamelModel):
    """Schema for reading a generation job from the API."""

    id: str
    name: str
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    style_id: Optional[str] = None
    visual_concepts: List[str]
    settings: Dict[str, Any]
    status: str
    progress: int
    created_at: datetime


class GeneratedImageRead(CamelModel):
    """Schema for reading a generated image from the API."""

    id: str
    user_id: Optional[str] = None
    job_id: Optional[str] = None
    source_image_id: Optional[str] = None
    visual_concept: str
    image_url: str
    prompt: str
    regeneration_instruction: Optional[str] = None
    status: str
    created_at: datetime
