"""
Image style entity model.

A style carries the prompt text that is prepended to every generated image,
plus the optional AI-extracted data captured from a reference image.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class ImageStyleBase(Base):
    """Base fields for image styles."""

    name: str = Field(description="Display name")
    description: Optional[str] = Field(default=None)
    style_prompt: Optional[str] = Field(default=None, description="Prompt fragment describing the style")
    reference_image_url: Optional[str] = Field(default=None, description="Reference image URL or data URL")
    is_ai_extracted: bool = Field(default=False)
    composition_prompt: Optional[str] = Field(default=None)
    concept_prompt: Optional[str] = Field(default=None, description="Prompt used to generate fresh concepts")
    preview_image_url: Optional[str] = Field(default=None)
    ai_style_data: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)


class ImageStyle(ImageStyleBase, table=True):
    """Persistent image style.

    ``created_by`` is null for shared seeded styles that every user can see.

    Table: image_styles
    """

    __tablename__ = "image_styles"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now)
    created_by: Optional[str] = Field(default=None, foreign_key="users.id", index=True, max_length=36)

    def __repr__(self) -> str:
        return f"ImageStyle(id={self.id}, name={self.name})"
