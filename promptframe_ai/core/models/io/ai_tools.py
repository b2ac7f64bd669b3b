"""
AI style tool I/O models: reference upload, style extraction, concept
generation, style previews and prompt refinement.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import Field

from .base import CamelModel


class UploadedImageResponse(CamelModel):
    url: str = Field(description="Data URL of the stored image")
    file_name: str
    size: int
    mimetype: str
    converted: bool = Field(description="True when the upload was converted to PNG")


class ExtractStyleRequest(CamelModel):
    image_url: str = Field(min_length=1)
    extraction_prompt: str = Field(min_length=1)
    concept_prompt: str = Field(min_length=1)


class ExtractStyleResponse(CamelModel):
    style_data: Dict[str, Any]
    concept: str
    concept_json: str


class GenerateConceptRequest(CamelModel):
    style_id: str


class ConceptResponse(CamelModel):
    concept: str
    concept_json: str


class StylePreviewRequest(CamelModel):
    style_data: Dict[str, Any]
    concept: str = Field(min_length=1)
    model: str = "gpt-image-1"
    size: str = "1024x1024"
    quality: str = "standard"
    transparency: bool = False
    render_text: bool = True


class StylePreviewResponse(CamelModel):
    image_url: str
    prompt: str


class RefineStyleRequest(CamelModel):
    style_data: Dict[str, Any]
    feedback: str = Field(min_length=1)


class RefineStyleResponse(CamelModel):
    refined_style_data: Dict[str, Any]
    original_feedback: str


class IntelligentRefineRequest(CamelModel):
    """Current prompts plus the reference and preview images to compare."""

    reference_image_url: str = Field(min_length=1)
    preview_image_url: str = Field(min_length=1)
    style_prompt: str = Field(min_length=1)
    style_framework: Optional[Dict[str, Any]] = None
    composition_prompt: Optional[str] = None
    composition_framework: Optional[Dict[str, Any]] = None
    concept_prompt: Optional[str] = None
    concept_framework: Optional[Dict[str, Any]] = None


class IntelligentRefineResponse(CamelModel):
    explanation: str
    refined_style_prompt: str
    refined_style_framework: Optional[Dict[str, Any]] = None
    refined_composition_prompt: str = ""
    refined_composition_framework: Optional[Dict[str, Any]] = None
    refined_concept_prompt: str = ""
    refined_concept_framework: Optional[Dict[str, Any]] = None
