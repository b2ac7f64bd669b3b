"""
Concept list I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import CamelModel, PartialUpdate


class ConversationTurn(CamelModel):
    role: str
    content: str


class ConceptListRead(CamelModel):
    """Schema for reading a concept list from the API."""

    id: str
    name: str
    company_name: str
    reference_image_url: Optional[str] = None
    marketing_content: str
    prompt_id: Optional[str] = None
    prompt_text: Optional[str] = None
    temperature: float
    literal_metaphorical: float
    simple_complex: float
    concepts: List[Dict[str, Any]]
    conversation_history: List[ConversationTurn] = Field(default_factory=list)
    can_undo: bool = False
    user_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class GenerateConceptListRequest(CamelModel):
    """Request for a new concept list.

    Ranges are checked by the endpoint so the error messages can name the
    offending slider.
    """

    name: Optional[str] = None
    company_name: Optional[str] = None
    reference_image_url: Optional[str] = None
    marketing_content: Optional[str] = None
    instructions: Optional[str] = None
    prompt_id: Optional[str] = None
    prompt_text: Optional[str] = None
    quantity: int = Field(default=5, ge=1, le=20)
    temperature: float = 0.7
    literal_metaphorical: float = 0.0
    simple_complex: float = 0.0


class ConceptListUpdate(PartialUpdate):
    not_nullable = frozenset({"name", "concepts", "marketing_content"})

    name: Optional[str] = Field(default=None, min_length=1)
    concepts: Optional[List[Dict[str, Any]]] = None
    marketing_content: Optional[str] = None


class ReviseRequest(CamelModel):
    feedback: Optional[str] = None


class RefineRequest(CamelModel):
    feedback: Optional[str] = None
    selected_indices: Optional[List[int]] = None
