"""
Concept list entity model.

A concept list is a set of marketing image concepts generated for one
company brief, together with the conversation used to refine it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class ConceptList(Base, table=True):
    """Persistent concept list.

    ``concepts`` holds objects, normally ``{"concept": "..."}``.
    ``conversation_history`` holds ``{"role": "user"|"assistant", "content": str}``
    turns and ``previous_state`` the snapshot restored by undo.

    Table: concept_lists
    """

    __tablename__ = "concept_lists"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    name: str
    company_name: str
    reference_image_url: Optional[str] = Field(default=None)
    marketing_content: str
    prompt_id: Optional[str] = Field(default=None, max_length=36)
    prompt_text: Optional[str] = Field(default=None)
    temperature: float = Field(default=0.7)
    literal_metaphorical: float = Field(default=0.0)
    simple_complex: float = Field(default=0.0)
    concepts: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    conversation_history: List[Dict[str, str]] = Field(default_factory=list, sa_type=JSON)
    previous_state: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)
    user_id: Optional[str] = Field(default=None, foreign_key="users.id", index=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"ConceptList(id={self.id}, name={self.name}, concepts={len(self.concepts)})"
