"""
Generation job and generated image entity models.

A job is one batch request (concepts x variations); every image it produces
is stored as a ``GeneratedImage`` row linked back to the job.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class JobStatus(str, Enum):
    """Lifecycle status of a generation job."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class ImageStatus(str, Enum):
    """Lifecycle status of a single generated image."""

    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"


class GenerationJob(Base, table=True):
    """Persistent generation job.

    Table: generation_jobs
    """

    __tablename__ = "generation_jobs"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    name: str = Field(description="Job display name")
    user_id: Optional[str] = Field(default=None, foreign_key="users.id", index=True, max_length=36)
    session_id: Optional[str] = Field(default=None, index=True, max_length=36, description="Owning project session")
    style_id: Optional[str] = Field(default=None, foreign_key="image_styles.id", max_length=36)
    visual_concepts: List[str] = Field(default_factory=list, sa_type=JSON)
    settings: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    status: str = Field(default=JobStatus.PENDING.value, max_length=16)
    progress: int = Field(default=0, description="Percent of requested images finished (0-100)")
    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"GenerationJob(id={self.id}, status={self.status}, progress={self.progress})"


class GeneratedImage(Base, table=True):
    """Persistent generated or regenerated image.

    Table: generated_images
    """

    __tablename__ = "generated_images"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: Optional[str] = Field(default=None, foreign_key="users.id", index=True, max_length=36)
    job_id: Optional[str] = Field(default=None, foreign_key="generation_jobs.id", index=True, max_length=36)
    source_image_id: Optional[str] = Field(default=None, max_length=36, description="Image this one was edited from")
    visual_concept: str
    image_url: str
    prompt: str
    regeneration_instruction: Optional[str] = Field(default=None)
    status: str = Field(default=ImageStatus.GENERATING.value, max_length=16)
    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"GeneratedImage(id={self.id}, job_id={self.job_id}, status={self.status})"
