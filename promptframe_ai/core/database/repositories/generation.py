"""
Generation job and generated image repositories.

These repositories are used both by request handlers and by the background
generation runner, which opens its own session per job.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.generation import GeneratedImage, GenerationJob, ImageStatus
from .base import AsyncBaseRepository


class GenerationJobRepository(AsyncBaseRepository[GenerationJob]):
    """Repository for generation job data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with async database session.

        Args:
            session: Async SQLModel Session for database operations
        """
        super().__init__(session, GenerationJob)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[GenerationJob]:
        """List jobs with optional pagination and filtering.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (user_id, session_id, status)

        Returns:
            List of GenerationJob instances, newest first
        """
        return await self._list_ordered(GenerationJob.created_at.desc(), limit, offset, filters)

    async def update_progress(self, job_id: str, status: str, progress: int) -> Optional[GenerationJob]:
        """Record job status and progress.

        Args:
            job_id: Job to update
            status: New job status
            progress: Percent complete, clamped to 0..100

        Returns:
            Updated GenerationJob or None if the job no longer exists
        """
        job = await self.get_by_id(job_id)
        if job is None:
            return None
        job.status = status
        job.progress = max(0, min(100, progress))
        return await self.update(job)

    async def migrate_session(self, source_session_id: str, target_session_id: str) -> int:
        """Move every job of one project session to another.

        Args:
            source_session_id: Session the jobs currently belong to
            target_session_id: Session that receives the jobs

        Returns:
            Number of jobs moved
        """
        jobs = await self.list(filters={"session_id": source_session_id})
        for job in jobs:
            job.session_id = target_session_id
            self.session.add(job)
        await self.session.commit()
        return len(jobs)


class GeneratedImageRepository(AsyncBaseRepository[GeneratedImage]):
    """Repository for generated images."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GeneratedImage)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[GeneratedImage]:
        return await self._list_ordered(GeneratedImage.created_at.desc(), limit, offset, filters)

    async def list_by_job(self, job_id: str) -> List[GeneratedImage]:
        return await self.list(filters={"job_id": job_id})

    async def list_completed_by_session(self, session_id: str) -> List[GeneratedImage]:
        """List completed images produced by any job of a project session.

        Args:
            session_id: Project session id

        Returns:
            Completed images, newest first
        """
        stmt = (
            select(GeneratedImage)
            .join(GenerationJob, GeneratedImage.job_id == GenerationJob.id)
            .where(GenerationJob.session_id == session_id)
            .where(GeneratedImage.status == ImageStatus.COMPLETED.value)
            .order_by(GeneratedImage.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def update_fields(self, image: GeneratedImage, changes: Dict[str, Any]) -> GeneratedImage:
        for key, value in changes.items():
            if key in ("id", "user_id", "created_at"):
                continue
            setattr(image, key, value)
        return await self.update(image)

    async def set_status(self, image: GeneratedImage, status: str) -> GeneratedImage:
        image.status = status
        return await self.update(image)
