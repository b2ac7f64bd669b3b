"""
Background generation and regeneration runner.

Jobs are started by the API after the job row is created and run as FastAPI
background tasks. The runner opens its own database session for every job,
calls the image API once per requested image and keeps the job progress up
to date. Errors never escape: a failing image is counted as failed and a
fatal error marks the whole job failed.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Sequence

from sqlmodel.ext.asyncio.session import AsyncSession

from promptframe_ai.core.database.entities.generation import (
    GeneratedImage,
    ImageStatus,
    JobStatus,
)
from promptframe_ai.core.database.repositories import (
    GeneratedImageRepository,
    GenerationJobRepository,
)
from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.core.monitoring import log_error, log_generation_job

from .capabilities import build_image_params
from .image_client import ImageClient
from .image_io import download_image, to_rgba_png
from .prompts import build_edit_prompt, build_generation_prompt

logger = get_logger(__name__)


def job_progress(completed: int, failed: int, total: int) -> int:
    if total <= 0:
        return 100
    return round((completed + failed) / total * 100)


def job_status(completed: int, failed: int, total: int) -> str:
    return JobStatus.COMPLETED.value if completed + failed >= total else JobStatus.RUNNING.value


class GenerationRunner:
    """Execute generation jobs outside the request cycle.

    Args:
        session_factory: Callable returning a new ``AsyncSession`` context manager
        image_client: Client used for image generation and editing
        delay_seconds: Pause after every successful image call
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        image_client: ImageClient,
        delay_seconds: float = 1.0,
    ) -> None:
        self.session_factory = session_factory
        self.image_client = image_client
        self.delay_seconds = delay_seconds

    async def _record_progress(
        self, jobs: GenerationJobRepository, job_id: str, completed: int, failed: int, total: int
    ) -> None:
        await jobs.update_progress(job_id, job_status(completed, failed, total), job_progress(completed, failed, total))

    async def _pause(self, succeeded: bool, more_pending: bool) -> None:
        if succeeded and more_pending and self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

    async def _fail_job(self, job_id: str, error: Exception) -> None:
        logger.error(f"Generation job {job_id} failed: {error}", exc_info=True)
        log_error("GenerationJobError", str(error), {"job_id": job_id})
        try:
            async with self.session_factory() as session:
                jobs = GenerationJobRepository(session)
                job = await jobs.get_by_id(job_id)
                if job is not None:
                    await jobs.update_progress(job_id, JobStatus.FAILED.value, job.progress)
        except Exception as e:
            logger.error(f"Could not mark job {job_id} as failed: {e}")

    async def run_generation(
        self,
        job_id: str,
        style_prompt: Optional[str],
        concepts: Sequence[str],
        settings: Any,
    ) -> None:
        """Generate ``settings.variations`` images for every concept.

        Args:
            job_id: Job the images belong to
            style_prompt: Style text mixed into every prompt
            concepts: Visual concepts to render
            settings: Generation settings (model, size, quality, transparency, variations)
        """
        total = len(concepts) * settings.variations
        completed = 0
        failed = 0
        logger.info(f"Starting generation job {job_id}: {len(concepts)} concept(s) x {settings.variations}")

        try:
            async with self.session_factory() as session:
                jobs = GenerationJobRepository(session)
                images = GeneratedImageRepository(session)
                job = await jobs.get_by_id(job_id)
                if job is None:
                    logger.warning(f"Generation job {job_id} disappeared before it started")
                    return
                owner_id = job.user_id

                for concept in concepts:
                    for variation in range(settings.variations):
                        succeeded = False
                        try:
                            prompt = build_generation_prompt(style_prompt, concept, settings)
                            params = build_image_params(
                                settings.model, settings.size, settings.quality, prompt, settings.transparency
                            )
                            image_url = await self.image_client.generate(params)
                            image = await images.create(
                                GeneratedImage(
                                    user_id=owner_id,
                                    job_id=job_id,
                                    visual_concept=concept,
                                    image_url=image_url,
                                    prompt=prompt,
                                    status=ImageStatus.GENERATING.value,
                                )
                            )
                            await images.set_status(image, ImageStatus.COMPLETED.value)
                            completed += 1
                            succeeded = True
                        except Exception as e:
                            failed += 1
                            logger.error(
                                f"Failed to generate variation {variation + 1} for concept '{concept[:60]}': {e}"
                            )
                            log_error("ImageGenerationError", str(e), {"job_id": job_id})
                            await session.rollback()

                        await self._record_progress(jobs, job_id, completed, failed, total)
                        await self._pause(succeeded, completed + failed < total)
        except Exception as e:
            await self._fail_job(job_id, e)
            log_generation_job(job_id, JobStatus.FAILED.value, completed, failed, total)
            return

        logger.info(f"Generation job {job_id} finished: {completed} completed, {failed} failed of {total}")
        log_generation_job(job_id, job_status(completed, failed, total), completed, failed, total)

    async def run_regeneration(
        self,
        job_id: str,
        source_image: GeneratedImage,
        instruction: Optional[str],
        settings: Any,
    ) -> None:
        """Edit a source image ``settings.variations`` times.

        The source image is downloaded and converted to RGBA PNG once; a
        download or conversion failure fails the whole job.

        Args:
            job_id: Job the new images belong to
            source_image: Image being edited
            instruction: Optional edit instruction
            settings: Generation settings (model, size, quality, transparency, variations)
        """
        total = settings.variations
        completed = 0
        failed = 0
        source_id = source_image.id
        visual_concept = source_image.visual_concept
        source_url = source_image.image_url
        logger.info(f"Starting regeneration job {job_id} from image {source_id}")

        try:
            data, _ = await download_image(source_url)
            png = to_rgba_png(data)
            edit_prompt, enhanced_prompt = build_edit_prompt(instruction, settings)

            async with self.session_factory() as session:
                jobs = GenerationJobRepository(session)
                images = GeneratedImageRepository(session)
                job = await jobs.get_by_id(job_id)
                if job is None:
                    logger.warning(f"Regeneration job {job_id} disappeared before it started")
                    return
                owner_id = job.user_id

                for variation in range(total):
                    succeeded = False
                    try:
                        image_url = await self.image_client.edit(
                            png,
                            model=settings.model,
                            prompt=enhanced_prompt,
                            size=settings.size,
                            quality=settings.quality,
                            transparency=settings.transparency,
                        )
                        image = await images.create(
                            GeneratedImage(
                                user_id=owner_id,
                                job_id=job_id,
                                source_image_id=source_id,
                                visual_concept=visual_concept,
                                image_url=image_url,
                                prompt=f"Image edit: {edit_prompt} (applied to original image)",
                                regeneration_instruction=instruction,
                                status=ImageStatus.GENERATING.value,
                            )
                        )
                        await images.set_status(image, ImageStatus.COMPLETED.value)
                        completed += 1
                        succeeded = True
                    except Exception as e:
                        failed += 1
                        logger.error(f"Failed to edit variation {variation + 1} of image {source_id}: {e}")
                        log_error("ImageEditError", str(e), {"job_id": job_id})
                        await session.rollback()

                    await self._record_progress(jobs, job_id, completed, failed, total)
                    await self._pause(succeeded, completed + failed < total)
        except Exception as e:
            await self._fail_job(job_id, e)
            log_generation_job(job_id, JobStatus.FAILED.value, completed, failed, total)
            return

        logger.info(f"Regeneration job {job_id} finished: {completed} completed, {failed} failed of {total}")
        log_generation_job(job_id, job_status(completed, failed, total), completed, failed, total)
