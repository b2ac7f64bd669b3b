"""
Image generation endpoints.

``/generate`` and ``/regenerate`` validate the request, create a job in the
``running`` state and hand the work to the background runner; clients then
poll ``/jobs/{id}`` and ``/jobs/{id}/images``.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, BackgroundTasks, HTTPException, status

from promptframe_ai.core.database.entities.generation import GenerationJob, JobStatus
from promptframe_ai.core.database.entities.users import User
from promptframe_ai.core.database.repositories import (
    GeneratedImageRepository,
    GenerationJobRepository,
    ImageStyleRepository,
)
from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.core.models.io import (
    GeneratedImageRead,
    GenerateRequest,
    GenerationJobRead,
    GenerationSettings,
    JobStartedResponse,
    RegenerateRequest,
)
from promptframe_ai.server.auth.dependencies import CurrentUser
from promptframe_ai.server.exception_handlers import to_http_exception
from promptframe_ai.server.services.deps import RunnerDep, SessionDep
from promptframe_ai.studio.capabilities import validate_settings
from promptframe_ai.studio.errors import CapabilityError

logger = get_logger(__name__)

router = APIRouter(tags=["generation"])


def _check_settings(settings: GenerationSettings, require_editing: bool = False) -> None:
    try:
        validate_settings(settings, require_editing=require_editing)
    except CapabilityError as e:
        raise to_http_exception(e) from e


async def _get_owned_job(repo: GenerationJobRepository, job_id: str, user: User) -> GenerationJob:
    job = await repo.get_by_id(job_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    if not user.is_admin and job.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied: not your job")
    return job


@router.post(
    "/generate",
    response_model=JobStartedResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Start Generation",
    description="Generate `variations` images for every concept with the selected style. Runs in the background.",
    responses={
        400: {"description": "Settings not supported by the selected model"},
        404: {"description": "Style not found"},
    },
)
async def generate(
    payload: GenerateRequest,
    background_tasks: BackgroundTasks,
    user: CurrentUser,
    session: SessionDep,
    runner: RunnerDep,
) -> JobStartedResponse:
    """
    Start an image generation job.

    - **jobName**: Display name of the job.
    - **styleId**: Style whose prompt is combined with every concept.
    - **concepts**: Visual concepts, at least one.
    - **settings**: Model, size, quality, transparency and variations (1-10).
    - **sessionId**: Optional project session the images belong to.
    """
    _check_settings(payload.settings)

    style = await ImageStyleRepository(session).get_by_id(payload.style_id)
    if style is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Style not found")

    job = await GenerationJobRepository(session).create(
        GenerationJob(
            name=payload.job_name,
            user_id=user.id,
            session_id=payload.session_id,
            style_id=style.id,
            visual_concepts=list(payload.concepts),
            settings=payload.settings.model_dump(),
            status=JobStatus.RUNNING.value,
        )
    )
    logger.info(
        f"User {user.id} started job {job.id}: {len(payload.concepts)} concept(s) x {payload.settings.variations}"
    )

    background_tasks.add_task(
        runner.run_generation, job.id, style.style_prompt, list(payload.concepts), payload.settings
    )
    return JobStartedResponse(job_id=job.id, message="Generation started")


@router.post(
    "/regenerate",
    response_model=JobStartedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Regenerate Image",
    description=(
        "Edit an existing image (useOriginalAsReference=true) or render its concept again with an "
        "instruction and/or new settings. Runs in the background."
    ),
    responses={
        400: {"description": "Nothing to change, or settings not supported by the model"},
        403: {"description": "Image belongs to another user"},
        404: {"description": "Source image, source job or style not found"},
    },
)
async def regenerate(
    payload: RegenerateRequest,
    background_tasks: BackgroundTasks,
    user: CurrentUser,
    session: SessionDep,
    runner: RunnerDep,
) -> JobStartedResponse:
    """
    Start a regeneration job from an existing image.

    Settings default to the settings of the job that produced the source
    image. When editing the original, the model must support image edits.
    """
    instruction = payload.instruction or None
    if not instruction and payload.settings is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either instruction or settings must be provided for regeneration",
        )

    source_image = await GeneratedImageRepository(session).get_by_id(payload.source_image_id)
    if source_image is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Source image not found")
    if not user.is_admin and source_image.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied: not your image")

    jobs = GenerationJobRepository(session)
    source_job = await jobs.get_by_id(source_image.job_id) if source_image.job_id else None
    if source_job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Source job not found")

    style = await ImageStyleRepository(session).get_by_id(source_job.style_id) if source_job.style_id else None
    if style is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Style not found")

    settings = payload.settings or GenerationSettings.model_validate(source_job.settings)
    _check_settings(settings, require_editing=payload.use_original_as_reference)

    mode_prefix = "Edit" if payload.use_original_as_reference else "Regen"
    if instruction:
        modified_concept = f"{source_image.visual_concept} ({instruction})"
        job_name = f"{mode_prefix}: {modified_concept}"
    else:
        modified_concept = source_image.visual_concept
        settings_label = "Enhancement" if payload.use_original_as_reference else "Settings Update"
        job_name = f"{settings_label}: {modified_concept}"

    job = await jobs.create(
        GenerationJob(
            name=job_name,
            user_id=user.id,
            session_id=payload.session_id or source_job.session_id,
            style_id=style.id,
            visual_concepts=[modified_concept],
            settings=settings.model_dump(),
            status=JobStatus.RUNNING.value,
        )
    )
    logger.info(f"User {user.id} started regeneration job {job.id} from image {source_image.id}")

    if payload.use_original_as_reference:
        background_tasks.add_task(runner.run_regeneration, job.id, source_image, instruction, settings)
    else:
        background_tasks.add_task(runner.run_generation, job.id, style.style_prompt, [modified_concept], settings)

    return JobStartedResponse(job_id=job.id, message="Regeneration started", modified_concept=modified_concept)


@router.get(
    "/jobs/{job_id}",
    response_model=GenerationJobRead,
    summary="Get Job",
    description="Get the status and progress of a generation job.",
    responses={
        403: {"description": "Job belongs to another user"},
        404: {"description": "Job not found"},
    },
)
async def get_job(job_id: str, user: CurrentUser, session: SessionDep) -> GenerationJobRead:
    job = await _get_owned_job(GenerationJobRepository(session), job_id, user)
    return GenerationJobRead.model_validate(job)


@router.get(
    "/jobs/{job_id}/images",
    response_model=List[GeneratedImageRead],
    summary="List Job Images",
    responses={
        403: {"description": "Job belongs to another user"},
        404: {"description": "Job not found"},
    },
)
async def list_job_images(job_id: str, user: CurrentUser, session: SessionDep) -> List[GeneratedImageRead]:
    await _get_owned_job(GenerationJobRepository(session), job_id, user)
    images = await GeneratedImageRepository(session).list_by_job(job_id)
    return [GeneratedImageRead.model_validate(image) for image in images]
