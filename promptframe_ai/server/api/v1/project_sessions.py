"""
Project session endpoints.

A project session groups the generation jobs of one piece of work. Unnamed
"working" sessions are created on demand; temporary sessions can be cleared
in bulk. Fixed paths (``/working``, ``/temporary``) are registered before
``/{session_id}`` so they are not captured as ids.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from promptframe_ai.core.database.entities.project_sessions import ProjectSession
from promptframe_ai.core.database.entities.users import User
from promptframe_ai.core.database.repositories import (
    GeneratedImageRepository,
    GenerationJobRepository,
    ProjectSessionRepository,
)
from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.core.models.io import (
    GeneratedImageRead,
    MigratedJobsResponse,
    MigrateJobsRequest,
    ProjectSessionCreate,
    ProjectSessionRead,
    ProjectSessionUpdate,
    SessionSettings,
    TemporaryClearedResponse,
)
from promptframe_ai.server.auth.dependencies import CurrentUser
from promptframe_ai.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

WORKING_SESSION_NAME = "Working Session"
ACCESS_DENIED = "Access denied: not your session"


def _owns(project_session: ProjectSession, user: User) -> bool:
    return user.is_admin or project_session.user_id == user.id


async def _get_owned_session(repo: ProjectSessionRepository, session_id: str, user: User) -> ProjectSession:
    project_session = await repo.get_by_id(session_id)
    if project_session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    if not _owns(project_session, user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ACCESS_DENIED)
    return project_session


@router.get("", response_model=List[ProjectSessionRead], summary="List Sessions")
async def list_sessions(user: CurrentUser, session: SessionDep) -> List[ProjectSessionRead]:
    sessions = await ProjectSessionRepository(session).list_for_user(user)
    return [ProjectSessionRead.model_validate(item) for item in sessions]


@router.get(
    "/working",
    response_model=ProjectSessionRead,
    summary="New Working Session",
    description="Create and return a fresh unnamed working session with default settings.",
)
async def create_working_session(user: CurrentUser, session: SessionDep) -> ProjectSessionRead:
    working = await ProjectSessionRepository(session).create(
        ProjectSession(
            user_id=user.id,
            name=None,
            display_name=WORKING_SESSION_NAME,
            visual_concepts=[],
            settings=SessionSettings().model_dump(),
            is_temporary=False,
            has_unsaved_changes=False,
        )
    )
    logger.debug(f"Created working session {working.id} for user {user.id}")
    return ProjectSessionRead.model_validate(working)


@router.get("/temporary", response_model=List[ProjectSessionRead], summary="List Temporary Sessions")
async def list_temporary_sessions(user: CurrentUser, session: SessionDep) -> List[ProjectSessionRead]:
    sessions = await ProjectSessionRepository(session).list_temporary_for_user(user.id)
    return [ProjectSessionRead.model_validate(item) for item in sessions]


@router.delete("/temporary", response_model=TemporaryClearedResponse, summary="Clear Temporary Sessions")
async def clear_temporary_sessions(user: CurrentUser, session: SessionDep) -> TemporaryClearedResponse:
    deleted = await ProjectSessionRepository(session).clear_temporary_for_user(user.id)
    logger.info(f"Cleared {deleted} temporary session(s) of user {user.id}")
    return TemporaryClearedResponse(message="Temporary sessions cleared", deleted_count=deleted)


@router.get(
    "/{session_id}",
    response_model=ProjectSessionRead,
    summary="Get Session",
    responses={
        403: {"description": "Session has no owner or belongs to another user"},
        404: {"description": "Session not found"},
    },
)
async def get_project_session(session_id: str, user: CurrentUser, session: SessionDep) -> ProjectSessionRead:
    project_session = await ProjectSessionRepository(session).get_by_id(session_id)
    if project_session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Session not found", "sessionId": session_id},
        )
    if not _owns(project_session, user):
        logger.warning(f"User {user.id} denied access to session {session_id} owned by {project_session.user_id}")
        details = (
            "This session has no owner assigned"
            if project_session.user_id is None
            else "Session belongs to another user"
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail={"error": ACCESS_DENIED, "details": details})
    return ProjectSessionRead.model_validate(project_session)


@router.get(
    "/{session_id}/images",
    response_model=List[GeneratedImageRead],
    summary="List Session Images",
    description="List the completed images of every job in the session, newest first.",
)
async def list_session_images(session_id: str, user: CurrentUser, session: SessionDep) -> List[GeneratedImageRead]:
    await _get_owned_session(ProjectSessionRepository(session), session_id, user)
    images = await GeneratedImageRepository(session).list_completed_by_session(session_id)
    return [GeneratedImageRead.model_validate(image) for image in images]


@router.post(
    "/{session_id}/migrate-jobs",
    response_model=MigratedJobsResponse,
    summary="Migrate Jobs",
    description="Move every generation job of `sourceSessionId` into this session.",
    responses={
        400: {"description": "sourceSessionId missing"},
        403: {"description": "Either session belongs to another user"},
        404: {"description": "Either session not found"},
    },
)
async def migrate_jobs(
    session_id: str, payload: MigrateJobsRequest, user: CurrentUser, session: SessionDep
) -> MigratedJobsResponse:
    if not payload.source_session_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="sourceSessionId is required")

    repo = ProjectSessionRepository(session)
    target = await repo.get_by_id(session_id)
    source = await repo.get_by_id(payload.source_session_id)
    if target is None or source is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    if not user.is_admin and (target.user_id != user.id or source.user_id != user.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ACCESS_DENIED)

    migrated = await GenerationJobRepository(session).migrate_session(source.id, target.id)
    logger.info(f"Migrated {migrated} job(s) from session {source.id} to {target.id}")
    return MigratedJobsResponse(message="Generation jobs migrated successfully", migrated_count=migrated)


@router.post(
    "",
    response_model=ProjectSessionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Session",
)
async def create_project_session(
    payload: ProjectSessionCreate, user: CurrentUser, session: SessionDep
) -> ProjectSessionRead:
    data = payload.model_dump()
    project_session = await ProjectSessionRepository(session).create(ProjectSession(**data, user_id=user.id))
    return ProjectSessionRead.model_validate(project_session)


@router.put(
    "/{session_id}",
    response_model=ProjectSessionRead,
    summary="Update Session",
    responses={
        403: {"description": "Session belongs to another user"},
        404: {"description": "Session not found"},
    },
)
async def update_project_session(
    session_id: str, payload: ProjectSessionUpdate, user: CurrentUser, session: SessionDep
) -> ProjectSessionRead:
    repo = ProjectSessionRepository(session)
    project_session = await _get_owned_session(repo, session_id, user)
    changes = payload.changes()
    if payload.settings is not None:
        changes["settings"] = payload.settings.model_dump()
    project_session = await repo.update_fields(project_session, changes)
    return ProjectSessionRead.model_validate(project_session)


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Session",
    responses={
        403: {"description": "Session belongs to another user"},
        404: {"description": "Session not found"},
    },
)
async def delete_project_session(session_id: str, user: CurrentUser, session: SessionDep) -> Response:
    repo = ProjectSessionRepository(session)
    await _get_owned_session(repo, session_id, user)
    await repo.delete(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
