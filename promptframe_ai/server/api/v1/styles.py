"""
Image style endpoints.

Users see their own styles plus the shared styles that have no owner;
admins see and manage every style.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from promptframe_ai.core.database.entities.image_styles import ImageStyle
from promptframe_ai.core.database.entities.users import User
from promptframe_ai.core.database.repositories import ImageStyleRepository
from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.core.models.io import ImageStyleCreate, ImageStyleRead, ImageStyleUpdate
from promptframe_ai.server.auth.dependencies import CurrentUser
from promptframe_ai.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter(tags=["styles"])


async def _get_style_or_404(repo: ImageStyleRepository, style_id: str) -> ImageStyle:
    style = await repo.get_by_id(style_id)
    if style is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Style not found")
    return style


def _ensure_can_modify(style: ImageStyle, user: User) -> None:
    if not user.is_admin and style.created_by != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied: not your style")


@router.get(
    "/styles",
    response_model=List[ImageStyleRead],
    summary="List Styles",
    description="List the styles visible to the current user: their own and the shared ones.",
)
async def list_styles(user: CurrentUser, session: SessionDep) -> List[ImageStyleRead]:
    styles = await ImageStyleRepository(session).list_visible(user)
    return [ImageStyleRead.model_validate(style) for style in styles]


@router.get(
    "/styles/{style_id}",
    response_model=ImageStyleRead,
    summary="Get Style",
    responses={
        403: {"description": "Style belongs to another user"},
        404: {"description": "Style not found"},
    },
)
async def get_style(style_id: str, user: CurrentUser, session: SessionDep) -> ImageStyleRead:
    style = await _get_style_or_404(ImageStyleRepository(session), style_id)
    if not user.is_admin and style.created_by and style.created_by != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied: not your style")
    return ImageStyleRead.model_validate(style)


@router.post(
    "/styles",
    response_model=ImageStyleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Style",
    description="Create a style owned by the current user.",
)
async def create_style(payload: ImageStyleCreate, user: CurrentUser, session: SessionDep) -> ImageStyleRead:
    style = ImageStyle(**payload.model_dump(), created_by=user.id)
    style = await ImageStyleRepository(session).create(style)
    logger.info(f"User {user.id} created style {style.id}")
    return ImageStyleRead.model_validate(style)


@router.put(
    "/styles/{style_id}",
    response_model=ImageStyleRead,
    summary="Update Style",
    description="Partially update a style. Only the owner or an admin may change it; the owner never changes.",
    responses={
        403: {"description": "Style belongs to another user"},
        404: {"description": "Style not found"},
    },
)
async def update_style(
    style_id: str, payload: ImageStyleUpdate, user: CurrentUser, session: SessionDep
) -> ImageStyleRead:
    repo = ImageStyleRepository(session)
    style = await _get_style_or_404(repo, style_id)
    _ensure_can_modify(style, user)
    style = await repo.update_fields(style, payload.changes())
    return ImageStyleRead.model_validate(style)


@router.delete(
    "/styles/{style_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Style",
    responses={
        403: {"description": "Style belongs to another user"},
        404: {"description": "Style not found"},
    },
)
async def delete_style(style_id: str, user: CurrentUser, session: SessionDep) -> Response:
    repo = ImageStyleRepository(session)
    style = await _get_style_or_404(repo, style_id)
    _ensure_can_modify(style, user)
    await repo.delete(style_id)
    logger.info(f"User {user.id} deleted style {style_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/styles/{style_id}/duplicate",
    response_model=ImageStyleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Duplicate Style",
    description="Copy a style under a new id. The copy is named '<name> (Copy)' and owned by the current user.",
    responses={404: {"description": "Style not found"}},
)
async def duplicate_style(style_id: str, user: CurrentUser, session: SessionDep) -> ImageStyleRead:
    repo = ImageStyleRepository(session)
    await _get_style_or_404(repo, style_id)
    copy = await repo.duplicate(style_id, user.id)
    if copy is None:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to duplicate style")
    return ImageStyleRead.model_validate(copy)
