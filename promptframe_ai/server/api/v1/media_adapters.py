"""
Media adapter endpoints.

Any logged-in user can read adapters; changes require the admin role. At
most one adapter is the default.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from promptframe_ai.core.database.entities.prompts import MediaAdapter
from promptframe_ai.core.database.repositories import MediaAdapterRepository
from promptframe_ai.core.models.io import MediaAdapterCreate, MediaAdapterRead, MediaAdapterUpdate
from promptframe_ai.server.auth.dependencies import AdminUser, CurrentUser
from promptframe_ai.server.services.deps import SessionDep

router = APIRouter(prefix="/media-adapters", tags=["media-adapters"])

NOT_FOUND = "Media adapter not found"


async def _get_adapter_or_404(repo: MediaAdapterRepository, adapter_id: str) -> MediaAdapter:
    adapter = await repo.get_by_id(adapter_id)
    if adapter is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return adapter


@router.get("", response_model=List[MediaAdapterRead], summary="List Media Adapters")
async def list_media_adapters(user: CurrentUser, session: SessionDep) -> List[MediaAdapterRead]:
    adapters = await MediaAdapterRepository(session).list()
    return [MediaAdapterRead.model_validate(adapter) for adapter in adapters]


@router.get(
    "/default",
    response_model=MediaAdapterRead,
    summary="Get Default Media Adapter",
    responses={404: {"description": "No default adapter"}},
)
async def get_default_media_adapter(user: CurrentUser, session: SessionDep) -> MediaAdapterRead:
    adapter = await MediaAdapterRepository(session).get_default()
    if adapter is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No default media adapter found")
    return MediaAdapterRead.model_validate(adapter)


@router.get("/{adapter_id}", response_model=MediaAdapterRead, summary="Get Media Adapter")
async def get_media_adapter(adapter_id: str, user: CurrentUser, session: SessionDep) -> MediaAdapterRead:
    adapter = await _get_adapter_or_404(MediaAdapterRepository(session), adapter_id)
    return MediaAdapterRead.model_validate(adapter)


@router.post(
    "",
    response_model=MediaAdapterRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Media Adapter",
)
async def create_media_adapter(payload: MediaAdapterCreate, admin: AdminUser, session: SessionDep) -> MediaAdapterRead:
    adapter = await MediaAdapterRepository(session).create(MediaAdapter(**payload.model_dump(), created_by=admin.id))
    return MediaAdapterRead.model_validate(adapter)


@router.put("/{adapter_id}", response_model=MediaAdapterRead, summary="Update Media Adapter")
async def update_media_adapter(
    adapter_id: str, payload: MediaAdapterUpdate, admin: AdminUser, session: SessionDep
) -> MediaAdapterRead:
    repo = MediaAdapterRepository(session)
    adapter = await _get_adapter_or_404(repo, adapter_id)
    adapter = await repo.update_fields(adapter, payload.changes())
    return MediaAdapterRead.model_validate(adapter)


@router.delete("/{adapter_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Media Adapter")
async def delete_media_adapter(adapter_id: str, admin: AdminUser, session: SessionDep) -> Response:
    if not await MediaAdapterRepository(session).delete(adapter_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
