"""
System prompt endpoints.

Any logged-in user can read system prompts; creating, changing, activating
and deleting them requires the admin role. Only one prompt per type is
active at a time.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from promptframe_ai.core.database.entities.prompts import PromptType, SystemPrompt
from promptframe_ai.core.database.repositories import SystemPromptRepository
from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.core.models.io import SystemPromptCreate, SystemPromptRead, SystemPromptUpdate
from promptframe_ai.server.auth.dependencies import AdminUser, CurrentUser
from promptframe_ai.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter(prefix="/system-prompts", tags=["system-prompts"])

NOT_FOUND = "System prompt not found"


async def _get_prompt_or_404(repo: SystemPromptRepository, prompt_id: str) -> SystemPrompt:
    prompt = await repo.get_by_id(prompt_id)
    if prompt is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return prompt


@router.get("", response_model=List[SystemPromptRead], summary="List System Prompts")
async def list_system_prompts(
    user: CurrentUser,
    session: SessionDep,
    prompt_type: Optional[PromptType] = Query(default=None, alias="promptType"),
) -> List[SystemPromptRead]:
    repo = SystemPromptRepository(session)
    prompts = await repo.list_by_type(prompt_type.value) if prompt_type else await repo.list()
    return [SystemPromptRead.model_validate(prompt) for prompt in prompts]


@router.get(
    "/active/{prompt_type}",
    response_model=SystemPromptRead,
    summary="Get Active System Prompt",
    responses={404: {"description": "No active prompt of this type"}},
)
async def get_active_system_prompt(prompt_type: PromptType, user: CurrentUser, session: SessionDep) -> SystemPromptRead:
    prompt = await SystemPromptRepository(session).get_active_by_type(prompt_type.value)
    if prompt is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No active prompt found for this type")
    return SystemPromptRead.model_validate(prompt)


@router.get(
    "/{prompt_id}",
    response_model=SystemPromptRead,
    summary="Get System Prompt",
    responses={404: {"description": NOT_FOUND}},
)
async def get_system_prompt(prompt_id: str, user: CurrentUser, session: SessionDep) -> SystemPromptRead:
    prompt = await _get_prompt_or_404(SystemPromptRepository(session), prompt_id)
    return SystemPromptRead.model_validate(prompt)


@router.post(
    "",
    response_model=SystemPromptRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create System Prompt",
    description="Create a system prompt. Creating it active deactivates the other prompts of its type.",
)
async def create_system_prompt(payload: SystemPromptCreate, admin: AdminUser, session: SessionDep) -> SystemPromptRead:
    repo = SystemPromptRepository(session)
    data = payload.model_dump()
    data["prompt_type"] = payload.prompt_type.value
    activate = data.pop("is_active")
    prompt = await repo.create(SystemPrompt(**data, is_active=False, created_by=admin.id))
    if activate:
        prompt = await repo.set_active(prompt.id, prompt.prompt_type)
    logger.info(f"Admin {admin.id} created system prompt {prompt.id} ({prompt.prompt_type})")
    return SystemPromptRead.model_validate(prompt)


@router.put(
    "/{prompt_id}",
    response_model=SystemPromptRead,
    summary="Update System Prompt",
    responses={404: {"description": NOT_FOUND}},
)
async def update_system_prompt(
    prompt_id: str, payload: SystemPromptUpdate, admin: AdminUser, session: SessionDep
) -> SystemPromptRead:
    repo = SystemPromptRepository(session)
    prompt = await _get_prompt_or_404(repo, prompt_id)
    changes = payload.changes()
    if payload.prompt_type is not None:
        changes["prompt_type"] = payload.prompt_type.value
        if payload.prompt_type.value != prompt.prompt_type:
            changes["is_active"] = False
    prompt = await repo.update_fields(prompt, changes)
    return SystemPromptRead.model_validate(prompt)


@router.put(
    "/{prompt_id}/activate",
    response_model=SystemPromptRead,
    summary="Activate System Prompt",
    description="Make this prompt the only active prompt of its type.",
    responses={404: {"description": NOT_FOUND}},
)
async def activate_system_prompt(prompt_id: str, admin: AdminUser, session: SessionDep) -> SystemPromptRead:
    repo = SystemPromptRepository(session)
    prompt = await _get_prompt_or_404(repo, prompt_id)
    prompt = await repo.set_active(prompt.id, prompt.prompt_type)
    logger.info(f"Admin {admin.id} activated system prompt {prompt_id} for {prompt.prompt_type}")
    return SystemPromptRead.model_validate(prompt)


@router.delete(
    "/{prompt_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete System Prompt",
    responses={404: {"description": NOT_FOUND}},
)
async def delete_system_prompt(prompt_id: str, admin: AdminUser, session: SessionDep) -> Response:
    if not await SystemPromptRepository(session).delete(prompt_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
