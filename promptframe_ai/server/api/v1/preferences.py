"""
User preference endpoints: the default extraction and concept prompts a
user starts the style workspace with.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from promptframe_ai.core.database.repositories import UserPreferencesRepository
from promptframe_ai.core.models.io import UserPreferencesRead, UserPreferencesUpdate
from promptframe_ai.server.auth.dependencies import CurrentUser
from promptframe_ai.server.services.deps import SessionDep

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get(
    "",
    response_model=UserPreferencesRead,
    summary="Get Preferences",
    responses={404: {"description": "User preferences not found"}},
)
async def get_preferences(user: CurrentUser, session: SessionDep) -> UserPreferencesRead:
    preferences = await UserPreferencesRepository(session).get_for_user(user.id)
    if preferences is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User preferences not found")
    return UserPreferencesRead.model_validate(preferences)


@router.put(
    "",
    response_model=UserPreferencesRead,
    summary="Save Preferences",
    description="Create or replace the default prompts of the current user. Both prompts are required.",
    responses={400: {"description": "A prompt is missing or empty"}},
)
async def save_preferences(
    payload: UserPreferencesUpdate, user: CurrentUser, session: SessionDep
) -> UserPreferencesRead:
    if not payload.default_extraction_prompt or not payload.default_concept_prompt:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Both extraction and concept prompts are required",
        )
    preferences = await UserPreferencesRepository(session).upsert(
        user.id, payload.default_extraction_prompt, payload.default_concept_prompt
    )
    return UserPreferencesRead.model_validate(preferences)
