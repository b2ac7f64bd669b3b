"""
Concept list endpoints.

A concept list is generated from a company brief and then improved either by
a one-shot revision of every concept or by conversational refinement, which
keeps the conversation and can be undone one step.
"""

from __future__ import annotations

from datetime import date
from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from promptframe_ai.core.database.entities.concept_lists import ConceptList
from promptframe_ai.core.database.entities.users import User
from promptframe_ai.core.database.repositories import ConceptListRepository
from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.core.models.io import (
    ConceptListRead,
    ConceptListUpdate,
    GenerateConceptListRequest,
    RefineRequest,
    ReviseRequest,
)
from promptframe_ai.server.auth.dependencies import CurrentUser
from promptframe_ai.server.exception_handlers import to_http_exception
from promptframe_ai.server.services.deps import SessionDep, TextClientDep
from promptframe_ai.studio import refinement
from promptframe_ai.studio.errors import ConceptParseError, RefinementError

logger = get_logger(__name__)

router = APIRouter(tags=["concept-lists"])

NOT_FOUND = "Concept list not found"


def _read(concept_list: ConceptList) -> ConceptListRead:
    return ConceptListRead.model_validate(concept_list).model_copy(
        update={"can_undo": bool(concept_list.previous_state)}
    )


def _parse_failure(exc: ConceptParseError) -> HTTPException:
    logger.error(f"Could not parse concept response: {exc.message}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "Failed to parse AI response", "details": exc.details or exc.message},
    )


def _check_range(value: float, low: float, high: float, message: str) -> None:
    if value < low or value > high:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


async def _get_owned_list(repo: ConceptListRepository, list_id: str, user: User) -> ConceptList:
    concept_list = await repo.get_by_id(list_id)
    if concept_list is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    if not user.is_admin and concept_list.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied: not your concept list")
    return concept_list


@router.get("/concept-lists", response_model=List[ConceptListRead], summary="List Concept Lists")
async def list_concept_lists(user: CurrentUser, session: SessionDep) -> List[ConceptListRead]:
    lists = await ConceptListRepository(session).list_for_user(user)
    return [_read(item) for item in lists]


@router.get(
    "/concept-lists/{list_id}",
    response_model=ConceptListRead,
    summary="Get Concept List",
    responses={403: {"description": "List belongs to another user"}, 404: {"description": NOT_FOUND}},
)
async def get_concept_list(list_id: str, user: CurrentUser, session: SessionDep) -> ConceptListRead:
    return _read(await _get_owned_list(ConceptListRepository(session), list_id, user))


@router.post(
    "/generate-concept-list",
    response_model=ConceptListRead,
    summary="Generate Concept List",
    description="Generate `quantity` visual concepts for a company brief and store them as a new list.",
    responses={
        400: {"description": "Missing brief or a slider out of range"},
        500: {"description": "The model answer could not be parsed"},
    },
)
async def generate_concept_list(
    payload: GenerateConceptListRequest, user: CurrentUser, session: SessionDep, text_client: TextClientDep
) -> ConceptListRead:
    """
    Generate a concept list.

    - **companyName** and **marketingContent** are required.
    - **temperature** must be within 0..1, the two sliders within -1..1.
    - **promptText** replaces the built-in generator prompt.
    - **instructions** are appended to the first user turn of the refinement conversation.
    """
    if not payload.company_name or not payload.marketing_content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Company name and marketing content are required",
        )
    _check_range(payload.temperature, 0, 1, "Temperature must be between 0 and 1")
    _check_range(payload.literal_metaphorical, -1, 1, "Literal/Metaphorical value must be between -1 and 1")
    _check_range(payload.simple_complex, -1, 1, "Simple/Complex value must be between -1 and 1")

    marketing_content = payload.marketing_content
    if payload.instructions:
        marketing_content += f"\n\nAdditional Instructions: {payload.instructions}"

    try:
        concepts = await refinement.generate_concepts(
            text_client,
            payload.company_name,
            marketing_content,
            payload.quantity,
            prompt_text=payload.prompt_text,
            temperature=payload.temperature,
            literal_metaphorical=payload.literal_metaphorical,
            simple_complex=payload.simple_complex,
            reference_image_url=payload.reference_image_url,
        )
    except ConceptParseError as e:
        raise _parse_failure(e) from e

    concept_list = await ConceptListRepository(session).create(
        ConceptList(
            name=payload.name or f"{payload.company_name} - {date.today().isoformat()}",
            company_name=payload.company_name,
            reference_image_url=payload.reference_image_url or None,
            marketing_content=payload.marketing_content,
            prompt_id=payload.prompt_id or None,
            prompt_text=payload.prompt_text or None,
            temperature=payload.temperature,
            literal_metaphorical=payload.literal_metaphorical,
            simple_complex=payload.simple_complex,
            concepts=concepts,
            conversation_history=refinement.initial_history(
                payload.marketing_content, payload.instructions, concepts
            ),
            user_id=user.id,
        )
    )
    logger.info(f"User {user.id} generated concept list {concept_list.id} with {len(concepts)} concept(s)")
    return _read(concept_list)


@router.patch(
    "/concept-lists/{list_id}",
    response_model=ConceptListRead,
    summary="Update Concept List",
    responses={403: {"description": "List belongs to another user"}, 404: {"description": NOT_FOUND}},
)
async def update_concept_list(
    list_id: str, payload: ConceptListUpdate, user: CurrentUser, session: SessionDep
) -> ConceptListRead:
    repo = ConceptListRepository(session)
    concept_list = await _get_owned_list(repo, list_id, user)
    concept_list = await repo.update_fields(concept_list, payload.changes())
    return _read(concept_list)


@router.post(
    "/concept-lists/{list_id}/revise",
    response_model=ConceptListRead,
    summary="Revise Concept List",
    description="Rewrite every concept from feedback. An unparseable answer keeps the current concepts.",
    responses={
        400: {"description": "Feedback is required"},
        403: {"description": "List belongs to another user"},
        404: {"description": NOT_FOUND},
    },
)
async def revise_concept_list(
    list_id: str, payload: ReviseRequest, user: CurrentUser, session: SessionDep, text_client: TextClientDep
) -> ConceptListRead:
    if not payload.feedback:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Feedback is required")
    repo = ConceptListRepository(session)
    concept_list = await _get_owned_list(repo, list_id, user)
    concepts = await refinement.revise_concepts(text_client, concept_list, payload.feedback)
    concept_list = await repo.update_fields(concept_list, {"concepts": concepts})
    return _read(concept_list)


@router.post(
    "/concept-lists/{list_id}/refine",
    response_model=ConceptListRead,
    summary="Refine Concept List",
    description=(
        "Refine the concepts conversationally. With `selectedIndices` only those concepts are "
        "rewritten. The previous state is kept for one undo."
    ),
    responses={
        400: {"description": "Missing feedback or invalid index"},
        403: {"description": "List belongs to another user"},
        404: {"description": NOT_FOUND},
        500: {"description": "The model answer could not be parsed"},
    },
)
async def refine_concept_list(
    list_id: str, payload: RefineRequest, user: CurrentUser, session: SessionDep, text_client: TextClientDep
) -> ConceptListRead:
    repo = ConceptListRepository(session)
    concept_list = await _get_owned_list(repo, list_id, user)
    try:
        concept_list = await refinement.refine(
            concept_list, payload.feedback or "", payload.selected_indices, text_client
        )
    except RefinementError as e:
        raise to_http_exception(e) from e
    except ConceptParseError as e:
        raise _parse_failure(e) from e
    concept_list = await repo.update(concept_list)
    return _read(concept_list)


@router.post(
    "/concept-lists/{list_id}/generate-more",
    response_model=ConceptListRead,
    summary="Generate More Concepts",
    description="Append three new concepts that differ from the current ones. The undo snapshot is kept as it is.",
    responses={
        403: {"description": "List belongs to another user"},
        404: {"description": NOT_FOUND},
        500: {"description": "The model answer could not be parsed"},
    },
)
async def generate_more_concepts(
    list_id: str, user: CurrentUser, session: SessionDep, text_client: TextClientDep
) -> ConceptListRead:
    repo = ConceptListRepository(session)
    concept_list = await _get_owned_list(repo, list_id, user)
    try:
        concept_list = await refinement.generate_more(concept_list, text_client)
    except ConceptParseError as e:
        raise _parse_failure(e) from e
    return _read(await repo.update(concept_list))


@router.post(
    "/concept-lists/{list_id}/undo",
    response_model=ConceptListRead,
    summary="Undo Refinement",
    responses={
        400: {"description": "Nothing to undo"},
        403: {"description": "List belongs to another user"},
        404: {"description": NOT_FOUND},
    },
)
async def undo_refinement(list_id: str, user: CurrentUser, session: SessionDep) -> ConceptListRead:
    repo = ConceptListRepository(session)
    concept_list = await _get_owned_list(repo, list_id, user)
    try:
        refinement.undo(concept_list)
    except RefinementError as e:
        raise to_http_exception(e) from e
    return _read(await repo.update(concept_list))


@router.delete(
    "/concept-lists/{list_id}/concepts/{index}",
    response_model=ConceptListRead,
    summary="Delete Concept",
    description="Remove one concept and its line from the refinement conversation.",
    responses={
        400: {"description": "Invalid concept index"},
        403: {"description": "List belongs to another user"},
        404: {"description": NOT_FOUND},
    },
)
async def delete_concept(list_id: str, index: int, user: CurrentUser, session: SessionDep) -> ConceptListRead:
    repo = ConceptListRepository(session)
    concept_list = await _get_owned_list(repo, list_id, user)
    try:
        refinement.delete_concept(concept_list, index)
    except RefinementError as e:
        raise to_http_exception(e) from e
    return _read(await repo.update(concept_list))


@router.delete(
    "/concept-lists/{list_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Concept List",
    responses={403: {"description": "List belongs to another user"}, 404: {"description": NOT_FOUND}},
)
async def delete_concept_list(list_id: str, user: CurrentUser, session: SessionDep) -> Response:
    repo = ConceptListRepository(session)
    await _get_owned_list(repo, list_id, user)
    await repo.delete(list_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
