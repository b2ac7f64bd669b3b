"""
Concept list generation and conversational refinement.

A concept list keeps the conversation that produced it. Refinement sends the
whole conversation plus the new feedback back to the chat model, replaces
either every concept or only the selected ones, and keeps a snapshot so the
last refinement can be undone.

The functions here change the ``ConceptList`` in memory only; callers
persist it through ``ConceptListRepository``. JSON attributes are always
reassigned with new lists so the change is tracked.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional, Sequence

from promptframe_ai.core.database.entities.concept_lists import ConceptList
from promptframe_ai.core.logging_config import get_logger

from .errors import ConceptParseError, RefinementError
from .parsing import parse_concepts
from .prompts import (
    REFINEMENT_COMPANY,
    build_concept_list_message,
    build_concept_system_prompt,
    build_revision_message,
    build_revision_system_prompt,
    build_selective_feedback,
    concept_to_display_string,
    format_conversation,
)
from .text_client import TextClient

logger = get_logger(__name__)

REVISION_TEMPERATURE = 0.8
GENERATE_MORE_QUANTITY = 3
GENERATE_MORE_INSTRUCTION = (
    f"Generate {GENERATE_MORE_QUANTITY} additional unique concepts different from the ones above."
)


async def generate_concepts(
    text_client: TextClient,
    company_name: str,
    marketing_content: str,
    quantity: int,
    prompt_text: Optional[str] = None,
    temperature: float = 0.7,
    literal_metaphorical: float = 0.0,
    simple_complex: float = 0.0,
    reference_image_url: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Ask the chat model for a list of visual concepts.

    Args:
        text_client: Chat completion client
        company_name: Company the concepts are for
        marketing_content: Marketing brief, or a whole refinement conversation
        quantity: Number of concepts to ask for
        prompt_text: Custom system prompt replacing the built-in generator prompt
        temperature: Sampling temperature
        literal_metaphorical: Slider from literal (-1) to metaphorical (1)
        simple_complex: Slider from simple (-1) to complex (1)
        reference_image_url: Optional image the concepts should take after

    Returns:
        Normalized concept objects

    Raises:
        ConceptParseError: The response is not a usable concept list
    """
    system_prompt = build_concept_system_prompt(prompt_text, literal_metaphorical, simple_complex)
    message = build_concept_list_message(company_name, marketing_content, quantity, bool(reference_image_url))
    raw = await text_client.complete(
        system_prompt,
        message,
        image_url=reference_image_url,
        temperature=temperature,
    )
    concepts = parse_concepts(raw or "[]")
    logger.debug(f"Generated {len(concepts)} concept(s) for '{company_name}' (asked for {quantity})")
    return concepts


async def revise_concepts(
    text_client: TextClient, concept_list: ConceptList, feedback: str
) -> List[Dict[str, Any]]:
    """Revise every concept of a list in one request.

    A response that cannot be parsed keeps the current concepts.
    """
    raw = await text_client.complete(
        build_revision_system_prompt(concept_list.prompt_text),
        build_revision_message(
            concept_list.company_name, concept_list.marketing_content, concept_list.concepts, feedback
        ),
        image_url=concept_list.reference_image_url,
        temperature=REVISION_TEMPERATURE,
    )
    try:
        revised = parse_concepts(raw or "[]")
    except ConceptParseError as e:
        logger.warning(f"Keeping original concepts of list {concept_list.id}: {e.message}")
        return list(concept_list.concepts)

    if len(revised) != len(concept_list.concepts):
        logger.warning(
            f"Revision of list {concept_list.id} returned {len(revised)} concepts, "
            f"expected {len(concept_list.concepts)}"
        )
    return revised


def concept_texts(concepts: Sequence[Any]) -> List[str]:
    return [concept_to_display_string(concept) for concept in concepts]


def initial_history(
    marketing_content: str, instructions: Optional[str], concepts: Sequence[Any]
) -> List[Dict[str, str]]:
    """Start the refinement conversation of a freshly generated list."""
    user_content = marketing_content
    if instructions:
        user_content += f"\n\nAdditional Instructions: {instructions}"
    return [
        {"role": "user", "content": user_content},
        {"role": "assistant", "content": "\n".join(concept_texts(concepts))},
    ]


def _validate_indices(indices: Sequence[int], size: int) -> List[int]:
    unique: List[int] = []
    for index in indices:
        if index < 0 or index >= size:
            raise RefinementError(f"Invalid concept index: {index}")
        if index not in unique:
            unique.append(index)
    return unique


async def refine(
    concept_list: ConceptList,
    feedback: str,
    selected_indices: Optional[Sequence[int]],
    text_client: TextClient,
) -> ConceptList:
    """Refine a concept list with conversational feedback.

    With ``selected_indices`` only those concepts are rewritten, in selection
    order; otherwise every concept is replaced. The state before the change
    is stored in ``previous_state`` for :func:`undo`.

    Args:
        concept_list: List to refine, changed in place
        feedback: User feedback
        selected_indices: Positions of the concepts to refine, or None for all
        text_client: Chat completion client

    Returns:
        The same concept list

    Raises:
        RefinementError: Blank feedback or an index outside the list
        ConceptParseError: The model response is not a concept list
    """
    if not feedback or not feedback.strip():
        raise RefinementError("Feedback is required")

    current = list(concept_list.concepts or [])
    history = list(concept_list.conversation_history or [])
    selected = _validate_indices(selected_indices or [], len(current))

    if selected:
        instruction = build_selective_feedback(concept_texts(current[i] for i in selected), feedback)
        quantity = len(selected)
    else:
        instruction = feedback
        quantity = len(current)

    context = f"{format_conversation(history)}\n\nUSER: {instruction}"
    refined = await generate_concepts(
        text_client,
        REFINEMENT_COMPANY,
        context,
        quantity,
        prompt_text=concept_list.prompt_text,
        temperature=concept_list.temperature,
        literal_metaphorical=concept_list.literal_metaphorical,
        simple_complex=concept_list.simple_complex,
        reference_image_url=concept_list.reference_image_url,
    )

    # A short answer leaves the remaining selected concepts as they were;
    # surplus concepts are only recorded in the conversation.
    if selected:
        updated = list(current)
        for index, concept in zip(selected, refined):
            updated[index] = concept
    else:
        updated = refined

    concept_list.previous_state = {
        "concepts": copy.deepcopy(current),
        "conversation_history": copy.deepcopy(history),
    }
    concept_list.concepts = updated
    concept_list.conversation_history = history + [
        {"role": "user", "content": feedback},
        {"role": "assistant", "content": "\n".join(concept_texts(refined))},
    ]
    logger.info(f"Refined {len(refined)} concept(s) of list {concept_list.id}")
    return concept_list


def undo(concept_list: ConceptList) -> ConceptList:
    """Restore the state saved by the last refinement.

    Raises:
        RefinementError: Nothing to undo
    """
    previous = concept_list.previous_state
    if not previous:
        raise RefinementError("Nothing to undo")
    concept_list.concepts = list(previous.get("concepts") or [])
    concept_list.conversation_history = list(previous.get("conversation_history") or [])
    concept_list.previous_state = None
    return concept_list


def delete_concept(concept_list: ConceptList, index: int) -> ConceptList:
    """Remove one concept and its line from every assistant turn.

    Raises:
        RefinementError: The index is outside the list
    """
    current = list(concept_list.concepts or [])
    if index < 0 or index >= len(current):
        raise RefinementError(f"Invalid concept index: {index}")

    removed = concept_to_display_string(current.pop(index)).strip()
    history = []
    for turn in concept_list.conversation_history or []:
        if turn.get("role") == "assistant":
            lines = [line for line in turn.get("content", "").split("\n") if line.strip()]
            turn = {**turn, "content": "\n".join(line for line in lines if line.strip() != removed)}
        history.append(turn)

    concept_list.concepts = current
    concept_list.conversation_history = history
    return concept_list


async def generate_more(concept_list: ConceptList, text_client: TextClient) -> ConceptList:
    """Append a few new concepts that differ from the current ones.

    The conversation is extended with the request and the new concepts.
    ``previous_state`` is left as it is, so undo still reverts the last
    refinement.

    Raises:
        ConceptParseError: The model response is not a concept list
    """
    current = list(concept_list.concepts or [])
    history = list(concept_list.conversation_history or [])

    if history:
        context = f"{format_conversation(history)}\n\nUSER: {GENERATE_MORE_INSTRUCTION}"
    else:
        context = f"{concept_list.marketing_content}\n\n{GENERATE_MORE_INSTRUCTION}"
    new = await generate_concepts(
        text_client,
        REFINEMENT_COMPANY,
        context,
        GENERATE_MORE_QUANTITY,
        prompt_text=concept_list.prompt_text,
        temperature=concept_list.temperature,
        literal_metaphorical=concept_list.literal_metaphorical,
        simple_complex=concept_list.simple_complex,
        reference_image_url=concept_list.reference_image_url,
    )

    concept_list.concepts = current + new
    concept_list.conversation_history = history + [
        {"role": "user", "content": GENERATE_MORE_INSTRUCTION},
        {"role": "assistant", "content": "\n".join(concept_texts(new))},
    ]
    logger.info(f"Added {len(new)} concept(s) to list {concept_list.id}")
    return concept_list
