"""
AI style tool endpoints.

These endpoints back the style workspace: uploading a reference image,
extracting a style and a concept from it with the vision model, rendering a
preview with the extracted style and refining the prompts from feedback or
from a reference/preview comparison.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from promptframe_ai.core.database.entities.prompts import PromptType
from promptframe_ai.core.database.repositories import ImageStyleRepository, SystemPromptRepository
from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.core.models.io import (
    ConceptResponse,
    ExtractStyleRequest,
    ExtractStyleResponse,
    GenerateConceptRequest,
    IntelligentRefineRequest,
    IntelligentRefineResponse,
    RefineStyleRequest,
    RefineStyleResponse,
    StylePreviewRequest,
    StylePreviewResponse,
    UploadedImageResponse,
)
from promptframe_ai.server.auth.dependencies import CurrentUser
from promptframe_ai.server.exception_handlers import to_http_exception
from promptframe_ai.server.services.deps import ImageClientDep, SessionDep, TextClientDep
from promptframe_ai.studio.capabilities import build_image_params, validate_settings
from promptframe_ai.studio.errors import CapabilityError, ImageConversionError, StyleRefinementError
from promptframe_ai.studio.image_io import MAX_UPLOAD_BYTES, normalize_upload
from promptframe_ai.studio.parsing import clean_concept_json, fallback_style_data, parse_json_object, parse_style_object
from promptframe_ai.studio.prompts import (
    INTELLIGENT_REFINE_SYSTEM_PROMPT,
    STYLE_EXTRACTION_SYSTEM_PROMPT,
    STYLE_REFINEMENT_SYSTEM_PROMPT,
    build_intelligent_refine_message,
    build_preview_prompt,
    build_style_refinement_message,
    concept_json_to_text,
)
from promptframe_ai.studio.text_client import TextClient

logger = get_logger(__name__)

router = APIRouter(tags=["ai-tools"])

STYLE_MAX_TOKENS = 2000
CONCEPT_MAX_TOKENS = 800
REFINE_TEMPERATURE = 0.7


def _server_error(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


async def _concept_from_image(text_client: TextClient, concept_prompt: str, image_url: str) -> ConceptResponse:
    raw = (await text_client.complete(None, concept_prompt, image_url=image_url, max_tokens=CONCEPT_MAX_TOKENS)).strip()
    if not raw:
        raise ValueError("No concept returned by the model")
    concept_json = clean_concept_json(raw)
    return ConceptResponse(concept=concept_json_to_text(concept_json), concept_json=concept_json)


def _framework(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


@router.post(
    "/upload-reference-image",
    response_model=UploadedImageResponse,
    summary="Upload Reference Image",
    description=(
        "Upload an image as multipart field `image`. PNG, JPEG, GIF and WebP are kept; other image "
        "formats are converted to PNG. The image is returned as a data URL."
    ),
    responses={
        400: {"description": "No file, or not an image"},
        413: {"description": "File larger than 10 MiB"},
    },
)
async def upload_reference_image(user: CurrentUser, image: Optional[UploadFile] = File(None)) -> UploadedImageResponse:
    if image is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No image file uploaded")
    content_type = (image.content_type or "").lower()
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only image files are allowed")

    # Never buffer more than one byte past the limit.
    too_large = image.size is not None and image.size > MAX_UPLOAD_BYTES
    if not too_large:
        data = await image.read(MAX_UPLOAD_BYTES + 1)
        too_large = len(data) > MAX_UPLOAD_BYTES
    if too_large:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Image file too large (max 10MB)",
        )

    try:
        uploaded = normalize_upload(data, content_type, image.filename)
    except ImageConversionError as e:
        raise to_http_exception(e) from e

    logger.info(f"User {user.id} uploaded reference image {uploaded.file_name} ({uploaded.size} bytes)")
    return UploadedImageResponse(
        url=uploaded.url,
        file_name=uploaded.file_name,
        size=uploaded.size,
        mimetype=uploaded.mimetype,
        converted=uploaded.converted,
    )


@router.post(
    "/extract-style",
    response_model=ExtractStyleResponse,
    summary="Extract Style",
    description="Analyse a reference image into structured style data and a visual concept.",
    responses={500: {"description": "The vision model call failed"}},
)
async def extract_style(
    payload: ExtractStyleRequest, user: CurrentUser, text_client: TextClientDep
) -> ExtractStyleResponse:
    """
    Extract a style definition and a concept from a reference image.

    The style JSON falls back to a placeholder structure when the model does
    not answer with valid JSON; the concept is returned both as display text
    and as the cleaned model output.
    """
    try:
        style_analysis = await text_client.complete(
            STYLE_EXTRACTION_SYSTEM_PROMPT,
            payload.extraction_prompt,
            image_url=payload.image_url,
            max_tokens=STYLE_MAX_TOKENS,
        )
        if not style_analysis:
            raise ValueError("No style analysis returned by the model")

        try:
            style_data = parse_json_object(style_analysis)
        except ValueError:
            style_data = None
        if not isinstance(style_data, dict):
            logger.warning(f"Style analysis is not a JSON object, using fallback ({len(style_analysis)} chars)")
            style_data = fallback_style_data(style_analysis)

        concept = await _concept_from_image(text_client, payload.concept_prompt, payload.image_url)
    except Exception as e:
        logger.error(f"Style extraction failed for user {user.id}: {e}", exc_info=True)
        raise _server_error("Failed to extract style from image") from e

    return ExtractStyleResponse(style_data=style_data, concept=concept.concept, concept_json=concept.concept_json)


@router.post(
    "/generate-new-concept",
    response_model=ConceptResponse,
    summary="Generate New Concept",
    description="Generate another concept for a saved style from its concept prompt and reference image.",
    responses={
        400: {"description": "Style has no concept prompt or no reference image"},
        404: {"description": "Style not found"},
    },
)
async def generate_new_concept(
    payload: GenerateConceptRequest, user: CurrentUser, session: SessionDep, text_client: TextClientDep
) -> ConceptResponse:
    style = await ImageStyleRepository(session).get_by_id(payload.style_id)
    if style is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Style not found")
    if not style.concept_prompt:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Style does not have a concept prompt")
    if not style.reference_image_url:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Style does not have a reference image")

    try:
        return await _concept_from_image(text_client, style.concept_prompt, style.reference_image_url)
    except Exception as e:
        logger.error(f"Concept generation failed for style {style.id}: {e}", exc_info=True)
        raise _server_error("Failed to generate new concept") from e


@router.post(
    "/generate-style-preview",
    response_model=StylePreviewResponse,
    summary="Generate Style Preview",
    responses={
        400: {"description": "Settings not supported by the selected model"},
        500: {"description": "The image model call failed"},
    },
)
async def generate_style_preview(
    payload: StylePreviewRequest, user: CurrentUser, image_client: ImageClientDep
) -> StylePreviewResponse:
    try:
        validate_settings(payload)
    except CapabilityError as e:
        raise to_http_exception(e) from e

    prompt = build_preview_prompt(
        payload.concept, payload.style_data, payload.model, payload.transparency, payload.render_text
    )
    params = build_image_params(payload.model, payload.size, payload.quality, prompt, payload.transparency)
    try:
        image_url = await image_client.generate(params)
    except Exception as e:
        logger.error(f"Style preview failed for user {user.id}: {e}", exc_info=True)
        raise _server_error("Failed to generate style preview") from e

    return StylePreviewResponse(image_url=image_url, prompt=prompt)


@router.post(
    "/refine-style",
    response_model=RefineStyleResponse,
    summary="Refine Style",
    description="Rewrite a style definition from feedback, keeping its JSON structure.",
    responses={500: {"description": "The model call failed or returned invalid JSON"}},
)
async def refine_style(payload: RefineStyleRequest, user: CurrentUser, text_client: TextClientDep) -> RefineStyleResponse:
    try:
        raw = await text_client.complete(
            STYLE_REFINEMENT_SYSTEM_PROMPT,
            build_style_refinement_message(payload.style_data, payload.feedback),
            temperature=REFINE_TEMPERATURE,
            max_tokens=STYLE_MAX_TOKENS,
        )
        refined = parse_style_object(raw)
    except StyleRefinementError as e:
        logger.warning(f"Style refinement for user {user.id} returned unusable output: {e.message}")
        raise _server_error("Failed to refine style definition") from e
    except Exception as e:
        logger.error(f"Style refinement failed for user {user.id}: {e}", exc_info=True)
        raise _server_error("Failed to refine style definition") from e

    logger.debug(f"Refined style with feedback: {payload.feedback[:80]}")
    return RefineStyleResponse(refined_style_data=refined, original_feedback=payload.feedback)


@router.post(
    "/intelligent-refine",
    response_model=IntelligentRefineResponse,
    summary="Intelligent Refine",
    description=(
        "Compare a preview with its reference image and rewrite the style, composition and concept "
        "prompts so the next preview is closer. Uses the active `intelligent_refine` system prompt "
        "when one exists."
    ),
    responses={500: {"description": "The model call failed or returned invalid JSON"}},
)
async def intelligent_refine(
    payload: IntelligentRefineRequest, user: CurrentUser, session: SessionDep, text_client: TextClientDep
) -> IntelligentRefineResponse:
    active = await SystemPromptRepository(session).get_active_by_type(PromptType.INTELLIGENT_REFINE.value)
    system_prompt = active.prompt_text if active else INTELLIGENT_REFINE_SYSTEM_PROMPT

    message = build_intelligent_refine_message(
        payload.style_prompt,
        payload.style_framework,
        payload.composition_prompt,
        payload.composition_framework,
        payload.concept_prompt,
        payload.concept_framework,
    )
    try:
        raw = await text_client.complete(
            system_prompt,
            message,
            image_urls=[payload.reference_image_url, payload.preview_image_url],
            temperature=REFINE_TEMPERATURE,
            max_tokens=STYLE_MAX_TOKENS,
        )
        data = parse_style_object(raw)
    except StyleRefinementError as e:
        logger.warning(f"Intelligent refine for user {user.id} returned unusable output: {e.message}")
        raise _server_error("Failed to refine prompts") from e
    except Exception as e:
        logger.error(f"Intelligent refine failed for user {user.id}: {e}", exc_info=True)
        raise _server_error("Failed to refine prompts") from e

    return IntelligentRefineResponse(
        explanation=str(data.get("explanation") or ""),
        refined_style_prompt=str(data.get("refinedStylePrompt") or payload.style_prompt),
        refined_style_framework=_framework(data.get("refinedStyleFramework")),
        refined_composition_prompt=str(data.get("refinedCompositionPrompt") or payload.composition_prompt or ""),
        refined_composition_framework=_framework(data.get("refinedCompositionFramework")),
        refined_concept_prompt=str(data.get("refinedConceptPrompt") or payload.concept_prompt or ""),
        refined_concept_framework=_framework(data.get("refinedConceptFramework")),
    )
