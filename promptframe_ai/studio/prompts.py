"""
Prompt builders for image and text generation.

Everything in this module is a pure function of its inputs, so the exact
wording sent to the models can be unit tested without any API access.
"""

from __future__ import annotations

import json
import random
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from promptframe_ai.core.logging_config import get_logger

from .capabilities import supports_transparency

logger = get_logger(__name__)

MAX_PROMPT_LENGTH = 1000

GENERATION_TEMPLATE = "Generate a clean, professional digital asset:\nStyle: {style}\nSubject: {concept}"
TRANSPARENT_SUFFIX = "\nRender only the image subject on a transparent background"
TRANSPARENT_SENTENCE = ". Render only the image subject on a transparent background"
NO_TEXT_SENTENCE = ". NO TEXT"

DEFAULT_EDIT_PROMPT = "enhance image quality and clarity"
DEFAULT_ENHANCED_PROMPT = (
    "Enhance image quality and clarity while keeping all details, composition, and style exactly the same"
)
EDIT_KEEP_SUFFIX = (
    ". Keep all other details, composition, and style exactly the same. Only modify what is specifically requested."
)

CONCEPT_GENERATOR_PROMPT = (
    "You are a creative marketing concept generator. "
    "Generate visual concepts based on the company context and marketing content provided."
)
CONCEPT_REVISER_PROMPT = (
    "You are a creative marketing concept generator. Revise visual concepts based on user feedback."
)

CONCEPT_OUTPUT_FORMAT = (
    "\n\nIMPORTANT OUTPUT FORMAT:\n"
    "Return ONLY a JSON array of strings. Each string should be a complete concept description.\n"
    'Example format: ["Concept 1 description...", "Concept 2 description...", "Concept 3 description..."]\n'
    'Do NOT wrap in an object with "concepts" key. Do NOT use markdown code blocks.'
)

LITERAL_GUIDANCE = (
    "\n\nSTYLE: Use concrete, specific, literal descriptions. Focus on tangible visual elements and clear "
    "subjects. Avoid metaphors and abstract imagery."
)
METAPHORICAL_GUIDANCE = (
    "\n\nSTYLE: Use creative metaphors, symbolic imagery, and abstract representations. Embrace poetic and "
    "conceptual language."
)
SIMPLE_GUIDANCE = (
    "\n\nCOMPOSITION: Keep subjects simple and focused. Use single, clear focal points. Minimize elements and "
    "maintain visual clarity."
)
COMPLEX_GUIDANCE = (
    "\n\nCOMPOSITION: Create multi-layered compositions with multiple elements. Combine various visual "
    "components to create rich, detailed scenes."
)
SLIDER_THRESHOLD = 0.3

REFINEMENT_COMPANY = "Visual Concept Generation"

STYLE_EXTRACTION_SYSTEM_PROMPT = """You are a professional visual style analyst. You MUST respond with ONLY valid JSON that matches this exact structure:

{
  "style_name": "string - short descriptive name",
  "description": "string - detailed style analysis",
  "color_palette": ["#RRGGBB", "#RRGGBB", ...],
  "color_usage": "string - how colors are used",
  "lighting": "string - lighting characteristics",
  "shadow_style": "string - shadow treatment",
  "shapes": "string - shape characteristics",
  "shape_edges": "string - edge treatment",
  "symmetry_balance": "string - balance and symmetry",
  "line_quality": "string - line characteristics",
  "line_color_treatment": "string - line color approach",
  "texture": "string - texture details",
  "material_suggestion": "string - material qualities",
  "rendering_style": "string - rendering approach",
  "detail_level": "string - level of detail",
  "perspective": "string - perspective characteristics",
  "scale_relationships": "string - scale and proportions",
  "composition": "string - compositional elements",
  "visual_hierarchy": "string - hierarchy approach",
  "typography": {
    "font_styles": "string - font characteristics",
    "font_weights": "string - weight usage",
    "case_usage": "string - case treatment",
    "alignment": "string - text alignment",
    "letter_spacing": "string - spacing approach",
    "text_treatment": "string - text effects"
  },
  "ui_elements": {
    "corner_radius": "string - corner treatment",
    "icon_style": "string - icon characteristics",
    "button_style": "string - button treatment",
    "spacing_rhythm": "string - spacing patterns"
  },
  "motion_or_interaction": "string - motion qualities",
  "notable_visual_effects": "string - special effects"
}

Respond ONLY with valid JSON. No markdown, no explanations, no code blocks."""

STYLE_REFINEMENT_SYSTEM_PROMPT = """You are a professional visual style analyst. The user will provide you with a current style definition (in JSON format) and feedback for improvement.

Your task is to:
1. Carefully read the current style definition structure and user feedback
2. Make changes PROPORTIONAL to the instruction - subtle feedback gets subtle changes, dramatic feedback gets dramatic changes
3. Update ALL relevant fields that relate to the feedback (not just one field)
4. Maintain the EXACT SAME JSON structure and field names as the input
5. Only modify field VALUES - do not add or remove fields or change the structure

CRITICAL - Description Field Requirements:
- The "description" field is THE MOST IMPORTANT field and MUST ALWAYS be significantly updated
- ALWAYS expand/rewrite the description to be 2-3 detailed sentences (not just 1 short sentence)
- The description should incorporate the feedback and paint a comprehensive picture of the visual style
- Include sensory details, technical aspects, and the overall aesthetic impression
- Example good description: "A bold urban photography style characterized by direct frontal flash lighting that creates stark, dramatic contrasts. The aesthetic combines vintage film grain with contemporary street photography sensibilities, featuring cool color temperatures that offset warm accent tones. This approach emphasizes raw, authentic moments with high-impact lighting that flattens depth and creates an intimate, documentary-style feel."

For other fields:
- Make changes appropriate to the feedback intensity
- Update all related fields consistently (e.g., if changing lighting, also update shadows, contrast, mood, etc.)
- Use precise, descriptive language

Rules:
- Respond with ONLY valid JSON (no markdown, no code blocks, no explanations)
- Match the exact structure of the input styleData
- ALWAYS expand the description field to 2-3 detailed sentences
- Update all relevant fields proportionally
- Keep nested objects and arrays intact"""

INTELLIGENT_REFINE_SYSTEM_PROMPT = """You are an expert art director reviewing an AI image generation pipeline. You will receive two images: the REFERENCE image the user wants to match and a PREVIEW image generated from the current prompts. You will also receive the current style, composition and concept prompts, with their optional JSON frameworks.

Your task is to:
1. Compare the preview against the reference and identify the most important visual differences (color, lighting, texture, rendering, composition, subject matter)
2. Rewrite each prompt so the next preview moves closer to the reference
3. Keep changes targeted - do not rewrite parts of a prompt that already produce matching results
4. When a framework is provided, return an updated framework with the SAME structure and field names

Respond with ONLY valid JSON (no markdown, no code blocks) in this exact structure:
{
  "explanation": "string - short summary of the differences found and what was changed",
  "refinedStylePrompt": "string",
  "refinedStyleFramework": object or null,
  "refinedCompositionPrompt": "string",
  "refinedCompositionFramework": object or null,
  "refinedConceptPrompt": "string",
  "refinedConceptFramework": object or null
}"""


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def build_generation_prompt(style_prompt: Optional[str], concept: str, settings: Any) -> str:
    """Build the image prompt for one concept.

    The style part is shortened so the whole prompt stays within
    ``MAX_PROMPT_LENGTH`` characters.

    Args:
        style_prompt: Style text of the selected style
        concept: Visual concept to render
        settings: Generation settings (``model`` and ``transparency``)

    Returns:
        Final prompt text
    """
    style_prompt = style_prompt or ""
    template_length = len(GENERATION_TEMPLATE.format(style="", concept=concept))
    remaining = MAX_PROMPT_LENGTH - template_length
    style_text = style_prompt
    if len(style_prompt) > remaining:
        style_text = style_prompt[: max(remaining - 3, 0)] + "..."
        logger.debug(f"Style prompt truncated from {len(style_prompt)} to {len(style_text)} characters")

    prompt = GENERATION_TEMPLATE.format(style=style_text, concept=concept)
    if supports_transparency(settings.model, settings.transparency):
        prompt += TRANSPARENT_SUFFIX
    return prompt


def build_edit_prompt(instruction: Optional[str], settings: Any) -> tuple[str, str]:
    """Build the prompts used for an image edit.

    Returns:
        ``(edit_prompt, enhanced_prompt)``: the short prompt recorded on the
        image and the full prompt sent to the edit API
    """
    if instruction and instruction.strip():
        edit_prompt = _truncate(instruction, MAX_PROMPT_LENGTH)
        enhanced_prompt = f"{edit_prompt}{EDIT_KEEP_SUFFIX}"
    else:
        edit_prompt = DEFAULT_EDIT_PROMPT
        enhanced_prompt = DEFAULT_ENHANCED_PROMPT
    if supports_transparency(settings.model, settings.transparency):
        enhanced_prompt += TRANSPARENT_SENTENCE
    return edit_prompt, enhanced_prompt


def _title_key(key: str) -> str:
    return re.sub(r"\b\w", lambda match: match.group().upper(), key.replace("_", " "))


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _style_value(value: Any) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        items = [_style_object(item) if isinstance(item, dict) else _style_value(item) for item in value]
        return ", ".join(item for item in items if item)
    if isinstance(value, dict):
        return _style_object(value)
    return str(value)


def _style_object(obj: Dict[str, Any]) -> str:
    parts = []
    for key, value in obj.items():
        if _is_blank(value):
            continue
        text = _style_value(value)
        if text:
            parts.append(f"{_title_key(key)}: {text}")
    return ", ".join(parts)


def build_style_description(style_data: Dict[str, Any]) -> str:
    """Flatten extracted style data into a single descriptive sentence list.

    ``style_name`` and ``description`` come first; every other non-empty field
    follows as ``"Title Cased Key: value"``.

    Args:
        style_data: Style JSON as returned by style extraction

    Returns:
        Description text, or ``"No style data available"``
    """
    parts: List[str] = []
    if style_data.get("style_name"):
        parts.append(str(style_data["style_name"]))
    if style_data.get("description"):
        parts.append(str(style_data["description"]))

    for key, value in style_data.items():
        if key in ("style_name", "description") or _is_blank(value):
            continue
        text = _style_value(value)
        if text:
            parts.append(f"{_title_key(key)}: {text}")

    return ". ".join(parts) if parts else "No style data available"


def build_preview_prompt(
    concept: str, style_data: Dict[str, Any], model: str, transparency: bool, render_text: bool
) -> str:
    prompt = f"{concept}. Style: {build_style_description(style_data)}"
    if supports_transparency(model, transparency):
        prompt += TRANSPARENT_SENTENCE
    if not render_text:
        prompt += NO_TEXT_SENTENCE
    return prompt


def _join_values(values: Iterable[Any]) -> str:
    return ", ".join(_style_value(value) for value in values)


def concept_json_to_text(concept_json: str, rng: random.Random | None = None) -> str:
    """Turn a concept returned by the concept prompt into readable text.

    Two JSON shapes are understood: ``{"concepts": [...]}``, from which one
    entry is picked at random, and a legacy structured object with subject,
    title, metaphor, composition and constraint fields. Anything else is
    returned unchanged.

    Args:
        concept_json: Raw or cleaned model output
        rng: Random source for picking from a concepts array

    Returns:
        Human readable concept text
    """
    try:
        parsed = json.loads(concept_json)
    except (TypeError, ValueError):
        return concept_json
    if not isinstance(parsed, dict):
        return concept_json

    concepts = parsed.get("concepts")
    if isinstance(concepts, list) and concepts:
        chooser = rng or random
        selected = concepts[chooser.randrange(len(concepts))]
        return selected if isinstance(selected, str) else json.dumps(selected, separators=(",", ":"))

    parts: List[str] = []
    for key in ("subject", "description", "message"):
        if parsed.get(key):
            parts.append(str(parsed[key]))
            break

    title = parsed.get("title")
    if title and not any(str(title) in part for part in parts):
        parts.append(f"Theme: {title}")

    metaphor = parsed.get("metaphor")
    if metaphor and not any(str(metaphor).lower() in part.lower() for part in parts):
        parts.append(f"Visual metaphor: {metaphor}")

    composition = parsed.get("composition")
    if isinstance(composition, dict):
        comp_parts = []
        if composition.get("shot"):
            comp_parts.append(f"{composition['shot']} shot")
        if composition.get("angle"):
            comp_parts.append(f"{composition['angle']} angle")
        if composition.get("focal_point"):
            comp_parts.append(f"focal point: {composition['focal_point']}")
        if composition.get("framing"):
            comp_parts.append(f"framing: {composition['framing']}")
        if composition.get("depth"):
            comp_parts.append(f"depth: {composition['depth']}")
        if comp_parts:
            parts.append("Composition - " + ", ".join(comp_parts))

    constraints = parsed.get("constraints")
    if isinstance(constraints, dict):
        if isinstance(constraints.get("include"), list):
            parts.append("Must include: " + _join_values(constraints["include"]))
        if isinstance(constraints.get("avoid"), list):
            parts.append("Must avoid: " + _join_values(constraints["avoid"]))
        if constraints.get("required_elements"):
            parts.append(f"Required elements: {constraints['required_elements']}")

    handled = {
        "subject",
        "description",
        "message",
        "title",
        "metaphor",
        "composition",
        "constraints",
        "concept_version",
    }
    for key, value in parsed.items():
        if key in handled or not value:
            continue
        label = key.replace("_", " ")
        if isinstance(value, str):
            parts.append(f"{label}: {value}")
        elif isinstance(value, dict):
            nested = ", ".join(f"{k}: {_style_value(v)}" for k, v in value.items())
            parts.append(f"{label}: {nested}")
        elif isinstance(value, list):
            parts.append(f"{label}: {_join_values(value)}")

    return ". ".join(parts) if parts else concept_json


def value_to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return ", ".join(value_to_string(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def concept_to_display_string(concept: Any) -> str:
    """Render a stored concept (string or object) as one line of text."""
    if isinstance(concept, str):
        return concept
    if concept is None:
        return ""
    if isinstance(concept, dict):
        if "visual_concept" in concept and "core_graphic" in concept:
            return f"{value_to_string(concept['visual_concept'])} | {value_to_string(concept['core_graphic'])}"
        if "concept" in concept:
            return value_to_string(concept["concept"])
        return json.dumps(concept, separators=(",", ":"))
    return value_to_string(concept)


def slider_guidance(literal_metaphorical: float, simple_complex: float) -> str:
    """Extra system prompt text for the concept style sliders.

    Both sliders range from -1 to 1; values within 0.3 of the centre add
    nothing.
    """
    guidance = ""
    if literal_metaphorical < -SLIDER_THRESHOLD:
        guidance += LITERAL_GUIDANCE
    elif literal_metaphorical > SLIDER_THRESHOLD:
        guidance += METAPHORICAL_GUIDANCE
    if simple_complex < -SLIDER_THRESHOLD:
        guidance += SIMPLE_GUIDANCE
    elif simple_complex > SLIDER_THRESHOLD:
        guidance += COMPLEX_GUIDANCE
    return guidance


def build_concept_system_prompt(
    prompt_text: Optional[str], literal_metaphorical: float = 0.0, simple_complex: float = 0.0
) -> str:
    base = prompt_text or CONCEPT_GENERATOR_PROMPT
    return f"{base}{slider_guidance(literal_metaphorical, simple_complex)}{CONCEPT_OUTPUT_FORMAT}"


def build_revision_system_prompt(prompt_text: Optional[str]) -> str:
    return f"{prompt_text or CONCEPT_REVISER_PROMPT}{CONCEPT_OUTPUT_FORMAT}"


def build_concept_list_message(
    company_name: str, marketing_content: str, quantity: int, has_reference: bool
) -> str:
    message = (
        f"Company: {company_name}\n\nMarketing Content:\n{marketing_content}\n\n"
        f"Generate {quantity} distinct visual marketing concepts that would effectively communicate this message."
    )
    if has_reference:
        message += "\n\nConsider the visual style and elements from the provided reference image."
    return message


def build_revision_message(
    company_name: str, marketing_content: str, concepts: Sequence[Any], feedback: str
) -> str:
    """Build the user message asking the model to revise every concept.

    Args:
        company_name: Company of the concept list
        marketing_content: Marketing brief of the concept list
        concepts: Current stored concepts
        feedback: User feedback

    Returns:
        User message text
    """
    formatted = json.dumps(list(concepts), indent=2, ensure_ascii=False)
    return (
        f"Company: {company_name}\n\nMarketing Content:\n{marketing_content}\n\n"
        f"Current Concepts:\n{formatted}\n\nUser Feedback:\n{feedback}\n\n"
        f"Revise ALL {len(concepts)} concepts based on this feedback. "
        "Return only a valid JSON array of strings, no markdown."
    )


def build_selective_feedback(selected_concepts: Sequence[str], feedback: str) -> str:
    numbered = "\n".join(f"{i}. {concept}" for i, concept in enumerate(selected_concepts, start=1))
    return (
        f"Apply the following feedback ONLY to these specific concepts:\n{numbered}\n\n"
        f"Feedback: {feedback}\n\nKeep all other concepts unchanged."
    )


def format_conversation(history: Sequence[Dict[str, str]]) -> str:
    lines = []
    for turn in history:
        speaker = "USER" if turn.get("role") == "user" else "ASSISTANT"
        lines.append(f"{speaker}: {turn.get('content', '')}")
    return "\n\n".join(lines)


def build_style_refinement_message(style_data: Any, feedback: str) -> str:
    return (
        f"Current style definition:\n{json.dumps(style_data, indent=2, ensure_ascii=False)}\n\n"
        f"User feedback for refinement:\n{feedback}\n\n"
        "Please provide the refined style definition in the same JSON format."
    )


def build_intelligent_refine_message(
    style_prompt: str,
    style_framework: Optional[Dict[str, Any]],
    composition_prompt: Optional[str],
    composition_framework: Optional[Dict[str, Any]],
    concept_prompt: Optional[str],
    concept_framework: Optional[Dict[str, Any]],
) -> str:
    """Describe the current prompts for an intelligent refinement request.

    The first attached image is the reference and the second the preview.
    """
    sections = [
        "The first image is the REFERENCE. The second image is the PREVIEW generated from these prompts.",
        f"STYLE PROMPT:\n{style_prompt}",
    ]
    if style_framework:
        sections.append(f"STYLE FRAMEWORK:\n{json.dumps(style_framework, indent=2, ensure_ascii=False)}")
    sections.append(f"COMPOSITION PROMPT:\n{composition_prompt or ''}")
    if composition_framework:
        sections.append(
            f"COMPOSITION FRAMEWORK:\n{json.dumps(composition_framework, indent=2, ensure_ascii=False)}"
        )
    sections.append(f"CONCEPT PROMPT:\n{concept_prompt or ''}")
    if concept_framework:
        sections.append(f"CONCEPT FRAMEWORK:\n{json.dumps(concept_framework, indent=2, ensure_ascii=False)}")
    return "\n\n".join(sections)
