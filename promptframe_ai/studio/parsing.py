"""
Parsing of model text responses.

Chat models are asked for bare JSON but regularly wrap it in markdown code
fences; the helpers here strip those before parsing.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List

from .errors import ConceptParseError, StyleRefinementError

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")
_ANY_FENCE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)

UNPARSED_STYLE_FIELDS = {
    "color_usage": "Unable to parse color information",
    "lighting": "Unable to parse lighting information",
    "shadow_style": "Unable to parse shadow information",
    "shapes": "Unable to parse shape information",
    "shape_edges": "Unable to parse edge information",
    "symmetry_balance": "Unable to parse balance information",
    "line_quality": "Unable to parse line information",
    "line_color_treatment": "Unable to parse line color information",
    "texture": "Unable to parse texture information",
    "material_suggestion": "Unable to parse material information",
    "rendering_style": "Unable to parse rendering information",
    "detail_level": "Unable to parse detail information",
    "perspective": "Unable to parse perspective information",
    "scale_relationships": "Unable to parse scale information",
    "composition": "Unable to parse composition information",
    "visual_hierarchy": "Unable to parse hierarchy information",
}


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence, if any."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
        cleaned = _TRAILING_FENCE.sub("", cleaned)
    return cleaned.strip()


def strip_all_fences(text: str) -> str:
    return _ANY_FENCE.sub("", text).strip()


def parse_json_object(text: str) -> Any:
    """Parse JSON from a model response.

    Raises:
        ValueError: The response is not valid JSON
    """
    return json.loads(strip_code_fences(text))


def parse_style_object(text: str) -> Dict[str, Any]:
    """Parse a refined style or prompt set, which must be a JSON object.

    Raises:
        StyleRefinementError: Invalid JSON, or JSON that is not an object
    """
    try:
        data = parse_json_object(text)
    except ValueError as e:
        raise StyleRefinementError("Refined style is not valid JSON", details=str(e)) from e
    if not isinstance(data, dict):
        raise StyleRefinementError(f"Refined style is not a JSON object: got {type(data).__name__}")
    return data


def parse_concepts(text: str) -> List[Dict[str, Any]]:
    """Parse and normalize a generated concept list.

    The model may answer with a JSON array or with ``{"concepts": [...]}``.
    Strings become ``{"concept": text}``, objects are kept as they are and
    anything else is replaced by a numbered placeholder.

    Args:
        text: Raw model output

    Returns:
        Non-empty list of concept objects

    Raises:
        ConceptParseError: Invalid JSON, unexpected shape or empty list
    """
    details = "The AI must return a JSON array of concept strings or objects."
    try:
        parsed = json.loads(strip_all_fences(text or "[]"))
    except ValueError as exc:
        raise ConceptParseError(f"Invalid JSON in concept response: {exc}", details) from exc

    if isinstance(parsed, list):
        raw = parsed
    elif isinstance(parsed, dict) and isinstance(parsed.get("concepts"), list):
        raw = parsed["concepts"]
    else:
        raise ConceptParseError(
            'Response must be an array or an object with a "concepts" array property', details
        )

    concepts: List[Dict[str, Any]] = []
    for index, item in enumerate(raw):
        if isinstance(item, str):
            concepts.append({"concept": item})
        elif isinstance(item, dict):
            concepts.append(item)
        else:
            concepts.append({"concept": f"Concept {index + 1}"})

    if not concepts:
        raise ConceptParseError("Concepts array is empty", details)
    return concepts


def clean_concept_json(text: str) -> str:
    """Return the fence-free JSON text when it parses, otherwise ``text``."""
    cleaned = strip_all_fences(text)
    try:
        json.loads(cleaned)
    except ValueError:
        return text
    return cleaned


def fallback_style_data(raw: str) -> Dict[str, Any]:
    """Style data used when the extraction response is not valid JSON."""
    data: Dict[str, Any] = {
        "style_name": "AI Extracted Style",
        "description": f"Style analysis: {raw[:500]}",
        "color_palette": ["#000000", "#FFFFFF"],
    }
    data.update(UNPARSED_STYLE_FIELDS)
    data["typography"] = {
        "font_styles": "Unable to parse typography",
        "font_weights": "Unable to parse weights",
        "case_usage": "Unable to parse case usage",
        "alignment": "Unable to parse alignment",
        "letter_spacing": "Unable to parse spacing",
        "text_treatment": "Unable to parse text treatment",
    }
    data["ui_elements"] = {
        "corner_radius": "Unable to parse corner radius",
        "icon_style": "Unable to parse icon style",
        "button_style": "Unable to parse button style",
        "spacing_rhythm": "Unable to parse spacing rhythm",
    }
    data["motion_or_interaction"] = "Unable to parse motion information"
    data["notable_visual_effects"] = "Unable to parse effects information"
    return data
