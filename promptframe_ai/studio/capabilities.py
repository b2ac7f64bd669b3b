"""
Image model capabilities.

Each supported OpenAI image model accepts a different set of sizes and
quality values, and only some support image editing. Requests are checked
here before any API call is made.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from promptframe_ai.core.logging_config import get_logger

from .errors import (
    EditingNotSupportedError,
    UnsupportedModelError,
    UnsupportedQualityError,
    UnsupportedSizeError,
)

logger = get_logger(__name__)

SQUARE = "1024x1024"
LANDSCAPE = "1536x1024"
PORTRAIT = "1024x1536"
QUALITY_LEVELS = ("standard", "hd")


@dataclass(frozen=True)
class ModelCapability:
    supports_quality: bool
    supported_sizes: List[str]
    supports_editing: bool


MODEL_CAPABILITIES: Dict[str, ModelCapability] = {
    "dall-e-2": ModelCapability(supports_quality=False, supported_sizes=[SQUARE], supports_editing=True),
    "dall-e-3": ModelCapability(
        supports_quality=True, supported_sizes=[SQUARE, LANDSCAPE, PORTRAIT], supports_editing=False
    ),
    "gpt-image-1": ModelCapability(
        supports_quality=True, supported_sizes=[SQUARE, LANDSCAPE, PORTRAIT], supports_editing=True
    ),
}

TRANSPARENCY_MODEL = "gpt-image-1"


def get_capability(model: str) -> ModelCapability:
    capability = MODEL_CAPABILITIES.get(model)
    if capability is None:
        raise UnsupportedModelError(model)
    return capability


def supports_transparency(model: str, transparency: bool) -> bool:
    return bool(transparency) and model == TRANSPARENCY_MODEL


def validate_settings(settings: Any, require_editing: bool = False) -> ModelCapability:
    """Check generation settings against the model capabilities.

    Args:
        settings: Object with ``model``, ``size`` and ``quality`` attributes
        require_editing: Also require image editing support

    Returns:
        The capability of the selected model

    Raises:
        CapabilityError: A subclass describing the first unsupported setting
    """
    capability = get_capability(settings.model)
    if require_editing and not capability.supports_editing:
        raise EditingNotSupportedError(settings.model)
    if settings.size not in capability.supported_sizes:
        raise UnsupportedSizeError(settings.model, settings.size, capability.supported_sizes)
    if settings.quality not in QUALITY_LEVELS:
        raise UnsupportedQualityError(settings.model, settings.quality)
    if settings.quality == "hd" and not capability.supports_quality:
        raise UnsupportedQualityError(settings.model)
    return capability


def map_quality(model: str, quality: str) -> Optional[str]:
    """Translate the API quality value to the one the model expects.

    ``gpt-image-1`` names its levels ``high`` and ``medium``; ``dall-e-2`` has
    no quality parameter at all, so None is returned for it.
    """
    capability = get_capability(model)
    if not capability.supports_quality:
        return None
    if model == "gpt-image-1":
        return "high" if quality == "hd" else "medium"
    return "hd" if quality == "hd" else "standard"


def build_image_params(
    model: str, size: str, quality: str, prompt: str, transparency: bool = False
) -> Dict[str, Any]:
    """Build keyword arguments for ``images.generate``.

    Args:
        model: Image model name
        size: Requested size
        quality: ``standard`` or ``hd``
        prompt: Final image prompt
        transparency: Request a transparent background

    Returns:
        Parameters for the OpenAI images API

    Raises:
        ValueError: Unknown model or unsupported size
    """
    capability = MODEL_CAPABILITIES.get(model)
    if capability is None:
        raise ValueError(f"Unsupported model: {model}")
    if size not in capability.supported_sizes:
        raise ValueError(
            f"Model {model} does not support size {size}. "
            f"Supported sizes: {', '.join(capability.supported_sizes)}"
        )

    params: Dict[str, Any] = {"model": model, "prompt": prompt, "n": 1, "size": size}
    mapped = map_quality(model, quality)
    if mapped is not None:
        params["quality"] = mapped

    if transparency:
        if model == TRANSPARENCY_MODEL:
            params["background"] = "transparent"
        else:
            logger.warning(
                f"Transparency requested but model {model} does not support it. "
                f"Use {TRANSPARENCY_MODEL} for transparency."
            )
    return params
