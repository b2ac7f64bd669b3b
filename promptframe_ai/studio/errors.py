"""
Domain errors raised by the studio layer.

Routers translate these into HTTP errors; the background runner records
them on the generation job.
"""

from __future__ import annotations

from typing import Optional


class StudioError(Exception):
    """Base class for studio errors.

    Attributes:
        message: Human readable error message
        details: Optional extra context returned to API clients
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class CapabilityError(StudioError):
    """Generation settings are not supported by the selected model."""


class UnsupportedModelError(CapabilityError):
    def __init__(self, model: str) -> None:
        super().__init__(f"Unsupported model: {model}")
        self.model = model


class UnsupportedSizeError(CapabilityError):
    def __init__(self, model: str, size: str, supported: list) -> None:
        super().__init__(
            f"Model {model} does not support size {size}",
            f"Supported sizes for {model}: {', '.join(supported)}",
        )
        self.model = model
        self.size = size


class UnsupportedQualityError(CapabilityError):
    def __init__(self, model: str, quality: str = "hd") -> None:
        if quality == "hd":
            super().__init__(
                f"Model {model} does not support HD quality",
                f"{model} only supports standard quality. Please select standard quality.",
            )
        else:
            super().__init__(f"Unsupported quality: {quality}", "Supported quality levels: standard, hd")
        self.model = model
        self.quality = quality


class EditingNotSupportedError(CapabilityError):
    def __init__(self, model: str) -> None:
        super().__init__(
            "Model not supported for image editing",
            (
                f"The model \"{model}\" does not support image editing. "
                "Only DALL-E 2 and GPT Image 1 support editing with original reference."
            ),
        )
        self.model = model


class ImageDownloadError(StudioError):
    """A source image could not be fetched or decoded."""


class ImageConversionError(StudioError):
    """Pillow could not convert an image."""


class ConceptParseError(StudioError):
    """The model response did not contain a usable concept list."""


class StyleRefinementError(StudioError):
    """The model response did not contain a valid refined style."""


class RefinementError(StudioError):
    """A concept list refinement request cannot be applied."""
