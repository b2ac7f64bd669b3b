"""
Image input and output helpers.

Images are kept in memory end to end: uploaded references become data URLs,
and source images for editing are downloaded into ``bytes`` and converted
to RGBA PNG with Pillow before they are sent to the edit API.
"""

from __future__ import annotations

import base64
import binascii
import io
import os
import re
import uuid
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import httpx
from PIL import Image, UnidentifiedImageError

from promptframe_ai.core.logging_config import get_logger

from .errors import ImageConversionError, ImageDownloadError

logger = get_logger(__name__)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
UPLOAD_MIME_TYPES = ("image/png", "image/jpeg", "image/jpg", "image/gif", "image/webp")
DOWNLOAD_TIMEOUT_SECONDS = 60.0

_DATA_URL = re.compile(r"^data:([^;]+);base64,(.+)$", re.DOTALL)


@dataclass
class UploadedImage:
    url: str
    file_name: str
    size: int
    mimetype: str
    converted: bool


def _normalize_mime(mime: str) -> Optional[str]:
    mime = mime.lower()
    if "image/jpeg" in mime or "image/jpg" in mime:
        return "image/jpeg"
    if "image/png" in mime:
        return "image/png"
    if "image/webp" in mime:
        return "image/webp"
    return None


def to_data_url(data: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_url(url: str) -> Tuple[bytes, str]:
    """Decode a base64 image data URL.

    Args:
        url: ``data:<mime>;base64,<payload>`` URL

    Returns:
        ``(image bytes, normalized mime type)``

    Raises:
        ImageDownloadError: Malformed URL or unsupported image type
    """
    match = _DATA_URL.match(url)
    if not match:
        raise ImageDownloadError("Invalid data URL format")
    declared = match.group(1).lower()
    mime = _normalize_mime(declared) if declared in ("image/png", "image/jpeg", "image/jpg", "image/webp") else None
    if mime is None:
        raise ImageDownloadError(f"Unsupported MIME type in data URL: {match.group(1)}")
    try:
        data = base64.b64decode(match.group(2), validate=False)
    except (binascii.Error, ValueError) as exc:
        raise ImageDownloadError(f"Failed to process data URL: {exc}") from exc
    return data, mime


async def download_image(url: str, client: Optional[httpx.AsyncClient] = None) -> Tuple[bytes, str]:
    """Fetch an image from a data URL or an http(s) URL.

    A response without a content type is assumed to be PNG; a response with a
    non-image content type is rejected.

    Args:
        url: Image location
        client: Optional shared HTTP client

    Returns:
        ``(image bytes, mime type)``

    Raises:
        ImageDownloadError: The image could not be fetched
    """
    if url.startswith("data:"):
        return decode_data_url(url)

    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=DOWNLOAD_TIMEOUT_SECONDS, follow_redirects=True)
    try:
        response = await http.get(url)
    except httpx.HTTPError as exc:
        raise ImageDownloadError(f"Failed to download image: {exc}") from exc
    finally:
        if owns_client:
            await http.aclose()

    if response.status_code != 200:
        raise ImageDownloadError(f"Failed to download image: {response.status_code}")

    content_type = response.headers.get("content-type", "")
    if content_type and "image/" not in content_type.lower():
        raise ImageDownloadError(
            f"Unsupported content type: {content_type}. "
            "Only image/jpeg, image/png, and image/webp are supported."
        )
    mime = _normalize_mime(content_type) or "image/png"
    logger.debug(f"Downloaded image ({len(response.content)} bytes, {content_type or 'no content type'})")
    return response.content, mime


def to_rgba_png(data: bytes) -> bytes:
    """Convert any Pillow readable image into an RGBA PNG.

    Raises:
        ImageConversionError: Pillow cannot read or write the image
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            rgba = image.convert("RGBA")
            output = io.BytesIO()
            rgba.save(output, format="PNG")
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ImageConversionError(
            "Image format conversion failed - regeneration requires RGBA format", str(exc)
        ) from exc
    return output.getvalue()


def normalize_upload(data: bytes, mimetype: str, filename: Optional[str]) -> UploadedImage:
    """Turn an uploaded reference image into a data URL.

    PNG, JPEG, GIF and WebP are kept as uploaded; other image formats are
    converted to PNG.

    Args:
        data: Uploaded file content
        mimetype: Declared content type
        filename: Original file name, used for the extension

    Returns:
        UploadedImage describing the stored data URL

    Raises:
        ImageConversionError: The image could not be converted
    """
    mimetype = (mimetype or "").lower()
    supported = mimetype in UPLOAD_MIME_TYPES
    if supported:
        final = data
        final_mime = mimetype
        extension = os.path.splitext(filename or "")[1] or ".png"
    else:
        logger.info(f"Converting unsupported image format {mimetype} to PNG")
        try:
            with Image.open(io.BytesIO(data)) as image:
                output = io.BytesIO()
                image.save(output, format="PNG")
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise ImageConversionError(f"Could not convert {mimetype} image to PNG", str(exc)) from exc
        final = output.getvalue()
        final_mime = "image/png"
        extension = ".png"

    return UploadedImage(
        url=to_data_url(final, final_mime),
        file_name=f"reference-{uuid.uuid4()}{extension}",
        size=len(final),
        mimetype=final_mime,
        converted=not supported,
    )


def image_result_to_url(item: Any) -> Optional[str]:
    """Extract an image URL from one entry of an images API response.

    Base64 payloads are returned as PNG data URLs; None is returned when the
    entry carries neither.
    """
    if item is None:
        return None
    b64 = getattr(item, "b64_json", None)
    if b64:
        return f"data:image/png;base64,{b64}"
    return getattr(item, "url", None) or None
