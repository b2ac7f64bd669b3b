"""
OpenAI image generation and editing client.

Thin async wrapper around ``openai.AsyncOpenAI`` that returns a single image
URL (or PNG data URL) per call and reports call timing to monitoring.
"""

from __future__ import annotations

import time
from functools import lru_cache
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.core.monitoring import log_image_call

from .capabilities import TRANSPARENCY_MODEL, map_quality
from .image_io import image_result_to_url

logger = get_logger(__name__)


class ImageClient:
    """Generate and edit images with the OpenAI images API.

    The underlying ``AsyncOpenAI`` client is created on first use so the
    application can start without an API key configured.
    """

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        return self._client

    async def generate(self, params: Dict[str, Any]) -> str:
        """Generate one image.

        Args:
            params: Keyword arguments from ``build_image_params``

        Returns:
            Image URL or PNG data URL

        Raises:
            RuntimeError: The response carried no image
        """
        started = time.perf_counter()
        response = await self.client.images.generate(**params)
        duration_ms = (time.perf_counter() - started) * 1000
        log_image_call("generate", params.get("model", ""), params.get("size", ""), duration_ms)

        item = response.data[0] if response.data else None
        url = image_result_to_url(item)
        if not url:
            raise RuntimeError("No image URL or base64 data returned from OpenAI")
        logger.debug(f"Generated image with {params.get('model')} in {duration_ms:.0f}ms")
        return url

    async def edit(
        self,
        image_png: bytes,
        model: str,
        prompt: str,
        size: str,
        quality: str = "standard",
        transparency: bool = False,
    ) -> str:
        """Edit an RGBA PNG image.

        Args:
            image_png: Source image as RGBA PNG bytes
            model: Image model supporting edits
            prompt: Edit instruction
            size: Output size
            quality: ``standard`` or ``hd``
            transparency: Request a transparent background (gpt-image-1 only)

        Returns:
            Image URL or PNG data URL of the edited image
        """
        params: Dict[str, Any] = {
            "image": ("source.png", image_png, "image/png"),
            "prompt": prompt,
            "model": model,
            "n": 1,
            "size": size,
        }
        mapped = map_quality(model, quality)
        if mapped is not None:
            params["quality"] = mapped
        if transparency and model == TRANSPARENCY_MODEL:
            params["background"] = "transparent"

        started = time.perf_counter()
        response = await self.client.images.edit(**params)
        duration_ms = (time.perf_counter() - started) * 1000
        log_image_call("edit", model, size, duration_ms)

        item = response.data[0] if response.data else None
        url = image_result_to_url(item)
        if not url:
            raise RuntimeError("No image URL or base64 data returned from OpenAI edit")
        logger.debug(f"Edited image with {model} in {duration_ms:.0f}ms")
        return url


@lru_cache(maxsize=1)
def get_image_client() -> ImageClient:
    from promptframe_ai.server.core.config import settings

    config = settings.openai
    return ImageClient(api_key=config.api_key, base_url=config.base_url)
