"""
Chat completion client for vision and text prompts.

Built on Pydantic AI: every call runs a short-lived ``Agent`` over a shared
``OpenAIChatModel`` and returns the plain text output.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional, Sequence, Union

from pydantic_ai import Agent, BinaryContent, ImageUrl, ModelSettings
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider

from promptframe_ai.core.logging_config import get_logger

from .image_io import decode_data_url

logger = get_logger(__name__)

DEFAULT_TEXT_MODEL = "gpt-4o"

UserContent = Union[str, BinaryContent, ImageUrl]


def image_content(url: str) -> Union[BinaryContent, ImageUrl]:
    """Convert an image location into Pydantic AI message content.

    Data URLs are decoded and sent inline; http(s) URLs are passed by
    reference.
    """
    if url.startswith("data:"):
        data, mime = decode_data_url(url)
        return BinaryContent(data=data, media_type=mime)
    return ImageUrl(url=url)


class TextClient:
    """Run single turn chat completions, optionally with images attached."""

    def __init__(
        self,
        model_name: str = DEFAULT_TEXT_MODEL,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self.model_name = model_name
        self._api_key = api_key
        self._base_url = base_url
        self._model: Optional[OpenAIChatModel] = None

    @property
    def model(self) -> OpenAIChatModel:
        if self._model is None:
            provider = OpenAIProvider(api_key=self._api_key, base_url=self._base_url)
            self._model = OpenAIChatModel(self.model_name, provider=provider)
        return self._model

    async def complete(
        self,
        system_prompt: Optional[str],
        user_text: str,
        image_url: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        image_urls: Sequence[str] = (),
    ) -> str:
        """Run one completion and return the response text.

        Args:
            system_prompt: Optional system message
            user_text: User message text
            image_url: Optional image sent after the text
            temperature: Sampling temperature
            max_tokens: Completion token limit
            image_urls: Further images, sent in order after ``image_url``

        Returns:
            The model output text, possibly empty
        """
        content: List[UserContent] = [user_text]
        for url in ([image_url] if image_url else []) + list(image_urls):
            content.append(image_content(url))

        model_settings = ModelSettings()
        if temperature is not None:
            model_settings["temperature"] = temperature
        if max_tokens is not None:
            model_settings["max_tokens"] = max_tokens

        agent = Agent(self.model, system_prompt=system_prompt or ())
        logger.debug(
            f"Running {self.model_name} completion: {len(user_text)} chars, {len(content) - 1} image(s)"
        )
        result = await agent.run(content if len(content) > 1 else user_text, model_settings=model_settings)
        return result.output or ""


@lru_cache(maxsize=1)
def get_text_client() -> TextClient:
    from promptframe_ai.server.core.config import settings

    config = settings.openai
    return TextClient(model_name=config.text_model, api_key=config.api_key, base_url=config.base_url)
