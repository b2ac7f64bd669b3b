"""
Request dependencies.

Annotated aliases for the database session, the OpenAI clients and the
background generation runner, so endpoints and tests share one place to
resolve (or override) them.
"""

from typing import Annotated, Callable

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from promptframe_ai.core.database import async_session_maker, get_session
from promptframe_ai.server.core.config import settings
from promptframe_ai.studio.image_client import ImageClient, get_image_client
from promptframe_ai.studio.runner import GenerationRunner
from promptframe_ai.studio.text_client import TextClient, get_text_client


def get_session_factory() -> Callable[[], AsyncSession]:
    return async_session_maker


def get_runner(
    image_client: ImageClient = Depends(get_image_client),
    session_factory: Callable[[], AsyncSession] = Depends(get_session_factory),
) -> GenerationRunner:
    return GenerationRunner(
        session_factory=session_factory,
        image_client=image_client,
        delay_seconds=settings.openai.image_generation_delay_seconds,
    )


SessionDep = Annotated[AsyncSession, Depends(get_session)]
ImageClientDep = Annotated[ImageClient, Depends(get_image_client)]
TextClientDep = Annotated[TextClient, Depends(get_text_client)]
RunnerDep = Annotated[GenerationRunner, Depends(get_runner)]
