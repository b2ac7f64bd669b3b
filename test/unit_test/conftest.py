"""Shared unit test fixtures.

Provides an in-memory SQLite database with every table created, scriptable
stand-ins for the OpenAI text and image clients, and small generated images.
"""

from __future__ import annotations

import io
from typing import Any, AsyncGenerator, Callable, Dict, List, Optional, Sequence, Set, Tuple

import pytest
import pytest_asyncio
from PIL import Image
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel.pool import StaticPool

from promptframe_ai.core.database import create_all, create_sessionmaker
from promptframe_ai.core.database.entities.users import User, UserRole
from promptframe_ai.core.database.repositories import UserRepository
from promptframe_ai.server.auth.passwords import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

USER_EMAIL = "user@example.com"
USER_PASSWORD = "user-password"
OTHER_EMAIL = "other@example.com"
OTHER_PASSWORD = "other-password"
ADMIN_EMAIL = "boss@example.com"
ADMIN_PASSWORD = "admin-password"


class FakeTextClient:
    """Replacement for ``TextClient`` returning queued responses in order.

    Queue an ``Exception`` instance to make the matching call raise it.
    """

    def __init__(self) -> None:
        self.responses: List[Any] = []
        self.calls: List[Dict[str, Any]] = []

    def queue(self, *responses: Any) -> "FakeTextClient":
        self.responses.extend(responses)
        return self

    async def complete(
        self,
        system_prompt: Optional[str],
        user_text: str,
        image_url: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        image_urls: Sequence[str] = (),
    ) -> str:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_text": user_text,
                "image_url": image_url,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "image_urls": list(image_urls),
            }
        )
        if not self.responses:
            raise AssertionError("Unexpected text completion call")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeImageClient:
    """Replacement for ``ImageClient``.

    Calls listed in ``fail_generate`` / ``fail_edit`` (1-based) raise.
    """

    def __init__(self) -> None:
        self.generate_calls: List[Dict[str, Any]] = []
        self.edit_calls: List[Dict[str, Any]] = []
        self.fail_generate: Set[int] = set()
        self.fail_edit: Set[int] = set()

    async def generate(self, params: Dict[str, Any]) -> str:
        self.generate_calls.append(params)
        number = len(self.generate_calls)
        if number in self.fail_generate:
            raise RuntimeError(f"image API error on call {number}")
        return f"https://mock/images/generated-{number}.png"

    async def edit(
        self,
        image_png: bytes,
        model: str,
        prompt: str,
        size: str,
        quality: str = "standard",
        transparency: bool = False,
    ) -> str:
        self.edit_calls.append(
            {
                "image_png": image_png,
                "model": model,
                "prompt": prompt,
                "size": size,
                "quality": quality,
                "transparency": transparency,
            }
        )
        number = len(self.edit_calls)
        if number in self.fail_edit:
            raise RuntimeError(f"image edit error on call {number}")
        return f"https://mock/images/edited-{number}.png"


def make_image(
    fmt: str = "PNG", size: Tuple[int, int] = (4, 4), mode: str = "RGB", color: Any = (200, 30, 30)
) -> bytes:
    output = io.BytesIO()
    Image.new(mode, size, color).save(output, format=fmt)
    return output.getvalue()


@pytest.fixture
def image_bytes() -> Callable[..., bytes]:
    """Factory producing small encoded images, e.g. ``image_bytes("JPEG")``."""
    return make_image


@pytest.fixture
def fake_text_client() -> FakeTextClient:
    return FakeTextClient()


@pytest.fixture
def fake_image_client() -> FakeImageClient:
    return FakeImageClient()


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory database with every table created, fresh for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine):
    return create_sessionmaker(test_engine)


@pytest_asyncio.fixture(name="session")
async def session_fixture(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


async def _create_user(session: AsyncSession, email: str, password: str, role: str) -> User:
    return await UserRepository(session).create(User(email=email, password=hash_password(password), role=role))


@pytest_asyncio.fixture
async def user(session: AsyncSession) -> User:
    return await _create_user(session, USER_EMAIL, USER_PASSWORD, UserRole.USER.value)


@pytest_asyncio.fixture
async def other_user(session: AsyncSession) -> User:
    return await _create_user(session, OTHER_EMAIL, OTHER_PASSWORD, UserRole.USER.value)


@pytest_asyncio.fixture
async def admin(session: AsyncSession) -> User:
    return await _create_user(session, ADMIN_EMAIL, ADMIN_PASSWORD, UserRole.ADMIN.value)
