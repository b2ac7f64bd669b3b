from typing import AsyncGenerator, Awaitable, Callable, List, Optional
from unittest.mock import patch

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from promptframe_ai.studio.runner import GenerationRunner
from test.unit_test.conftest import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    OTHER_EMAIL,
    OTHER_PASSWORD,
    USER_EMAIL,
    USER_PASSWORD,
)

ClientFactory = Callable[[Optional[str], Optional[str]], Awaitable[AsyncClient]]


@pytest.fixture
def runner(session_factory, fake_image_client) -> GenerationRunner:
    """Generation runner bound to the test database, without pauses."""
    return GenerationRunner(session_factory=session_factory, image_client=fake_image_client, delay_seconds=0)


@pytest_asyncio.fixture(name="app")
async def app_fixture(
    session_factory, fake_text_client, fake_image_client, runner
) -> AsyncGenerator[FastAPI, None]:
    """The application with database, AI clients and runner overridden."""
    from promptframe_ai.core.database import get_session
    from promptframe_ai.server.main import app
    from promptframe_ai.server.services.deps import get_runner, get_session_factory
    from promptframe_ai.studio.image_client import get_image_client
    from promptframe_ai.studio.text_client import get_text_client

    # A fresh session per request, so rows written by background jobs are visible
    async def get_session_override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_image_client] = lambda: fake_image_client
    app.dependency_overrides[get_text_client] = lambda: fake_text_client
    app.dependency_overrides[get_runner] = lambda: runner

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("promptframe_ai.server.main.lifespan", mock_lifespan):
        yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def make_client(app: FastAPI) -> AsyncGenerator[ClientFactory, None]:
    """Factory for HTTP clients, optionally logged in with email and password."""
    clients: List[AsyncClient] = []

    async def _make(email: Optional[str] = None, password: Optional[str] = None) -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost")
        clients.append(client)
        if email:
            response = await client.post("/api/login", json={"email": email, "password": password})
            assert response.status_code == 200, response.text
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest_asyncio.fixture(name="client")
async def client_fixture(make_client: ClientFactory) -> AsyncClient:
    """Anonymous client."""
    return await make_client(None, None)


@pytest_asyncio.fixture
async def user_client(make_client: ClientFactory, user) -> AsyncClient:
    return await make_client(USER_EMAIL, USER_PASSWORD)


@pytest_asyncio.fixture
async def other_client(make_client: ClientFactory, other_user) -> AsyncClient:
    return await make_client(OTHER_EMAIL, OTHER_PASSWORD)


@pytest_asyncio.fixture
async def admin_client(make_client: ClientFactory, admin) -> AsyncClient:
    return await make_client(ADMIN_EMAIL, ADMIN_PASSWORD)
