"""Unit tests for cookie backed login sessions."""

from fastapi import Response

from promptframe_ai.core.database.repositories import AuthSessionRepository
from promptframe_ai.server.auth.sessions import (
    clear_session_cookie,
    close_session,
    open_session,
    session_key,
    set_session_cookie,
)
from promptframe_ai.server.core.config import settings


class TestSessionKey:
    def test_is_a_stable_hex_digest(self):
        key = session_key("token")
        assert key == session_key("token")
        assert len(key) == 64
        assert key != "token"

    def test_different_tokens_differ(self):
        assert session_key("a") != session_key("b")


class TestOpenAndCloseSession:
    """Tests for open_session and close_session."""

    async def test_only_the_digest_is_stored(self, session, user):
        token = await open_session(session, user)

        repo = AuthSessionRepository(session)
        assert await repo.get_by_id(token) is None
        stored = await repo.get_valid(session_key(token))
        assert stored.user_id == user.id

    async def test_close_session(self, session, user):
        token = await open_session(session, user)
        assert await close_session(session, token) is True
        assert await close_session(session, token) is False


class TestCookies:
    def test_set_cookie_attributes(self):
        response = Response()
        set_session_cookie(response, "tok")
        header = response.headers["set-cookie"]
        assert header.startswith(f"{settings.auth.cookie_name}=tok")
        assert "HttpOnly" in header
        assert "SameSite=lax" in header
        assert f"Max-Age={settings.auth.max_age_seconds}" in header

    def test_clear_cookie(self):
        response = Response()
        clear_session_cookie(response)
        header = response.headers["set-cookie"]
        assert header.startswith(f'{settings.auth.cookie_name}=""')
        assert "Max-Age=0" in header
