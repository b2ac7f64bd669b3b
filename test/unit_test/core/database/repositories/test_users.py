"""Unit tests for the user and login session repositories."""

from datetime import timedelta

from promptframe_ai.core.database.base import utc_now
from promptframe_ai.core.database.entities.users import AuthSession, User
from promptframe_ai.core.database.repositories import AuthSessionRepository, UserRepository

SESSION_KEY = "a" * 64


class TestUserRepository:
    """Tests for UserRepository operations."""

    async def test_get_by_email(self, session, user):
        repo = UserRepository(session)
        assert (await repo.get_by_email(user.email)).id == user.id
        assert await repo.get_by_email("USER@example.com") is None

    async def test_count_and_filters(self, session, user, other_user, admin):
        repo = UserRepository(session)
        assert await repo.count() == 3
        admins = await repo.list(filters={"role": "admin"})
        assert [u.id for u in admins] == [admin.id]
        assert {u.id for u in await repo.list_all()} == {user.id, other_user.id, admin.id}

    async def test_update_last_login(self, session, user):
        assert user.last_login is None
        updated = await UserRepository(session).update_last_login(user)
        assert updated.last_login is not None

    def test_is_admin(self, user, admin):
        assert admin.is_admin is True
        assert user.is_admin is False


class TestAuthSessionRepository:
    """Tests for AuthSessionRepository operations."""

    async def test_create_and_get_valid(self, session, user):
        repo = AuthSessionRepository(session)
        created = await repo.create_for_user(user.id, SESSION_KEY, 3600)

        assert created.id == SESSION_KEY
        assert created.expires_at > utc_now() + timedelta(minutes=59)
        assert (await repo.get_valid(SESSION_KEY)).user_id == user.id

    async def test_expired_session_is_removed_on_lookup(self, session, session_factory, user):
        repo = AuthSessionRepository(session)
        await repo.create(AuthSession(id=SESSION_KEY, user_id=user.id, expires_at=utc_now() - timedelta(seconds=1)))

        assert await repo.get_valid(SESSION_KEY) is None
        async with session_factory() as fresh:
            assert await AuthSessionRepository(fresh).get_by_id(SESSION_KEY) is None

    async def test_unknown_token(self, session):
        assert await AuthSessionRepository(session).get_valid("b" * 64) is None

    async def test_delete_token(self, session, user):
        repo = AuthSessionRepository(session)
        await repo.create_for_user(user.id, SESSION_KEY, 60)
        assert await repo.delete_token(SESSION_KEY) is True
        assert await repo.delete_token(SESSION_KEY) is False

    async def test_purge_expired(self, session, user):
        repo = AuthSessionRepository(session)
        await repo.create(AuthSession(id="old", user_id=user.id, expires_at=utc_now() - timedelta(hours=1)))
        await repo.create_for_user(user.id, SESSION_KEY, 60)

        assert await repo.purge_expired() == 1
        assert [s.id for s in await repo.list()] == [SESSION_KEY]


async def test_deleting_unknown_user_returns_false(session):
    assert await UserRepository(session).delete("missing") is False
