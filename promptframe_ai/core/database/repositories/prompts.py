"""
Prompt configuration repositories.

This module provides data access for per-user preferences, admin-managed
system prompts and media adapters. System prompts keep at most one active
prompt per type; media adapters keep at most one default.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..base import utc_now
from ..entities.prompts import MediaAdapter, SystemPrompt, UserPreferences
from .base import AsyncBaseRepository


class UserPreferencesRepository(AsyncBaseRepository[UserPreferences]):
    """Repository for user preferences."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, UserPreferences)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[UserPreferences]:
        return await self._list_ordered(UserPreferences.created_at, limit, offset, filters)

    async def get_for_user(self, user_id: str) -> Optional[UserPreferences]:
        result = await self.session.exec(select(UserPreferences).where(UserPreferences.user_id == user_id))
        return result.first()

    async def upsert(self, user_id: str, extraction_prompt: str, concept_prompt: str) -> UserPreferences:
        """Create or replace the default prompts of a user.

        Args:
            user_id: Owner of the preferences
            extraction_prompt: Default style extraction prompt
            concept_prompt: Default concept prompt

        Returns:
            Persisted UserPreferences
        """
        preferences = await self.get_for_user(user_id)
        if preferences is None:
            preferences = UserPreferences(
                user_id=user_id,
                default_extraction_prompt=extraction_prompt,
                default_concept_prompt=concept_prompt,
            )
            return await self.create(preferences)
        preferences.default_extraction_prompt = extraction_prompt
        preferences.default_concept_prompt = concept_prompt
        preferences.updated_at = utc_now()
        return await self.update(preferences)


class SystemPromptRepository(AsyncBaseRepository[SystemPrompt]):
    """Repository for system prompt data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with async database session.

        Args:
            session: Async SQLModel Session for database operations
        """
        super().__init__(session, SystemPrompt)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[SystemPrompt]:
        return await self._list_ordered(SystemPrompt.created_at.desc(), limit, offset, filters)

    async def list_by_type(self, prompt_type: str) -> List[SystemPrompt]:
        return await self.list(filters={"prompt_type": prompt_type})

    async def get_active_by_type(self, prompt_type: str) -> Optional[SystemPrompt]:
        """Get the active prompt of a type.

        Args:
            prompt_type: One of the ``PromptType`` values

        Returns:
            Active SystemPrompt or None
        """
        stmt = (
            select(SystemPrompt)
            .where(SystemPrompt.prompt_type == prompt_type)
            .where(SystemPrompt.is_active == True)  # noqa: E712
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def update_fields(self, prompt: SystemPrompt, changes: Dict[str, Any]) -> SystemPrompt:
        for key, value in changes.items():
            if key in ("id", "created_by", "created_at"):
                continue
            setattr(prompt, key, value)
        prompt.updated_at = utc_now()
        return await self.update(prompt)

    async def set_active(self, prompt_id: str, prompt_type: str) -> Optional[SystemPrompt]:
        """Make one prompt the only active prompt of its type.

        All changes are committed together.

        Args:
            prompt_id: Prompt to activate
            prompt_type: Type the prompt belongs to

        Returns:
            The activated SystemPrompt, or None if it does not exist
        """
        target = await self.get_by_id(prompt_id)
        if target is None:
            return None
        now = utc_now()
        for prompt in await self.list_by_type(prompt_type):
            if prompt.is_active and prompt.id != prompt_id:
                prompt.is_active = False
                prompt.updated_at = now
                self.session.add(prompt)
        target.is_active = True
        target.updated_at = now
        self.session.add(target)
        await self.session.commit()
        await self.session.refresh(target)
        return target


class MediaAdapterRepository(AsyncBaseRepository[MediaAdapter]):
    """Repository for media adapters. Only one adapter is the default."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, MediaAdapter)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[MediaAdapter]:
        return await self._list_ordered(MediaAdapter.created_at, limit, offset, filters)

    async def get_default(self) -> Optional[MediaAdapter]:
        result = await self.session.exec(
            select(MediaAdapter).where(MediaAdapter.is_default == True)  # noqa: E712
        )
        return result.first()

    async def _unset_other_defaults(self, keep_id: Optional[str]) -> None:
        for adapter in await self.list(filters={"is_default": True}):
            if adapter.id != keep_id:
                adapter.is_default = False
                adapter.updated_at = utc_now()
                self.session.add(adapter)

    async def create(self, adapter: MediaAdapter) -> MediaAdapter:
        """Create an adapter, clearing any other default when it is the default.

        Args:
            adapter: MediaAdapter to persist

        Returns:
            Persisted MediaAdapter
        """
        if adapter.is_default:
            await self._unset_other_defaults(adapter.id)
        return await super().create(adapter)

    async def update_fields(self, adapter: MediaAdapter, changes: Dict[str, Any]) -> MediaAdapter:
        for key, value in changes.items():
            if key in ("id", "created_by", "created_at"):
                continue
            setattr(adapter, key, value)
        if adapter.is_default:
            await self._unset_other_defaults(adapter.id)
        adapter.updated_at = utc_now()
        return await self.update(adapter)
