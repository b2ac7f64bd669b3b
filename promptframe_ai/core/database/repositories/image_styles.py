"""
Image style repository.

Styles are either owned by a user or shared (``created_by`` is null). Admins
see every style; other users see their own styles and the shared ones.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlmodel import or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..base import new_id, utc_now
from ..entities.image_styles import ImageStyle
from ..entities.users import User
from .base import AsyncBaseRepository


class ImageStyleRepository(AsyncBaseRepository[ImageStyle]):
    """Repository for image style data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with async database session.

        Args:
            session: Async SQLModel Session for database operations
        """
        super().__init__(session, ImageStyle)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[ImageStyle]:
        return await self._list_ordered(ImageStyle.created_at.desc(), limit, offset, filters)

    async def list_visible(self, user: User) -> List[ImageStyle]:
        """List the styles a user may see.

        Args:
            user: Requesting user

        Returns:
            Every style for admins, otherwise the user's own and shared styles
        """
        if user.is_admin:
            return await self.list()
        stmt = (
            select(ImageStyle)
            .where(or_(ImageStyle.created_by == user.id, ImageStyle.created_by == None))  # noqa: E711
            .order_by(ImageStyle.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def update_fields(self, style: ImageStyle, changes: Dict[str, Any]) -> ImageStyle:
        """Apply a partial update. Ownership and identity fields are never changed.

        Args:
            style: Style to modify
            changes: Field values keyed by attribute name

        Returns:
            Updated ImageStyle instance
        """
        for key, value in changes.items():
            if key in ("id", "created_by", "created_at"):
                continue
            setattr(style, key, value)
        return await self.update(style)

    async def duplicate(self, style_id: str, user_id: Optional[str]) -> Optional[ImageStyle]:
        """Copy a style under a new id, owned by ``user_id``.

        Args:
            style_id: Style to copy
            user_id: Owner of the copy

        Returns:
            The new ImageStyle, or None if the source does not exist
        """
        original = await self.get_by_id(style_id)
        if original is None:
            return None
        data = original.model_dump(exclude={"id", "created_at", "created_by", "name"})
        copy = ImageStyle(
            **data,
            id=new_id(),
            name=f"{original.name} (Copy)",
            created_by=user_id,
            created_at=utc_now(),
        )
        return await self.create(copy)
