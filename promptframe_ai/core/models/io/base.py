"""
Base schema for API models.

The REST contract is camelCase. Request bodies accept both camelCase and
snake_case field names; responses are serialized with camelCase aliases.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, FrozenSet

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PartialUpdate(CamelModel):
    """
    Base for partial update bodies.

    Only fields present in the request are applied. An explicit ``null`` on a
    field whose column is NOT NULL means "leave unchanged"; on nullable columns
    it clears the stored value.
    """

    not_nullable: ClassVar[FrozenSet[str]] = frozenset()

    def changes(self) -> Dict[str, Any]:
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None or key not in self.not_nullable
        }


class MessageResponse(CamelModel):
    message: str
