"""
User and authentication I/O models.

Passwords are accepted on the way in and never returned.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


class UserRead(CamelModel):
    """Schema for reading a user account from the API."""

    id: str
    email: str
    role: str = Field(description="admin or user")
    is_active: bool
    created_at: datetime
    updated_at: datetime
    last_login: Optional[datetime] = None


class Credentials(CamelModel):
    """Email and password for register and login."""

    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=1)


class AdminUserCreate(Credentials):
    role: str = Field(default="user", pattern="^(admin|user)$")


class ElevateUserRequest(CamelModel):
    user_id: Optional[str] = None
    role: Optional[str] = None


class RoleUpdate(CamelModel):
    role: str = Field(pattern="^(admin|user)$")


class UserMessageResponse(CamelModel):
    message: str
    user: UserRead
