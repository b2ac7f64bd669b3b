"""
User and login session entity models.

Users own styles, jobs, images, project sessions and concept lists. Login
sessions back the HTTP session cookie so a server restart or a second worker
does not log everyone out.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class UserRole(str, Enum):
    """Account role."""

    ADMIN = "admin"
    USER = "user"


class UserBase(Base):
    """Base fields for user accounts."""

    email: str = Field(max_length=320, unique=True, index=True, description="Login email address")
    role: str = Field(default=UserRole.USER.value, max_length=16, description="admin or user")
    is_active: bool = Field(default=True, description="Inactive users cannot log in")


class User(UserBase, table=True):
    """Persistent user account.

    The ``password`` column stores an scrypt digest in ``"<hex hash>.<hex salt>"``
    form, never the plain password.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    password: str = Field(description="scrypt password digest")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})
    last_login: Optional[datetime] = Field(default=None)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"


class AuthSession(Base, table=True):
    """Server side login session referenced by the session cookie.

    Table: auth_sessions
    """

    __tablename__ = "auth_sessions"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(primary_key=True, max_length=128, description="Digest of the session cookie token")
    user_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime = Field(index=True)

    def __repr__(self) -> str:
        return f"AuthSession(user_id={self.user_id}, expires_at={self.expires_at})"
