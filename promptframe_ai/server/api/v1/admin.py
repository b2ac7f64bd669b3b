"""
User administration endpoints. Every route requires the admin role.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, status

from promptframe_ai.core.database.entities.users import User
from promptframe_ai.core.database.repositories import UserRepository
from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.core.models.io import AdminUserCreate, RoleUpdate, UserMessageResponse, UserRead
from promptframe_ai.server.auth.dependencies import AdminUser
from promptframe_ai.server.auth.passwords import hash_password
from promptframe_ai.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter(prefix="/admin/users", tags=["admin"])


async def _get_user_or_404(users: UserRepository, user_id: str) -> User:
    user = await users.get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("", response_model=List[UserRead], summary="List Users")
async def list_users(admin: AdminUser, session: SessionDep) -> List[UserRead]:
    users = await UserRepository(session).list_all()
    return [UserRead.model_validate(user) for user in users]


@router.post(
    "",
    response_model=UserMessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    responses={400: {"description": "Email already exists"}},
)
async def create_user(payload: AdminUserCreate, admin: AdminUser, session: SessionDep) -> UserMessageResponse:
    users = UserRepository(session)
    if await users.get_by_email(payload.email) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")
    user = await users.create(User(email=payload.email, password=hash_password(payload.password), role=payload.role))
    logger.info(f"Admin {admin.id} created user {user.id} with role {user.role}")
    return UserMessageResponse(message="User created successfully", user=UserRead.model_validate(user))


@router.patch(
    "/{user_id}/status",
    response_model=UserMessageResponse,
    summary="Toggle User Status",
    description="Activate an inactive user or deactivate an active one. Admins cannot deactivate themselves.",
    responses={
        400: {"description": "Admin tried to deactivate their own account"},
        404: {"description": "User not found"},
    },
)
async def toggle_user_status(user_id: str, admin: AdminUser, session: SessionDep) -> UserMessageResponse:
    users = UserRepository(session)
    user = await _get_user_or_404(users, user_id)
    if user.id == admin.id and user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot deactivate your own account")

    user.is_active = not user.is_active
    user = await users.update(user)
    state = "activated" if user.is_active else "deactivated"
    logger.info(f"Admin {admin.id} {state} user {user.id}")
    return UserMessageResponse(message=f"User {state} successfully", user=UserRead.model_validate(user))


@router.patch(
    "/{user_id}/role",
    response_model=UserMessageResponse,
    summary="Update User Role",
    responses={404: {"description": "User not found"}},
)
async def update_user_role(
    user_id: str, payload: RoleUpdate, admin: AdminUser, session: SessionDep
) -> UserMessageResponse:
    users = UserRepository(session)
    user = await _get_user_or_404(users, user_id)
    user.role = payload.role
    user = await users.update(user)
    logger.info(f"Admin {admin.id} set role of user {user.id} to {user.role}")
    return UserMessageResponse(message="User role updated successfully", user=UserRead.model_validate(user))
