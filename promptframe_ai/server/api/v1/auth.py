"""
Authentication endpoints.

Registration and login open a server side session and set the session cookie;
logout removes both. Self-registered accounts always get the ``user`` role.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response, status

from promptframe_ai.core.database.entities.users import User, UserRole
from promptframe_ai.core.database.repositories import UserRepository
from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.core.models.io import (
    Credentials,
    ElevateUserRequest,
    MessageResponse,
    UserMessageResponse,
    UserRead,
)
from promptframe_ai.server.auth.dependencies import AdminUser, CurrentUser
from promptframe_ai.server.auth.passwords import hash_password, verify_password
from promptframe_ai.server.auth.sessions import (
    clear_session_cookie,
    close_session,
    open_session,
    set_session_cookie,
)
from promptframe_ai.server.core.config import settings
from promptframe_ai.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])

INVALID_CREDENTIALS = "Invalid email or password"
ROLES = {UserRole.ADMIN.value, UserRole.USER.value}


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a user account and log it in.",
    responses={400: {"description": "Email already exists"}},
)
async def register(payload: Credentials, response: Response, session: SessionDep) -> UserRead:
    users = UserRepository(session)
    if await users.get_by_email(payload.email) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    user = await users.create(
        User(email=payload.email, password=hash_password(payload.password), role=UserRole.USER.value)
    )
    token = await open_session(session, user)
    set_session_cookie(response, token)
    logger.info(f"Registered user {user.id}")
    return UserRead.model_validate(user)


@router.post(
    "/login",
    response_model=UserRead,
    summary="Login",
    responses={401: {"description": "Invalid email or password"}},
)
async def login(payload: Credentials, response: Response, session: SessionDep) -> UserRead:
    users = UserRepository(session)
    user = await users.get_by_email(payload.email)
    if user is None or not user.is_active or not verify_password(payload.password, user.password):
        logger.info(f"Failed login attempt for {payload.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

    user = await users.update_last_login(user)
    token = await open_session(session, user)
    set_session_cookie(response, token)
    return UserRead.model_validate(user)


@router.post("/logout", response_model=MessageResponse, summary="Logout")
async def logout(request: Request, response: Response, session: SessionDep) -> MessageResponse:
    token = request.cookies.get(settings.auth.cookie_name)
    if token:
        await close_session(session, token)
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=UserRead, summary="Current User")
async def current_user(user: CurrentUser) -> UserRead:
    return UserRead.model_validate(user)


@router.post(
    "/admin/elevate-user",
    response_model=UserMessageResponse,
    summary="Change User Role",
    description="Set the role of any user. Admin only.",
    responses={
        400: {"description": "Missing user id or invalid role"},
        403: {"description": "Admin access required"},
        404: {"description": "User not found"},
    },
)
async def elevate_user(payload: ElevateUserRequest, admin: AdminUser, session: SessionDep) -> UserMessageResponse:
    if not payload.user_id or payload.role not in ROLES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Valid userId and role (admin/user) required",
        )

    users = UserRepository(session)
    user = await users.get_by_id(payload.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    user.role = payload.role
    user = await users.update(user)
    logger.info(f"Admin {admin.id} set role of user {user.id} to {user.role}")
    return UserMessageResponse(message="User role updated successfully", user=UserRead.model_validate(user))
