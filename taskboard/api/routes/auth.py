"""Auth Routes — register, login, logout and current user.

Invariants:
    - Passwords hashed before reaching the store; never echoed back
    - Register rejects an email that already has an account (409); the store itself does not
    - Login failure never reveals whether the email exists
    - Logout needs no valid session: it always expires the cookie and revokes every presented token

Design Decisions:
    - Cookie attributes (http-only, secure, SameSite=None, path=/) set in one helper
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from taskboard.api.dependencies import (
    get_current_user, get_session_tokens, get_sessions, get_store,
)
from taskboard.config import Settings, get_settings
from taskboard.core.errors import (
    EmailAlreadyRegisteredError, InvalidCredentialsError,
)
from taskboard.core.records import AuthenticatedUser
from taskboard.core.repository_protocols import SessionVerifier, TaskBoardStore
from taskboard.infrastructure.passwords import hash_password, verify_password
from taskboard.schemas.auth import LoginRequest, RegisterRequest, UserResponse
from taskboard.schemas.common import SuccessResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_session_cookie(
    response: Response, settings: Settings, token: str, max_age: int,
) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="none",
    )


async def _start_session(
    response: Response,
    user: AuthenticatedUser,
    sessions: SessionVerifier,
    settings: Settings,
) -> None:
    token = await sessions.issue(user)
    _set_session_cookie(response, settings, token, settings.session_ttl_seconds)


@router.post(
    "/register", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    response: Response,
    store: TaskBoardStore = Depends(get_store),
    sessions: SessionVerifier = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
):
    """Create an account and start a session."""
    if await store.get_user_by_email(body.email) is not None:
        raise EmailAlreadyRegisteredError()
    user = await store.create_user(
        name=body.name, email=body.email, password=hash_password(body.password),
    )
    await _start_session(
        response, AuthenticatedUser.from_user(user), sessions, settings,
    )
    return UserResponse.from_identity(user)


@router.post("/login", response_model=UserResponse)
async def login(
    body: LoginRequest,
    response: Response,
    store: TaskBoardStore = Depends(get_store),
    sessions: SessionVerifier = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
):
    """Check credentials and start a session."""
    user = await store.get_user_by_email(body.email)
    if user is None or not verify_password(body.password, user.password):
        raise InvalidCredentialsError()
    await _start_session(
        response, AuthenticatedUser.from_user(user), sessions, settings,
    )
    logger.info("User logged in", extra={"user_id": user.id})
    return UserResponse.from_identity(user)


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    response: Response,
    tokens: list[str] = Depends(get_session_tokens),
    sessions: SessionVerifier = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
):
    """Expire the session cookie immediately."""
    for token in tokens:
        await sessions.revoke(token)
    _set_session_cookie(response, settings, "", 0)
    return SuccessResponse()


@router.get("/me", response_model=UserResponse)
async def me(user: AuthenticatedUser = Depends(get_current_user)):
    """Current session's user."""
    return UserResponse.from_identity(user)
