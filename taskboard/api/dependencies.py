"""Request Dependencies — injected store, session verifier and the authenticated caller.

Invariants:
    - Store and session verifier come from app.state (set in the lifespan), never globals
    - Candidate tokens: the session cookie, then `Authorization: Bearer`; the first
      one that verifies wins, so a stale cookie does not mask a valid header
    - The verified identity is re-read from the store; a token whose user no longer
      exists is rejected
    - get_current_user raises UnauthorizedError for missing or invalid tokens, before
      the route body runs (no store mutation on auth failure)

Design Decisions:
    - Auth check written once as a FastAPI dependency: every protected route shares it
    - Overridable via app.dependency_overrides in tests
"""

import logging

from fastapi import Depends, Request

from taskboard.config import Settings, get_settings
from taskboard.core.errors import UnauthorizedError
from taskboard.core.records import AuthenticatedUser
from taskboard.core.repository_protocols import TaskBoardStore, SessionVerifier

logger = logging.getLogger(__name__)


def get_store(request: Request) -> TaskBoardStore:
    """FastAPI dependency for the configured store."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Store not initialized")
    return store


def get_sessions(request: Request) -> SessionVerifier:
    """FastAPI dependency for the session verifier."""
    sessions = getattr(request.app.state, "sessions", None)
    if sessions is None:
        raise RuntimeError("Session registry not initialized")
    return sessions


def get_session_tokens(
    request: Request, settings: Settings = Depends(get_settings),
) -> list[str]:
    """Tokens presented by the client: cookie first, then Bearer header."""
    tokens = []
    cookie = request.cookies.get(settings.session_cookie_name)
    if cookie:
        tokens.append(cookie)
    scheme, _, credentials = request.headers.get("authorization", "").partition(" ")
    bearer = credentials.strip()
    if scheme.lower() == "bearer" and bearer and bearer not in tokens:
        tokens.append(bearer)
    return tokens


async def get_current_user(
    request: Request,
    tokens: list[str] = Depends(get_session_tokens),
    sessions: SessionVerifier = Depends(get_sessions),
    store: TaskBoardStore = Depends(get_store),
) -> AuthenticatedUser:
    """Resolve the caller or raise 401."""
    if not tokens:
        raise UnauthorizedError()
    for token in tokens:
        identity = await sessions.verify(token)
        if identity is None:
            continue
        user = await store.get_user(identity.id)
        if user is not None:
            return AuthenticatedUser.from_user(user)
        logger.info(
            "Session refers to an unknown user",
            extra={"path": request.url.path, "user_id": identity.id},
        )
    logger.info(
        "Rejected invalid or expired session token",
        extra={"path": request.url.path},
    )
    raise UnauthorizedError()
