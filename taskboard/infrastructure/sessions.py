"""Session Registry — opaque bearer tokens mapped to users, with expiry.

Invariants:
    - Tokens are random URL-safe strings (secrets.token_urlsafe), carry no user data
    - verify() returns None for unknown, expired or non-string tokens, never raises
    - Expired entries are dropped when looked up and swept on every issue(), so
      abandoned tokens do not accumulate
    - revoke() is idempotent

Design Decisions:
    - In-process dict (like the store, owned by app.state): sessions end on restart,
      acceptable for a single-process deployment
    - Clock injectable: expiry tests need no sleeping
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from taskboard.core.records import AuthenticatedUser

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class _SessionEntry:
    user: AuthenticatedUser
    expires_at: datetime


class InMemorySessionRegistry:
    """Implements SessionVerifier."""

    def __init__(
        self,
        ttl_seconds: int = 7 * 24 * 3600,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._sessions: dict[str, _SessionEntry] = {}

    def active_count(self) -> int:
        """Tokens held, including expired ones not yet swept."""
        return len(self._sessions)

    def _purge_expired(self, now: datetime) -> None:
        expired = [t for t, e in self._sessions.items() if e.expires_at <= now]
        for token in expired:
            del self._sessions[token]

    async def issue(self, user: AuthenticatedUser) -> str:
        now = self._clock()
        self._purge_expired(now)
        token = secrets.token_urlsafe(32)
        self._sessions[token] = _SessionEntry(user=user, expires_at=now + self.ttl)
        logger.info("Session issued", extra={"user_id": user.id})
        return token

    async def verify(self, token: str) -> AuthenticatedUser | None:
        if not isinstance(token, str) or not token:
            return None
        entry = self._sessions.get(token)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            self._sessions.pop(token, None)
            return None
        return entry.user

    async def revoke(self, token: str) -> None:
        entry = self._sessions.pop(token, None)
        if entry is not None:
            logger.info("Session revoked", extra={"user_id": entry.user.id})
