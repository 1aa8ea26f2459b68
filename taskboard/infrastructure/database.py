"""Database Session Manager — async engine and sessions for the SQL store.

Invariants:
    - A session rolls back on any exception before it propagates
    - SQLAlchemy failures leave as StorageError(operation); the driver message is logged only
    - Domain errors raised inside a session (e.g. ResourceNotFoundError) pass through unchanged

Design Decisions:
    - Owned by SqlStore, not a module singleton: the store is injected via app.state
    - expire_on_commit=False: records are built from rows after commit, outside the session
    - SQLite URLs skip pool sizing (aiosqlite does not use a QueuePool)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from taskboard.core.errors import StorageError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors.
_FAILURE_OPERATIONS: tuple[tuple[type[SQLAlchemyError], str], ...] = (
    (IntegrityError, "commit"),
    (OperationalError, "execute"),
    (DBAPIError, "query"),
    (SQLAlchemyError, "unknown"),
)


def _operation_for(exc: SQLAlchemyError) -> str:
    for exc_type, operation in _FAILURE_OPERATIONS:
        if isinstance(exc, exc_type):
            return operation
    return "unknown"


class DatabaseSessionManager:
    """Async engine plus session factory for one database URL."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session that rolls back on error and reports storage failures."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            operation = _operation_for(e)
            logger.error(
                f"{type(e).__name__} in SQL store: {e}",
                extra={"operation": operation, "backend": "sql"},
            )
            raise StorageError(operation, str(e)) from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """SELECT 1 round-trip for the readiness probe."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (StorageError, OSError):
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
