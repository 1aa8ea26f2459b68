"""SQL Store — TaskBoardStore over SQLAlchemy async (PostgreSQL via asyncpg, SQLite via aiosqlite).

Invariants:
    - Each operation runs in one session/transaction (cascade delete is atomic)
    - Board/task queries filter by owner in SQL, never in Python
    - Task counts by board_id only (not filtered by owner)
    - Task completion rules come from core/task_rules (shared with document stores)

Design Decisions:
    - Transactions replace the document stores' asyncio.Lock as the serialization point
    - create_all() for development and tests; alembic owns production schema
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select, delete, func

from taskboard.core.domain_types import UserId, BoardId, TaskId, new_id
from taskboard.core.errors import ResourceNotFoundError
from taskboard.core.records import (
    User, Board, BoardSummary, Task, TaskChanges, ensure_utc,
)
from taskboard.core.task_rules import apply_task_changes
from taskboard.db.base import Base
from taskboard.infrastructure.database import DatabaseSessionManager
from taskboard.models import UserRow, BoardRow, TaskRow

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SqlStore:
    """Relational backend. Implements TaskBoardStore."""

    backend_name = "sql"

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self._db = DatabaseSessionManager(
            database_url, pool_size=pool_size, max_overflow=max_overflow,
        )

    async def create_all(self) -> None:
        """Create missing tables (development/test convenience)."""
        async with self._db.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    # ─── Users ───────────────────────────────────────────────────

    async def create_user(self, name: str, email: str, password: str) -> User:
        row = UserRow(
            id=new_id(), name=name, email=email,
            password=password, created_at=_utc_now(),
        )
        async with self._db.session() as db:
            db.add(row)
            await db.commit()
        logger.info("User created", extra={"user_id": row.id})
        return row.to_record()

    async def get_user_by_email(self, email: str) -> User | None:
        async with self._db.session() as db:
            result = await db.execute(
                select(UserRow)
                .where(UserRow.email == email)
                .order_by(UserRow.created_at)
                .limit(1),
            )
            row = result.scalar_one_or_none()
        return row.to_record() if row else None

    async def get_user(self, user_id: UserId) -> User | None:
        async with self._db.session() as db:
            row = await db.get(UserRow, user_id)
        return row.to_record() if row else None

    # ─── Boards ──────────────────────────────────────────────────

    async def create_board(
        self, user_id: UserId, name: str, description: str = "",
    ) -> BoardSummary:
        row = BoardRow(
            id=new_id(), name=name, description=description,
            user_id=user_id, created_at=_utc_now(),
        )
        async with self._db.session() as db:
            db.add(row)
            await db.commit()
        logger.info(
            "Board created", extra={"user_id": user_id, "board_id": row.id},
        )
        return BoardSummary(board=row.to_record(), task_count=0)

    async def get_boards(self, user_id: UserId) -> list[BoardSummary]:
        task_count = (
            select(func.count(TaskRow.id))
            .where(TaskRow.board_id == BoardRow.id)
            .correlate(BoardRow)
            .scalar_subquery()
        )
        async with self._db.session() as db:
            result = await db.execute(
                select(BoardRow, task_count)
                .where(BoardRow.user_id == user_id)
                .order_by(BoardRow.created_at),
            )
            rows = result.all()
        return [
            BoardSummary(board=board.to_record(), task_count=count or 0)
            for board, count in rows
        ]

    async def get_board(self, board_id: BoardId, user_id: UserId) -> Board | None:
        async with self._db.session() as db:
            result = await db.execute(
                select(BoardRow).where(
                    BoardRow.id == board_id, BoardRow.user_id == user_id,
                ),
            )
            row = result.scalar_one_or_none()
        return row.to_record() if row else None

    async def delete_board(self, board_id: BoardId, user_id: UserId) -> bool:
        async with self._db.session() as db:
            result = await db.execute(
                delete(BoardRow).where(
                    BoardRow.id == board_id, BoardRow.user_id == user_id,
                ),
            )
            if result.rowcount == 0:
                await db.rollback()
                return False
            cascade = await db.execute(
                delete(TaskRow).where(TaskRow.board_id == board_id),
            )
            await db.commit()
        logger.info(
            f"Board deleted with {cascade.rowcount} task(s)",
            extra={"user_id": user_id, "board_id": board_id},
        )
        return True

    # ─── Tasks ───────────────────────────────────────────────────

    async def create_task(
        self,
        board_id: BoardId,
        user_id: UserId,
        title: str,
        description: str = "",
        due_date: datetime | None = None,
    ) -> Task:
        now = _utc_now()
        task = Task(
            id=TaskId(new_id()), title=title, description=description,
            board_id=board_id, user_id=user_id,
            created_at=now, updated_at=now, due_date=ensure_utc(due_date),
        )
        async with self._db.session() as db:
            db.add(TaskRow.from_record(task))
            await db.commit()
        logger.info(
            "Task created",
            extra={"user_id": user_id, "board_id": board_id, "task_id": task.id},
        )
        return task

    async def get_tasks(self, board_id: BoardId, user_id: UserId) -> list[Task]:
        async with self._db.session() as db:
            result = await db.execute(
                select(TaskRow)
                .where(TaskRow.board_id == board_id, TaskRow.user_id == user_id)
                .order_by(TaskRow.created_at),
            )
            rows = result.scalars().all()
        return [r.to_record() for r in rows]

    async def get_tasks_by_board(self, board_id: BoardId) -> list[Task]:
        async with self._db.session() as db:
            result = await db.execute(
                select(TaskRow)
                .where(TaskRow.board_id == board_id)
                .order_by(TaskRow.created_at),
            )
            rows = result.scalars().all()
        return [r.to_record() for r in rows]

    async def update_task(
        self, task_id: TaskId, user_id: UserId, changes: TaskChanges,
    ) -> Task:
        async with self._db.session() as db:
            result = await db.execute(
                select(TaskRow).where(
                    TaskRow.id == task_id, TaskRow.user_id == user_id,
                ),
            )
            row = result.scalar_one_or_none()
            if row is None:
                raise ResourceNotFoundError("Task", task_id)
            updated = apply_task_changes(row.to_record(), changes, _utc_now())
            row.title = updated.title
            row.description = updated.description
            row.completed = updated.completed
            row.due_date = updated.due_date
            row.completed_at = updated.completed_at
            row.updated_at = updated.updated_at
            await db.commit()
        return updated

    async def delete_task(self, task_id: TaskId, user_id: UserId) -> bool:
        async with self._db.session() as db:
            result = await db.execute(
                delete(TaskRow).where(
                    TaskRow.id == task_id, TaskRow.user_id == user_id,
                ),
            )
            await db.commit()
        return result.rowcount > 0

    # ─── Lifecycle ───────────────────────────────────────────────

    async def health_check(self) -> bool:
        return await self._db.health_check()

    async def close(self) -> None:
        await self._db.dispose()
