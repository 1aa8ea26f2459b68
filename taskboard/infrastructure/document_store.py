"""Document Store — shared CRUD logic for backends that hold whole collections.

Invariants:
    - Every mutation is read-modify-write of one full collection, under self._lock
    - Reads never take the lock (writers replace whole collections atomically)
    - delete_board cascades by board_id only, and only when a board was removed
    - Malformed documents (non-objects, missing keys, bad values) surface as StorageError
    - delete_board reads both collections before writing, and writes tasks before boards

Design Decisions:
    - Single asyncio.Lock per store instance: one writer at a time, last writer wins
      without torn collections (the unlocked read-modify-write loses updates)
    - Subclasses implement only _read/_write: memory and JSON backends share every rule
"""

import asyncio
import logging
from datetime import datetime, timezone

from taskboard.core.domain_types import (
    UserId, BoardId, TaskId, Collection, new_id,
)
from taskboard.core.errors import ResourceNotFoundError, StorageError
from taskboard.core.records import (
    User, Board, BoardSummary, Task, TaskChanges, ensure_utc,
)
from taskboard.core.task_rules import apply_task_changes, count_board_tasks

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentStore:
    """Base for collection-at-a-time stores. Implements TaskBoardStore."""

    backend_name = "document"

    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    async def _read(self, collection: Collection) -> list[dict]:
        raise NotImplementedError

    async def _write(self, collection: Collection, docs: list[dict]) -> None:
        raise NotImplementedError

    async def _documents(self, collection: Collection) -> list[dict]:
        """Raw documents, rejecting anything that is not a JSON object."""
        docs = await self._read(collection)
        if not all(isinstance(d, dict) for d in docs):
            logger.error(
                f"Non-object entry in {collection.value}",
                extra={"operation": "decode", "backend": self.backend_name},
            )
            raise StorageError(
                "decode", f"{collection.value} holds a non-object entry",
            )
        return docs

    async def _load(self, collection: Collection, record_type):
        docs = await self._documents(collection)
        try:
            return [record_type.from_document(d) for d in docs]
        except (KeyError, TypeError, ValueError) as e:
            logger.error(
                f"Malformed {collection.value} document: {e}",
                extra={"operation": "decode", "backend": self.backend_name},
            )
            raise StorageError("decode", str(e))

    # ─── Users ───────────────────────────────────────────────────

    async def create_user(self, name: str, email: str, password: str) -> User:
        user = User(
            id=UserId(new_id()), name=name, email=email,
            password=password, created_at=_utc_now(),
        )
        async with self._lock:
            docs = await self._documents(Collection.USERS)
            docs.append(user.to_document())
            await self._write(Collection.USERS, docs)
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def get_user_by_email(self, email: str) -> User | None:
        users = await self._load(Collection.USERS, User)
        return next((u for u in users if u.email == email), None)

    async def get_user(self, user_id: UserId) -> User | None:
        users = await self._load(Collection.USERS, User)
        return next((u for u in users if u.id == user_id), None)

    # ─── Boards ──────────────────────────────────────────────────

    async def create_board(
        self, user_id: UserId, name: str, description: str = "",
    ) -> BoardSummary:
        board = Board(
            id=BoardId(new_id()), name=name, description=description,
            user_id=user_id, created_at=_utc_now(),
        )
        async with self._lock:
            docs = await self._documents(Collection.BOARDS)
            docs.append(board.to_document())
            await self._write(Collection.BOARDS, docs)
        logger.info(
            "Board created", extra={"user_id": user_id, "board_id": board.id},
        )
        return BoardSummary(board=board, task_count=0)

    async def get_boards(self, user_id: UserId) -> list[BoardSummary]:
        boards = await self._load(Collection.BOARDS, Board)
        tasks = await self._load(Collection.TASKS, Task)
        return [
            BoardSummary(board=b, task_count=count_board_tasks(tasks, b.id))
            for b in boards
            if b.user_id == user_id
        ]

    async def get_board(self, board_id: BoardId, user_id: UserId) -> Board | None:
        boards = await self._load(Collection.BOARDS, Board)
        return next(
            (b for b in boards if b.id == board_id and b.user_id == user_id),
            None,
        )

    async def delete_board(self, board_id: BoardId, user_id: UserId) -> bool:
        async with self._lock:
            docs = await self._documents(Collection.BOARDS)
            kept = [
                d for d in docs
                if not (d.get("id") == board_id and d.get("userId") == user_id)
            ]
            if len(kept) == len(docs):
                return False
            task_docs = await self._documents(Collection.TASKS)
            remaining = [d for d in task_docs if d.get("boardId") != board_id]

            # Tasks first: a failed boards write leaves a retryable, empty board.
            await self._write(Collection.TASKS, remaining)
            await self._write(Collection.BOARDS, kept)
        logger.info(
            f"Board deleted with {len(task_docs) - len(remaining)} task(s)",
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
        async with self._lock:
            docs = await self._documents(Collection.TASKS)
            docs.append(task.to_document())
            await self._write(Collection.TASKS, docs)
        logger.info(
            "Task created",
            extra={"user_id": user_id, "board_id": board_id, "task_id": task.id},
        )
        return task

    async def get_tasks(self, board_id: BoardId, user_id: UserId) -> list[Task]:
        tasks = await self._load(Collection.TASKS, Task)
        return [t for t in tasks if t.board_id == board_id and t.user_id == user_id]

    async def get_tasks_by_board(self, board_id: BoardId) -> list[Task]:
        tasks = await self._load(Collection.TASKS, Task)
        return [t for t in tasks if t.board_id == board_id]

    async def update_task(
        self, task_id: TaskId, user_id: UserId, changes: TaskChanges,
    ) -> Task:
        async with self._lock:
            tasks = await self._load(Collection.TASKS, Task)
            index = next(
                (
                    i for i, t in enumerate(tasks)
                    if t.id == task_id and t.user_id == user_id
                ),
                None,
            )
            if index is None:
                raise ResourceNotFoundError("Task", task_id)
            updated = apply_task_changes(tasks[index], changes, _utc_now())
            tasks[index] = updated
            await self._write(
                Collection.TASKS, [t.to_document() for t in tasks],
            )
        return updated

    async def delete_task(self, task_id: TaskId, user_id: UserId) -> bool:
        async with self._lock:
            docs = await self._documents(Collection.TASKS)
            kept = [
                d for d in docs
                if not (d.get("id") == task_id and d.get("userId") == user_id)
            ]
            if len(kept) == len(docs):
                return False
            await self._write(Collection.TASKS, kept)
        return True

    # ─── Lifecycle ───────────────────────────────────────────────

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        return None
