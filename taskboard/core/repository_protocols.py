"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Every backend (memory, json, sql) satisfies TaskBoardStore exactly
    - "Not found" is a None/False result or ResourceNotFoundError, never StorageError
    - Any IO failure surfaces as StorageError

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; route handlers await them
    - One store protocol (not one per entity): cascade delete spans boards and tasks
"""

from datetime import datetime
from typing import Protocol

from taskboard.core.domain_types import UserId, BoardId, TaskId
from taskboard.core.records import (
    AuthenticatedUser, User, Board, BoardSummary, Task, TaskChanges,
)


class TaskBoardStore(Protocol):
    """Contract for user, board and task persistence — implemented by shell."""

    # users
    async def create_user(self, name: str, email: str, password: str) -> User: ...
    async def get_user_by_email(self, email: str) -> User | None: ...
    async def get_user(self, user_id: UserId) -> User | None: ...

    # boards
    async def create_board(
        self, user_id: UserId, name: str, description: str = "",
    ) -> BoardSummary: ...
    async def get_boards(self, user_id: UserId) -> list[BoardSummary]: ...
    async def get_board(self, board_id: BoardId, user_id: UserId) -> Board | None: ...
    async def delete_board(self, board_id: BoardId, user_id: UserId) -> bool: ...

    # tasks
    async def create_task(
        self,
        board_id: BoardId,
        user_id: UserId,
        title: str,
        description: str = "",
        due_date: datetime | None = None,
    ) -> Task: ...
    async def get_tasks(self, board_id: BoardId, user_id: UserId) -> list[Task]: ...
    async def get_tasks_by_board(self, board_id: BoardId) -> list[Task]: ...
    async def update_task(
        self, task_id: TaskId, user_id: UserId, changes: TaskChanges,
    ) -> Task: ...
    async def delete_task(self, task_id: TaskId, user_id: UserId) -> bool: ...

    # lifecycle
    async def health_check(self) -> bool: ...
    async def close(self) -> None: ...


class SessionVerifier(Protocol):
    """Contract for session tokens — implemented by shell.

    verify() must return None (never raise) for unknown, expired or
    malformed tokens.
    """
    async def issue(self, user: AuthenticatedUser) -> str: ...
    async def verify(self, token: str) -> AuthenticatedUser | None: ...
    async def revoke(self, token: str) -> None: ...
