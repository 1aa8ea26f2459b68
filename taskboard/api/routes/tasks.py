"""Task Routes — list, create, edit, toggle and delete tasks of a board.

Invariants:
    - Creating or listing requires the board to be owned by the caller (404 otherwise)
    - Edit/toggle/delete key on task id + caller id; the board segment of the path is
      not re-checked (tasks carry their owner)
    - PATCH only touches `completed`; completedAt follows core/task_rules
"""

import logging

from fastapi import APIRouter, Depends

from taskboard.api.dependencies import get_current_user, get_store
from taskboard.core.domain_types import BoardId, TaskId
from taskboard.core.errors import ResourceNotFoundError, ErrorContext
from taskboard.core.records import AuthenticatedUser, Board
from taskboard.core.repository_protocols import TaskBoardStore
from taskboard.schemas.common import SuccessResponse
from taskboard.schemas.task import TaskCreate, TaskUpdate, TaskToggle, TaskResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/boards/{board_id}/tasks", tags=["tasks"])


async def _owned_board_or_404(
    store: TaskBoardStore, board_id: str, user: AuthenticatedUser,
) -> Board:
    board = await store.get_board(BoardId(board_id), user.id)
    if board is None:
        raise ResourceNotFoundError(
            "Board", board_id, ErrorContext(user_id=user.id),
        )
    return board


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    board_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: TaskBoardStore = Depends(get_store),
):
    """The caller's tasks in a board."""
    board = await _owned_board_or_404(store, board_id, user)
    tasks = await store.get_tasks(board.id, user.id)
    return [TaskResponse.from_task(t) for t in tasks]


@router.post("", response_model=TaskResponse)
async def create_task(
    board_id: str,
    body: TaskCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    store: TaskBoardStore = Depends(get_store),
):
    """Add a task to one of the caller's boards."""
    board = await _owned_board_or_404(store, board_id, user)
    task = await store.create_task(
        board.id, user.id, body.title,
        description=body.description or "", due_date=body.due_date,
    )
    return TaskResponse.from_task(task)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    board_id: str,
    task_id: str,
    body: TaskUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    store: TaskBoardStore = Depends(get_store),
):
    """Edit title, description and due date."""
    task = await store.update_task(TaskId(task_id), user.id, body.to_changes())
    return TaskResponse.from_task(task)


@router.patch("/{task_id}", response_model=TaskResponse)
async def toggle_task(
    board_id: str,
    task_id: str,
    body: TaskToggle,
    user: AuthenticatedUser = Depends(get_current_user),
    store: TaskBoardStore = Depends(get_store),
):
    """Mark a task complete or incomplete."""
    task = await store.update_task(TaskId(task_id), user.id, body.to_changes())
    logger.info(
        f"Task marked {'complete' if task.completed else 'incomplete'}",
        extra={"user_id": user.id, "task_id": task.id},
    )
    return TaskResponse.from_task(task)


@router.delete("/{task_id}", response_model=SuccessResponse)
async def delete_task(
    board_id: str,
    task_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: TaskBoardStore = Depends(get_store),
):
    """Delete one of the caller's tasks."""
    deleted = await store.delete_task(TaskId(task_id), user.id)
    if not deleted:
        raise ResourceNotFoundError(
            "Task", task_id, ErrorContext(user_id=user.id),
        )
    return SuccessResponse()
