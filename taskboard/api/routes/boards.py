"""Board Routes — list, create, read and delete the caller's boards.

Invariants:
    - Every route scoped to the authenticated user's id
    - Boards owned by someone else are indistinguishable from missing ones (404)
    - Delete cascades to the board's tasks (store contract) and 404s when nothing was removed
"""

import logging

from fastapi import APIRouter, Depends

from taskboard.api.dependencies import get_current_user, get_store
from taskboard.core.domain_types import BoardId
from taskboard.core.errors import ResourceNotFoundError, ErrorContext
from taskboard.core.records import AuthenticatedUser
from taskboard.core.repository_protocols import TaskBoardStore
from taskboard.schemas.board import BoardCreate, BoardResponse, BoardDetailResponse
from taskboard.schemas.common import SuccessResponse
from taskboard.schemas.task import TaskResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/boards", tags=["boards"])


@router.get("", response_model=list[BoardResponse])
async def list_boards(
    user: AuthenticatedUser = Depends(get_current_user),
    store: TaskBoardStore = Depends(get_store),
):
    """Boards owned by the caller, each with its task count."""
    summaries = await store.get_boards(user.id)
    return [BoardResponse.from_summary(s) for s in summaries]


@router.post("", response_model=BoardResponse)
async def create_board(
    body: BoardCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    store: TaskBoardStore = Depends(get_store),
):
    """Create a board owned by the caller."""
    summary = await store.create_board(
        user.id, body.name, body.description or "",
    )
    return BoardResponse.from_summary(summary)


@router.get("/{board_id}", response_model=BoardDetailResponse)
async def get_board(
    board_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: TaskBoardStore = Depends(get_store),
):
    """Board details with the caller's tasks."""
    board = await store.get_board(BoardId(board_id), user.id)
    if board is None:
        raise ResourceNotFoundError(
            "Board", board_id, ErrorContext(user_id=user.id),
        )
    tasks = await store.get_tasks(board.id, user.id)
    all_tasks = await store.get_tasks_by_board(board.id)
    return BoardDetailResponse(
        **BoardResponse.from_board(board, len(all_tasks)).model_dump(),
        tasks=[TaskResponse.from_task(t) for t in tasks],
    )


@router.delete("/{board_id}", response_model=SuccessResponse)
async def delete_board(
    board_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: TaskBoardStore = Depends(get_store),
):
    """Delete a board and every task in it."""
    deleted = await store.delete_board(BoardId(board_id), user.id)
    if not deleted:
        raise ResourceNotFoundError(
            "Board", board_id, ErrorContext(user_id=user.id),
        )
    return SuccessResponse()
