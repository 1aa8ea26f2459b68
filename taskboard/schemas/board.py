"""Board Schemas — board creation and board responses.

Invariants:
    - BoardCreate.name: required, stripped, 1-200 chars
    - BoardResponse always carries taskCount (0 on creation)
"""

from datetime import datetime

from pydantic import Field, field_validator

from taskboard.core.records import Board, BoardSummary
from taskboard.schemas.common import CamelModel, required_text
from taskboard.schemas.task import TaskResponse


class BoardCreate(CamelModel):
    name: str | None = Field(None, max_length=200, validate_default=True)
    description: str | None = Field(None, max_length=2000)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str | None) -> str:
        return required_text(v, "Board name is required")


class BoardResponse(CamelModel):
    id: str
    name: str
    description: str
    user_id: str
    created_at: datetime
    task_count: int = 0

    @classmethod
    def from_board(cls, board: Board, task_count: int = 0) -> "BoardResponse":
        return cls(
            id=board.id,
            name=board.name,
            description=board.description,
            user_id=board.user_id,
            created_at=board.created_at,
            task_count=task_count,
        )

    @classmethod
    def from_summary(cls, summary: BoardSummary) -> "BoardResponse":
        return cls.from_board(summary.board, summary.task_count)


class BoardDetailResponse(BoardResponse):
    """Board plus the caller's tasks in it."""
    tasks: list[TaskResponse] = []
