"""Task ORM — tasks keyed by board and owner.

Invariants:
    - board_id indexed: counts and cascade delete filter on it alone
    - completed_at NULL iff completed is false (maintained by core/task_rules)
"""

from datetime import datetime

from sqlalchemy import String, Text, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.core.domain_types import BoardId, TaskId, UserId
from taskboard.core.records import Task, ensure_utc
from taskboard.db.base import Base


class TaskRow(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    board_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    def to_record(self) -> Task:
        return Task(
            id=TaskId(self.id),
            title=self.title,
            description=self.description,
            completed=self.completed,
            board_id=BoardId(self.board_id),
            user_id=UserId(self.user_id),
            created_at=ensure_utc(self.created_at),
            updated_at=ensure_utc(self.updated_at),
            due_date=ensure_utc(self.due_date),
            completed_at=ensure_utc(self.completed_at),
        )

    @classmethod
    def from_record(cls, task: Task) -> "TaskRow":
        return cls(
            id=task.id, title=task.title, description=task.description,
            completed=task.completed, board_id=task.board_id, user_id=task.user_id,
            created_at=task.created_at, updated_at=task.updated_at,
            due_date=task.due_date, completed_at=task.completed_at,
        )
