"""Task Schemas — task creation, full update, completion toggle and responses.

Invariants:
    - TaskCreate/TaskUpdate.title: required, stripped, 1-500 chars
    - TaskToggle.completed: strict boolean (no "true"/1 coercion)
    - due_date leaves validation as UTC; values that overflow in UTC are rejected (400)
    - TaskUpdate only forwards fields present in the request (unset != null)
    - TaskResponse.completedOnTime derived by core/task_rules.completed_on_time
"""

from datetime import datetime

from pydantic import Field, StrictBool, field_validator
from pydantic_core import PydanticCustomError

from taskboard.core.records import Task, TaskChanges, ensure_utc
from taskboard.core.task_rules import completed_on_time
from taskboard.schemas.common import CamelModel, required_text, coerce_due_date


class TaskCreate(CamelModel):
    title: str | None = Field(None, max_length=500, validate_default=True)
    description: str | None = Field(None, max_length=5000)
    due_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str | None) -> str:
        return required_text(v, "Task title is required")

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: object) -> object:
        return coerce_due_date(v)

    @field_validator("due_date")
    @classmethod
    def due_date_in_utc(cls, v: datetime | None) -> datetime | None:
        try:
            return ensure_utc(v)
        except OverflowError:
            raise PydanticCustomError(
                "due_date_range", "Due date is out of range",
            ) from None


class TaskUpdate(TaskCreate):
    """Full edit (PUT). description/dueDate left untouched when absent."""

    def to_changes(self) -> TaskChanges:
        changes: dict = {"title": self.title}
        if "description" in self.model_fields_set:
            changes["description"] = self.description or ""
        if "due_date" in self.model_fields_set:
            changes["due_date"] = self.due_date
        return TaskChanges.of(**changes)


class TaskToggle(CamelModel):
    """Completion toggle (PATCH)."""
    completed: StrictBool

    def to_changes(self) -> TaskChanges:
        return TaskChanges.of(completed=self.completed)


class TaskResponse(CamelModel):
    id: str
    title: str
    description: str
    completed: bool
    board_id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    due_date: datetime | None = None
    completed_at: datetime | None = None
    completed_on_time: bool = False

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            completed=task.completed,
            board_id=task.board_id,
            user_id=task.user_id,
            created_at=task.created_at,
            updated_at=task.updated_at,
            due_date=task.due_date,
            completed_at=task.completed_at,
            completed_on_time=completed_on_time(task),
        )
