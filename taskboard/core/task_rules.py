"""Task Rules — pure functions for task mutation, counts and on-time checks.

Invariants:
    - apply_task_changes never mutates its input (returns a new Task)
    - updated_at always refreshed to `now`, even for an empty change set
    - completed=True keeps an existing completed_at (idempotent)
    - completed=False clears completed_at
    - count_board_tasks filters by board_id only (not by owner)

Design Decisions:
    - `now` passed in by callers: every backend shares one deterministic rule set
"""

from dataclasses import replace
from datetime import datetime
from typing import Iterable

from taskboard.core.domain_types import BoardId
from taskboard.core.records import Task, TaskChanges, ensure_utc


def apply_task_changes(task: Task, changes: TaskChanges, now: datetime) -> Task:
    """Merge provided fields over `task` and adjust completion timestamps."""
    fields = changes.as_dict()
    if "due_date" in fields:
        fields["due_date"] = ensure_utc(fields["due_date"])
    updated = replace(task, **fields, updated_at=now)

    if "completed" in fields:
        if fields["completed"]:
            updated.completed_at = task.completed_at or now
        else:
            updated.completed_at = None
    return updated


def count_board_tasks(tasks: Iterable[Task], board_id: BoardId) -> int:
    """Number of tasks referencing board_id, regardless of task owner."""
    return sum(1 for t in tasks if t.board_id == board_id)


def completed_on_time(task: Task) -> bool:
    """True iff the task has both timestamps and finished by its due date."""
    if task.completed_at is None or task.due_date is None:
        return False
    return ensure_utc(task.completed_at) <= ensure_utc(task.due_date)
