"""Domain Types — identity types and enums shared by every layer.

Invariants:
    - UserId, BoardId, TaskId wrap opaque strings (UUID4 text), compared by equality only
    - StorageBackend enumerates every supported persistence medium

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str ids over UUID: ids travel through JSON files and URLs unchanged
    - str Enums: serialize to JSON and env vars without custom encoders
"""

import uuid
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
BoardId = NewType("BoardId", str)
TaskId = NewType("TaskId", str)


def new_id() -> str:
    """Generate a fresh opaque identifier."""
    return str(uuid.uuid4())


# ─── Enums ───────────────────────────────────────────────────────

class StorageBackend(str, Enum):
    """Persistence media — all expose the TaskBoardStore protocol."""
    MEMORY = "memory"
    JSON = "json"
    SQL = "sql"


class Collection(str, Enum):
    """The three persisted collections. Values double as JSON file stems."""
    USERS = "users"
    BOARDS = "boards"
    TASKS = "tasks"
