"""Entity Records — plain dataclasses for users, boards and tasks.

Invariants:
    - Records carry no behavior beyond (de)serialization to camelCase documents
    - All timestamps are timezone-aware UTC (naive inputs are taken as UTC)
    - Task.completed_at is set iff Task.completed was true at the last update
    - BoardSummary.task_count is derived, never persisted

Design Decisions:
    - dataclass over ORM/pydantic in core: stores of every backend map to the same shape
    - camelCase documents: the JSON file layout and the wire format share one vocabulary
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone

from taskboard.core.domain_types import UserId, BoardId, TaskId


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_ts(raw: str | None) -> datetime | None:
    if not raw:
        return None
    return ensure_utc(datetime.fromisoformat(raw))


def _format_ts(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass
class User:
    """Registered user. password holds a salted hash, never plaintext."""
    id: UserId
    name: str
    email: str
    password: str
    created_at: datetime

    def to_document(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "createdAt": _format_ts(self.created_at),
        }

    @classmethod
    def from_document(cls, doc: dict) -> "User":
        return cls(
            id=UserId(doc["id"]),
            name=doc["name"],
            email=doc["email"],
            password=doc["password"],
            created_at=_parse_ts(doc["createdAt"]),
        )


@dataclass
class Board:
    """Named collection of tasks owned by one user."""
    id: BoardId
    name: str
    user_id: UserId
    created_at: datetime
    description: str = ""

    def to_document(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "userId": self.user_id,
            "createdAt": _format_ts(self.created_at),
        }

    @classmethod
    def from_document(cls, doc: dict) -> "Board":
        return cls(
            id=BoardId(doc["id"]),
            name=doc["name"],
            description=doc.get("description") or "",
            user_id=UserId(doc["userId"]),
            created_at=_parse_ts(doc["createdAt"]),
        )


@dataclass
class BoardSummary:
    """Board annotated with the number of tasks referencing it."""
    board: Board
    task_count: int = 0


@dataclass
class Task:
    """Titled unit of work inside a board."""
    id: TaskId
    title: str
    board_id: BoardId
    user_id: UserId
    created_at: datetime
    updated_at: datetime
    description: str = ""
    completed: bool = False
    due_date: datetime | None = None
    completed_at: datetime | None = None

    def to_document(self) -> dict:
        doc = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "boardId": self.board_id,
            "userId": self.user_id,
            "createdAt": _format_ts(self.created_at),
            "updatedAt": _format_ts(self.updated_at),
        }
        # Optional keys are omitted when unset, matching the stored layout
        if self.due_date is not None:
            doc["dueDate"] = _format_ts(self.due_date)
        if self.completed_at is not None:
            doc["completedAt"] = _format_ts(self.completed_at)
        return doc

    @classmethod
    def from_document(cls, doc: dict) -> "Task":
        return cls(
            id=TaskId(doc["id"]),
            title=doc["title"],
            description=doc.get("description") or "",
            completed=bool(doc.get("completed", False)),
            board_id=BoardId(doc["boardId"]),
            user_id=UserId(doc["userId"]),
            created_at=_parse_ts(doc["createdAt"]),
            updated_at=_parse_ts(doc["updatedAt"]),
            due_date=_parse_ts(doc.get("dueDate")),
            completed_at=_parse_ts(doc.get("completedAt")),
        )


@dataclass
class TaskChanges:
    """Partial task update. Only names listed in `provided` are applied.

    `provided` distinguishes "field absent" from "field explicitly null"
    (e.g. clearing a due date).
    """
    title: str | None = None
    description: str | None = None
    completed: bool | None = None
    due_date: datetime | None = None
    provided: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, **changes: object) -> "TaskChanges":
        """Build from keyword arguments; every keyword counts as provided."""
        unknown = set(changes) - {"title", "description", "completed", "due_date"}
        if unknown:
            raise TypeError(f"Unknown task fields: {', '.join(sorted(unknown))}")
        return cls(**changes, provided=frozenset(changes))  # type: ignore[arg-type]

    def as_dict(self) -> dict:
        values = asdict(self)
        return {name: values[name] for name in self.provided}


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity resolved from a session token. Never carries the password."""
    id: UserId
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "AuthenticatedUser":
        return cls(id=user.id, name=user.name, email=user.email)
