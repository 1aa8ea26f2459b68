"""Entity records — camelCase document round trips and UTC normalization."""

from datetime import datetime, timedelta, timezone

import pytest

from taskboard.core.domain_types import BoardId, TaskId, UserId
from taskboard.core.records import (
    AuthenticatedUser, Task, TaskChanges, User, ensure_utc,
)

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_ensure_utc():
    assert ensure_utc(None) is None
    assert ensure_utc(datetime(2026, 1, 1)).tzinfo == timezone.utc
    plus_two = timezone(timedelta(hours=2))
    converted = ensure_utc(datetime(2026, 1, 1, 12, tzinfo=plus_two))
    assert converted == datetime(2026, 1, 1, 10, tzinfo=timezone.utc)


def test_task_document_omits_unset_optionals():
    task = Task(
        id=TaskId("t1"), title="Write spec", board_id=BoardId("b1"),
        user_id=UserId("u1"), created_at=T0, updated_at=T0,
    )
    doc = task.to_document()
    assert doc["boardId"] == "b1"
    assert doc["userId"] == "u1"
    assert "dueDate" not in doc
    assert "completedAt" not in doc
    assert Task.from_document(doc) == task


def test_task_from_document_with_all_fields():
    doc = {
        "id": "t1", "title": "Ship", "description": None, "completed": True,
        "boardId": "b1", "userId": "u1",
        "createdAt": "2026-03-01T12:00:00+00:00",
        "updatedAt": "2026-03-01T13:00:00+00:00",
        "dueDate": "2026-03-02T00:00:00",
        "completedAt": "2026-03-01T13:00:00Z",
    }
    task = Task.from_document(doc)
    assert task.description == ""
    assert task.completed is True
    assert task.due_date == datetime(2026, 3, 2, tzinfo=timezone.utc)
    assert task.completed_at == datetime(2026, 3, 1, 13, tzinfo=timezone.utc)


def test_authenticated_user_drops_password():
    user = User(
        id=UserId("u1"), name="Alice", email="a@x.com",
        password="hash", created_at=T0,
    )
    identity = AuthenticatedUser.from_user(user)
    assert identity == AuthenticatedUser(id="u1", name="Alice", email="a@x.com")
    assert not hasattr(identity, "password")


def test_task_changes_tracks_provided_fields():
    changes = TaskChanges.of(due_date=None, completed=True)
    assert changes.as_dict() == {"due_date": None, "completed": True}
    assert TaskChanges().as_dict() == {}


def test_task_changes_rejects_unknown_fields():
    with pytest.raises(TypeError):
        TaskChanges.of(board_id="b2")
