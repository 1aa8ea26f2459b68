"""JSON File Store — on-disk layout, persistence across instances, failure mapping.

Invariants:
    - Three files (users/boards/tasks.json), each a JSON array of camelCase documents
    - Data directory created lazily on first write
    - Unset optional task fields are omitted from the document
    - Unreadable, non-array or non-object-entry files raise StorageError
    - A failed cascade leaves the board in place
"""

import json

import pytest

from taskboard.core.domain_types import Collection
from taskboard.core.errors import StorageError
from taskboard.core.records import TaskChanges
from taskboard.infrastructure.json_store import JsonFileStore


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


async def test_directory_created_on_first_write(data_dir):
    store = JsonFileStore(data_dir)
    assert not data_dir.exists()
    assert await store.get_boards("anyone") == []
    assert not data_dir.exists()

    await store.create_user("Alice", "a@x.com", "hashed")
    assert (data_dir / "users.json").exists()


async def test_data_survives_new_store_instance(data_dir):
    first = JsonFileStore(data_dir)
    user = await first.create_user("Alice", "a@x.com", "hashed")
    board = (await first.create_board(user.id, "Work")).board
    await first.create_task(board.id, user.id, "Write spec")

    second = JsonFileStore(data_dir)
    [summary] = await second.get_boards(user.id)
    assert summary.board.name == "Work"
    assert summary.task_count == 1
    assert (await second.get_user_by_email("a@x.com")).id == user.id


async def test_documents_use_camel_case_keys(data_dir):
    store = JsonFileStore(data_dir)
    user = await store.create_user("Alice", "a@x.com", "hashed")
    board = (await store.create_board(user.id, "Work")).board
    task = await store.create_task(board.id, user.id, "Write spec")

    [board_doc] = json.loads((data_dir / "boards.json").read_text())
    assert board_doc["userId"] == user.id
    assert "createdAt" in board_doc

    [task_doc] = json.loads((data_dir / "tasks.json").read_text())
    assert task_doc["boardId"] == board.id
    assert task_doc["completed"] is False
    assert "completedAt" not in task_doc
    assert "dueDate" not in task_doc

    await store.update_task(task.id, user.id, TaskChanges.of(completed=True))
    [task_doc] = json.loads((data_dir / "tasks.json").read_text())
    assert task_doc["completedAt"]


async def test_reads_documents_written_by_hand(data_dir):
    data_dir.mkdir()
    (data_dir / "boards.json").write_text(json.dumps([
        {
            "id": "b1", "name": "Legacy", "userId": "u1",
            "createdAt": "2024-01-01T00:00:00.000Z",
        },
    ]))
    store = JsonFileStore(data_dir)
    [summary] = await store.get_boards("u1")
    assert summary.board.description == ""
    assert summary.board.created_at.tzinfo is not None


async def test_malformed_json_raises_storage_error(data_dir):
    data_dir.mkdir()
    (data_dir / "tasks.json").write_text("{not json")
    store = JsonFileStore(data_dir)
    with pytest.raises(StorageError) as exc_info:
        await store.get_tasks_by_board("b1")
    assert exc_info.value.http_status == 500
    assert exc_info.value.operation == "read"


async def test_non_array_file_raises_storage_error(data_dir):
    data_dir.mkdir()
    (data_dir / "users.json").write_text('{"users": []}')
    store = JsonFileStore(data_dir)
    with pytest.raises(StorageError):
        await store.get_user_by_email("a@x.com")


async def test_document_missing_keys_raises_storage_error(data_dir):
    data_dir.mkdir()
    (data_dir / "boards.json").write_text('[{"id": "b1"}]')
    store = JsonFileStore(data_dir)
    with pytest.raises(StorageError) as exc_info:
        await store.get_boards("u1")
    assert exc_info.value.operation == "decode"


async def test_write_failure_raises_storage_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    store = JsonFileStore(blocker / "data")
    with pytest.raises(StorageError) as exc_info:
        await store.create_user("Alice", "a@x.com", "hashed")
    assert exc_info.value.operation == "write"


async def test_no_temp_files_left_behind(data_dir):
    store = JsonFileStore(data_dir)
    await store.create_user("Alice", "a@x.com", "hashed")
    assert sorted(p.name for p in data_dir.iterdir()) == ["users.json"]


def test_path_for_each_collection(data_dir):
    store = JsonFileStore(data_dir)
    assert store.path_for(Collection.TASKS) == data_dir / "tasks.json"


async def test_health_check_fails_when_directory_cannot_exist(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    store = JsonFileStore(blocker / "data")
    assert await store.health_check() is False


async def test_failed_cascade_keeps_board(data_dir):
    store = JsonFileStore(data_dir)
    user = await store.create_user("Alice", "a@x.com", "hashed")
    board = (await store.create_board(user.id, "Work")).board
    (data_dir / "tasks.json").write_text('{"not": "an array"}')

    with pytest.raises(StorageError):
        await store.delete_board(board.id, user.id)

    [board_doc] = json.loads((data_dir / "boards.json").read_text())
    assert board_doc["id"] == board.id
    assert await store.get_board(board.id, user.id) is not None


async def test_delete_board_retry_succeeds_after_tasks_file_repaired(data_dir):
    store = JsonFileStore(data_dir)
    user = await store.create_user("Alice", "a@x.com", "hashed")
    board = (await store.create_board(user.id, "Work")).board
    (data_dir / "tasks.json").write_text("{broken")
    with pytest.raises(StorageError):
        await store.delete_board(board.id, user.id)

    (data_dir / "tasks.json").write_text("[]")
    assert await store.delete_board(board.id, user.id) is True
    assert json.loads((data_dir / "boards.json").read_text()) == []


@pytest.mark.parametrize("content", ["[1]", '["task"]', "[null]"])
async def test_non_object_entries_raise_storage_error(data_dir, content):
    data_dir.mkdir()
    (data_dir / "tasks.json").write_text(content)
    store = JsonFileStore(data_dir)
    with pytest.raises(StorageError) as exc_info:
        await store.delete_task("t1", "u1")
    assert exc_info.value.operation == "decode"
    with pytest.raises(StorageError):
        await store.get_tasks_by_board("b1")
