"""Store fixtures — every contract test runs against memory, JSON and SQL backends.

Invariants:
    - Each test gets a fresh, empty store
    - JSON store writes under pytest's tmp_path
    - SQL store uses an in-memory aiosqlite database with tables created up front
"""

import pytest

from taskboard.infrastructure.json_store import JsonFileStore
from taskboard.infrastructure.memory_store import MemoryStore
from taskboard.infrastructure.sql_store import SqlStore


@pytest.fixture(params=["memory", "json", "sql"])
async def store(request, tmp_path):
    if request.param == "memory":
        yield MemoryStore()
    elif request.param == "json":
        yield JsonFileStore(tmp_path / "data")
    else:
        sql_store = SqlStore("sqlite+aiosqlite:///:memory:")
        await sql_store.create_all()
        yield sql_store
        await sql_store.close()


@pytest.fixture
async def owner(store):
    return await store.create_user("Alice", "a@x.com", "hashed-secret")


@pytest.fixture
async def other_user(store):
    return await store.create_user("Bob", "b@x.com", "hashed-secret")


@pytest.fixture
async def board(store, owner):
    summary = await store.create_board(owner.id, "Work", "Day job")
    return summary.board
