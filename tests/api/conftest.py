"""API test fixtures — FastAPI app over httpx with store and sessions overridden.

Invariants:
    - Every test gets a fresh MemoryStore and session registry
    - get_store / get_sessions overridden (ASGITransport does not run the lifespan)
    - Auth headers built by issuing tokens directly: route tests don't depend on /login

Design Decisions:
    - https base URL: session cookies are Secure
"""

import pytest
from httpx import ASGITransport, AsyncClient

from taskboard.api.dependencies import get_sessions, get_store
from taskboard.core.records import AuthenticatedUser
from taskboard.infrastructure.memory_store import MemoryStore
from taskboard.infrastructure.passwords import hash_password
from taskboard.infrastructure.sessions import InMemorySessionRegistry
from taskboard.main import app


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def sessions():
    return InMemorySessionRegistry(ttl_seconds=3600)


@pytest.fixture
async def client(store, sessions):
    """FastAPI test client with store and session dependencies overridden."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_sessions] = lambda: sessions

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="https://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


async def _headers_for(user, sessions) -> dict:
    token = await sessions.issue(AuthenticatedUser.from_user(user))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def alice(store):
    return await store.create_user("Alice", "a@x.com", hash_password("secret-a"))


@pytest.fixture
async def bob(store):
    return await store.create_user("Bob", "b@x.com", hash_password("secret-b"))


@pytest.fixture
async def alice_headers(alice, sessions):
    return await _headers_for(alice, sessions)


@pytest.fixture
async def bob_headers(bob, sessions):
    return await _headers_for(bob, sessions)


@pytest.fixture
async def work_board(client, alice_headers):
    """Board "Work" created through the API by Alice."""
    res = await client.post(
        "/api/boards", json={"name": "Work"}, headers=alice_headers,
    )
    assert res.status_code == 200
    return res.json()
