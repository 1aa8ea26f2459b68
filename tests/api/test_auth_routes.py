"""Auth routes — register, login, logout, me.

Invariants:
    - Register hashes the password and starts a session (Set-Cookie auth-token)
    - Duplicate email on register → 409, store unchanged
    - Wrong password and unknown email both → 401 INVALID_CREDENTIALS
    - Logout expires the cookie and revokes every presented token, even without a valid session
    - A valid Bearer header still authenticates next to a stale cookie
    - Sessions whose user is no longer in the store are rejected
"""

from taskboard.core.domain_types import UserId
from taskboard.core.records import AuthenticatedUser


async def test_register_creates_user_and_session(client, store):
    res = await client.post(
        "/api/auth/register",
        json={"name": "Alice", "email": "a@x.com", "password": "secret-a"},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["email"] == "a@x.com"
    assert "password" not in body

    cookie = res.headers["set-cookie"]
    assert cookie.startswith("auth-token=")
    assert "HttpOnly" in cookie
    assert "Secure" in cookie
    assert "SameSite=none" in cookie or "samesite=none" in cookie.lower()

    stored = await store.get_user_by_email("a@x.com")
    assert stored.password != "secret-a"


async def test_register_rejects_duplicate_email(client, alice, store):
    res = await client.post(
        "/api/auth/register",
        json={"name": "Alice 2", "email": "a@x.com", "password": "secret-2"},
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "EMAIL_TAKEN"
    assert (await store.get_user_by_email("a@x.com")).id == alice.id


async def test_register_validation_error(client):
    res = await client.post(
        "/api/auth/register",
        json={"email": "a@x.com", "password": "secret-a"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Name is required"


async def test_login_then_me_with_cookie(client, alice):
    res = await client.post(
        "/api/auth/login", json={"email": "a@x.com", "password": "secret-a"},
    )
    assert res.status_code == 200
    assert res.json()["id"] == alice.id

    token = res.headers["set-cookie"].split(";", 1)[0].split("=", 1)[1]
    client.cookies.set("auth-token", token)
    me = await client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json() == {"id": alice.id, "name": "Alice", "email": "a@x.com"}


async def test_login_rejects_wrong_password_and_unknown_email(client, alice):
    wrong = await client.post(
        "/api/auth/login", json={"email": "a@x.com", "password": "nope"},
    )
    unknown = await client.post(
        "/api/auth/login", json={"email": "z@x.com", "password": "secret-a"},
    )
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json()["error"]["code"] == "INVALID_CREDENTIALS"
    assert wrong.json()["error"]["message"] == unknown.json()["error"]["message"]


async def test_logout_revokes_token_and_expires_cookie(client, alice_headers):
    res = await client.post("/api/auth/logout", headers=alice_headers)
    assert res.status_code == 200
    assert res.json() == {"success": True}
    cookie = res.headers["set-cookie"].lower()
    assert "max-age=0" in cookie

    me = await client.get("/api/auth/me", headers=alice_headers)
    assert me.status_code == 401


async def test_logout_without_session_succeeds(client):
    res = await client.post("/api/auth/logout")
    assert res.status_code == 200
    assert res.json() == {"success": True}


async def test_me_requires_session(client):
    res = await client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_session_for_unknown_user_is_rejected(client, sessions):
    token = await sessions.issue(
        AuthenticatedUser(id=UserId("gone"), name="Gone", email="g@x.com"),
    )
    res = await client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401


async def test_stale_cookie_falls_back_to_bearer_header(client, alice, alice_headers):
    client.cookies.set("auth-token", "revoked-or-expired")
    res = await client.get("/api/auth/me", headers=alice_headers)
    assert res.status_code == 200
    assert res.json()["id"] == alice.id


async def test_logout_revokes_cookie_and_header_tokens(client, alice, sessions):
    identity = AuthenticatedUser.from_user(alice)
    cookie_token = await sessions.issue(identity)
    header_token = await sessions.issue(identity)
    client.cookies.set("auth-token", cookie_token)

    await client.post(
        "/api/auth/logout", headers={"Authorization": f"Bearer {header_token}"},
    )

    assert await sessions.verify(cookie_token) is None
    assert await sessions.verify(header_token) is None
