"""HTTP tests for the /users resource."""
from __future__ import annotations

import pytest

from technotes.db.session import get_session
from technotes.db.store import DocumentStore
from technotes.models import Note, User


async def _create(client, username="alice", password="s3cret", roles=("Employee",)):
    response = await client.post("/users", json={"username": username, "password": password, "roles": list(roles)})
    assert response.status_code == 201, response.text
    listing = (await client.get("/users")).json()
    return next(user for user in listing if user["username"] == username)


@pytest.mark.asyncio
async def test_create_and_list(client):
    response = await client.post("/users", json={"username": "alice", "password": "s3cret", "roles": ["Employee"]})
    assert response.status_code == 201
    assert response.json() == {"message": "New User alice created"}

    response = await client.get("/users")
    assert response.status_code == 200
    [user] = response.json()
    assert set(user) == {"id", "username", "roles", "active"}
    assert user["username"] == "alice"
    assert user["active"] is True


@pytest.mark.asyncio
async def test_list_empty_is_bad_request(client):
    response = await client.get("/users")
    assert response.status_code == 400
    assert response.json() == {"message": "No Users Found"}


@pytest.mark.asyncio
async def test_duplicate_create_conflicts(client):
    await _create(client)
    response = await client.post("/users", json={"username": "alice", "password": "other", "roles": ["Admin"]})
    assert response.status_code == 409
    assert response.json() == {"message": "Duplicate username"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {},
        {"username": "alice", "password": "s3cret"},
        {"username": "alice", "password": "s3cret", "roles": []},
        {"username": "alice", "password": "s3cret", "roles": "Employee"},
        {"username": 42, "password": "s3cret", "roles": ["Employee"]},
    ],
)
async def test_create_validation(client, body):
    response = await client.post("/users", json=body)
    assert response.status_code == 400
    assert response.json() == {"message": "All Fields are Required"}


@pytest.mark.asyncio
async def test_patch_updates_user(client):
    user = await _create(client)
    response = await client.patch(
        "/users",
        json={"id": user["id"], "username": "alice2", "roles": ["Manager"], "active": False},
    )
    assert response.status_code == 200
    assert response.json() == {"message": "alice2 Updated"}

    [updated] = (await client.get("/users")).json()
    assert updated == {"id": user["id"], "username": "alice2", "roles": ["Manager"], "active": False}


@pytest.mark.asyncio
async def test_patch_without_password_keeps_hash(client):
    user = await _create(client)
    async with get_session() as session:
        before = (await DocumentStore(session).find_by_id(User, user["id"])).password

    response = await client.patch(
        "/users", json={"id": user["id"], "username": "alice", "roles": ["Employee"], "active": True}
    )
    assert response.status_code == 200

    async with get_session() as session:
        after = (await DocumentStore(session).find_by_id(User, user["id"])).password
    assert after == before


@pytest.mark.asyncio
async def test_patch_unknown_id(client):
    await _create(client)
    response = await client.patch(
        "/users", json={"id": "missing", "username": "alice", "roles": ["Employee"], "active": True}
    )
    assert response.status_code == 400
    assert response.json() == {"message": "User Not Found"}


@pytest.mark.asyncio
async def test_patch_to_taken_username(client):
    await _create(client)
    bob = await _create(client, username="bob")
    response = await client.patch(
        "/users", json={"id": bob["id"], "username": "alice", "roles": ["Employee"], "active": True}
    )
    assert response.status_code == 409
    assert response.json() == {"message": "Duplicate Username"}


@pytest.mark.asyncio
async def test_patch_requires_boolean_active(client):
    user = await _create(client)
    response = await client.patch(
        "/users", json={"id": user["id"], "username": "alice", "roles": ["Employee"], "active": "yes"}
    )
    assert response.status_code == 400
    assert response.json() == {"message": "All Fields are Required"}


@pytest.mark.asyncio
async def test_delete_user(client):
    user = await _create(client)
    response = await client.request("DELETE", "/users", json={"id": user["id"]})
    assert response.status_code == 200
    assert response.json() == {"message": f"Username alice With ID {user['id']} deleted"}

    assert (await client.get("/users")).status_code == 400


@pytest.mark.asyncio
async def test_delete_user_with_notes(client):
    user = await _create(client)
    async with get_session() as session:
        await DocumentStore(session).insert(Note(user=user["id"], title="Printer", text="Fix it"))

    response = await client.request("DELETE", "/users", json={"id": user["id"]})
    assert response.status_code == 400
    assert response.json() == {"message": "User has assigned notes"}


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"id": ""}, {"id": 7}])
async def test_delete_requires_id(client, body):
    response = await client.request("DELETE", "/users", json=body)
    assert response.status_code == 400
    assert response.json() == {"message": "User ID Required"}


@pytest.mark.asyncio
async def test_delete_unknown_id(client):
    response = await client.request("DELETE", "/users", json={"id": "missing"})
    assert response.status_code == 400
    assert response.json() == {"message": "User Not Found"}


@pytest.mark.asyncio
async def test_create_overlong_username(client):
    response = await client.post("/users", json={"username": "a" * 65, "password": "s3cret", "roles": ["Employee"]})
    assert response.status_code == 400
    assert response.json() == {"message": "Username must be at most 64 characters"}
