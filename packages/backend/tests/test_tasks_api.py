"""Task API tests — the HTTP contract.

Learn: Each test talks to the real app through httpx's ASGI transport.
The identity provider is FakeIdentityResolver ("tok1" → alice,
"tok2" → bob) and the store is a RecordingStore, both from conftest.
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from fakes import ALICE, auth
from taskbox.api.tasks import get_task_store
from taskbox.config import Settings
from taskbox.main import create_app


async def _create(client, token="tok1", title="Buy milk", description="2%"):
    resp = await client.post(
        "/tasks",
        json={"title": title, "description": description},
        headers=auth(token),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


# ═══════════════════════════════════════════════════════════
# Authentication
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path",
    [("GET", "/tasks"), ("POST", "/tasks"), ("DELETE", "/tasks/abc")],
)
async def test_no_auth_header_is_401_without_store_calls(client, store, method, path):
    resp = await client.request(method, path, json={"title": "t", "description": "d"})
    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Bearer"
    assert store.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "header",
    ["bearer tok1", "Bearer", "Bearer tok1 extra", "Basic tok1", "tok1"],
)
async def test_malformed_header_is_401(client, store, resolver, header):
    resp = await client.get("/tasks", headers={"Authorization": header})
    assert resp.status_code == 401
    assert resolver.calls == []
    assert store.calls == []


@pytest.mark.asyncio
async def test_unknown_token_is_401(client, store, resolver):
    resp = await client.get("/tasks", headers=auth("stolen"))
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Authentication required"}
    assert resolver.calls == ["stolen"]
    assert store.calls == []


# ═══════════════════════════════════════════════════════════
# Create
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_task(client):
    before = datetime.now(timezone.utc)
    task = await _create(client, title="  Buy milk  ", description=" 2% ")

    assert set(task) == {"id", "title", "description", "createdAt"}
    assert task["title"] == "Buy milk"
    assert task["description"] == "2%"
    created = datetime.fromisoformat(task["createdAt"].replace("Z", "+00:00"))
    assert abs((created - before).total_seconds()) < 5


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"title": "", "description": "x"},
        {"title": "   ", "description": "x"},
        {"title": None, "description": "x"},
        {"description": "x"},
        {"title": "x"},
        {},
        {"title": 5, "description": "x"},
    ],
)
async def test_create_invalid_body_is_400(client, store, body):
    resp = await client.post("/tasks", json=body, headers=auth("tok1"))
    assert resp.status_code == 400
    assert store.calls == []


@pytest.mark.asyncio
async def test_create_non_json_body_is_400(client, store):
    resp = await client.post(
        "/tasks",
        content=b"title=x",
        headers={**auth("tok1"), "Content-Type": "application/x-www-form-urlencoded"},
    )
    assert resp.status_code == 400

    resp = await client.post("/tasks", json=["title", "x"], headers=auth("tok1"))
    assert resp.status_code == 400
    assert store.calls == []


# ═══════════════════════════════════════════════════════════
# List
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_list_newest_first_and_scoped(client):
    first = await _create(client, title="first")
    await _create(client, token="tok2", title="bob's")
    second = await _create(client, title="second")

    resp = await client.get("/tasks", headers=auth("tok1"))
    assert resp.status_code == 200
    assert [t["id"] for t in resp.json()] == [second["id"], first["id"]]

    resp = await client.get("/tasks", headers=auth("tok2"))
    assert [t["title"] for t in resp.json()] == ["bob's"]


@pytest.mark.asyncio
async def test_list_never_exposes_owner(client):
    await _create(client)
    resp = await client.get("/tasks", headers=auth("tok1"))
    for task in resp.json():
        assert "owner_id" not in task
        assert "ownerId" not in task
        assert ALICE.id not in task.values()


# ═══════════════════════════════════════════════════════════
# Delete
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_delete_task(client):
    task = await _create(client)
    resp = await client.delete(f"/tasks/{task['id']}", headers=auth("tok1"))
    assert resp.status_code == 200
    assert resp.json() == {"success": True}


@pytest.mark.asyncio
async def test_delete_twice_is_404(client):
    task = await _create(client)
    await client.delete(f"/tasks/{task['id']}", headers=auth("tok1"))
    resp = await client.delete(f"/tasks/{task['id']}", headers=auth("tok1"))
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_unknown_is_404(client):
    resp = await client.delete("/tasks/nope", headers=auth("tok1"))
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Task not found"}


@pytest.mark.asyncio
async def test_delete_other_users_task_is_403(client):
    task = await _create(client, token="tok1")

    resp = await client.delete(f"/tasks/{task['id']}", headers=auth("tok2"))
    assert resp.status_code == 403

    resp = await client.get("/tasks", headers=auth("tok1"))
    assert [t["id"] for t in resp.json()] == [task["id"]]


@pytest.mark.asyncio
async def test_conceal_foreign_tasks_renders_403_as_404(resolver, store):
    app = create_app(
        Settings(database_url="memory://", conceal_foreign_tasks=True, log_level="WARNING"),
        identity_resolver=resolver,
    )
    app.dependency_overrides[get_task_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        task = await _create(client, token="tok1")
        foreign = await client.delete(f"/tasks/{task['id']}", headers=auth("tok2"))
        missing = await client.delete("/tasks/nope", headers=auth("tok2"))

    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json()
    assert await store.inner.find_by_id(task["id"]) is not None


# ═══════════════════════════════════════════════════════════
# End to end
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_list_delete_flow(client):
    task = await _create(client, title="Buy milk", description="2%")
    assert task["title"] == "Buy milk"
    assert task["description"] == "2%"
    assert task["id"]

    resp = await client.get("/tasks", headers=auth("tok1"))
    assert resp.json() == [task]

    resp = await client.delete(f"/tasks/{task['id']}", headers=auth("tok1"))
    assert resp.status_code == 200

    resp = await client.get("/tasks", headers=auth("tok1"))
    assert resp.json() == []
