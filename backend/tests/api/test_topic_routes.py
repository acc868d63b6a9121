"""Topic Routes — HTTP contract for topic CRUD and the error envelope.

Tests cover:
    - POST /topics: 201, title stripped, INVALID_ARGUMENT for bad titles
    - GET /topics: live topics only, newest first
    - GET/PATCH/DELETE /topics/{id}: 404 for missing or deleted topics
    - PATCH: edit, lock, unlock rejected, empty patch rejected
    - Health probes
"""

import pytest

import threadboard.infrastructure.database as db_module

BASE = "/api/v1/topics"


# ─── Create / Read ───────────────────────────────────────────────

async def test_create_topic_returns_201(client):
    response = await client.post(
        BASE, json={"title": "  Hello  ", "summary": "first"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Hello"
    assert data["summary"] == "first"
    assert data["posts_count"] == 0
    assert data["locked"] is False


@pytest.mark.parametrize("title", ["", "   ", "t" * 81])
async def test_create_topic_rejects_bad_title(client, title):
    response = await client.post(BASE, json={"title": title})
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_ARGUMENT"
    assert error["retryable"] is False


async def test_create_topic_missing_title_is_validation_error(client):
    response = await client.post(BASE, json={})
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "body.title"


async def test_list_topics_newest_first(client):
    for title in ("one", "two", "three"):
        await client.post(BASE, json={"title": title})
    response = await client.get(BASE)
    assert response.status_code == 200
    assert [t["title"] for t in response.json()] == ["three", "two", "one"]


async def test_get_topic(client, topic):
    response = await client.get(f"{BASE}/{topic['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == topic["id"]


async def test_get_missing_topic_returns_404(client):
    response = await client.get(f"{BASE}/999")
    assert response.status_code == 404
    error = response.json()["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["category"] == "resource_not_found"


# ─── Update ──────────────────────────────────────────────────────

async def test_patch_edits_title_and_summary(client, topic):
    response = await client.patch(
        f"{BASE}/{topic['id']}", json={"title": "Renamed", "summary": "new"},
    )
    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"
    assert response.json()["summary"] == "new"


async def test_patch_locks_topic(client, topic):
    response = await client.patch(f"{BASE}/{topic['id']}", json={"locked": True})
    assert response.status_code == 200
    assert response.json()["locked"] is True


async def test_patch_cannot_unlock(client, topic):
    await client.patch(f"{BASE}/{topic['id']}", json={"locked": True})
    response = await client.patch(f"{BASE}/{topic['id']}", json={"locked": False})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_ARGUMENT"
    current = await client.get(f"{BASE}/{topic['id']}")
    assert current.json()["locked"] is True


async def test_patch_requires_a_field(client, topic):
    response = await client.patch(f"{BASE}/{topic['id']}", json={})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


# ─── Delete ──────────────────────────────────────────────────────

async def test_delete_topic_hides_it(client, topic):
    response = await client.delete(f"{BASE}/{topic['id']}")
    assert response.status_code == 204

    assert (await client.get(f"{BASE}/{topic['id']}")).status_code == 404
    assert (await client.get(BASE)).json() == []
    again = await client.delete(f"{BASE}/{topic['id']}")
    assert again.status_code == 404


async def test_post_to_deleted_topic_is_forbidden(client, topic):
    await client.delete(f"{BASE}/{topic['id']}")
    response = await client.post(
        f"{BASE}/{topic['id']}/posts", json={"body": "late"},
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "TOPIC_DELETED"


# ─── Health ──────────────────────────────────────────────────────

async def test_liveness(client):
    response = await client.get("/api/v1/health/")
    assert response.status_code == 200
    assert response.json()["service"] == "threadboard-api"


async def test_readiness_with_database(client):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


async def test_readiness_before_init_db(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
