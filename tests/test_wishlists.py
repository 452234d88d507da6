from __future__ import annotations

import asyncio
import uuid

import asyncpg

from wishlists import repository

USER = "reader@example.com"
OTHER = "other@example.com"


def _entry(user: str = USER, blog_id: str | None = None, **extra) -> dict:
    return {"wishlistUserEmail": user, "blogId": blog_id or str(uuid.uuid4()), **extra}


def test_add_entry_with_snapshot(as_user, collections):
    blog_id = str(uuid.uuid4())
    response = as_user(USER).post(
        "/wishlists",
        json=_entry(blog_id=blog_id, postTitle="Hello", email="Author@Example.com"),
    )

    assert response.status_code == 200
    assert response.json()["acknowledged"] is True
    stored = collections["wishlists"].rows[0]
    assert stored["blog_id"] == blog_id
    assert stored["wishlist_user_email"] == USER
    assert stored["post_title"] == "Hello"
    assert stored["email"] == "author@example.com"


def test_duplicate_pair_is_rejected(as_user, collections):
    client = as_user(USER)
    payload = _entry()

    assert client.post("/wishlists", json=payload).status_code == 200
    second = client.post("/wishlists", json=payload)

    assert second.status_code == 400
    assert second.json() == {"detail": "Post already exists"}
    assert len(collections["wishlists"].rows) == 1


def test_duplicate_detected_with_different_snapshot(as_user, collections):
    client = as_user(USER)
    blog_id = str(uuid.uuid4())

    client.post("/wishlists", json=_entry(blog_id=blog_id, postTitle="v1"))
    second = client.post("/wishlists", json=_entry(blog_id=blog_id, postTitle="v2"))

    assert second.status_code == 400
    assert len(collections["wishlists"].rows) == 1


def test_same_blog_for_two_users_is_allowed(as_user, collections):
    blog_id = str(uuid.uuid4())

    assert as_user(USER).post("/wishlists", json=_entry(USER, blog_id)).status_code == 200
    assert as_user(OTHER).post("/wishlists", json=_entry(OTHER, blog_id)).status_code == 200
    assert len(collections["wishlists"].rows) == 2


def test_unique_index_violation_maps_to_duplicate(as_user, collections, monkeypatch):
    async def racing_insert(document):
        raise asyncpg.UniqueViolationError("duplicate key value violates unique constraint")

    monkeypatch.setattr(collections["wishlists"], "insert_one", racing_insert)

    response = as_user(USER).post("/wishlists", json=_entry())

    assert response.status_code == 400
    assert response.json() == {"detail": "Post already exists"}


def test_adding_for_another_user_is_forbidden(as_user, collections):
    response = as_user(USER).post("/wishlists", json=_entry(user=OTHER))

    assert response.status_code == 403
    assert collections["wishlists"].rows == []


def test_malformed_blog_id_is_400(as_user, collections):
    response = as_user(USER).post("/wishlists", json=_entry(blog_id="abc"))

    assert response.status_code == 400
    assert collections["wishlists"].rows == []


def test_list_returns_only_callers_entries(as_user):
    as_user(USER).post("/wishlists", json=_entry(USER))
    as_user(OTHER).post("/wishlists", json=_entry(OTHER))

    body = as_user(USER).get("/wishlists").json()

    assert [entry["wishlistUserEmail"] for entry in body] == [USER]


def test_list_for_someone_else_is_forbidden(as_user):
    client = as_user(USER)

    assert client.get("/wishlists", params={"email": USER}).status_code == 200
    assert client.get("/wishlists", params={"email": OTHER}).status_code == 403


def test_owner_can_delete_entry(as_user, collections):
    client = as_user(USER)
    entry_id = client.post("/wishlists", json=_entry()).json()["insertedId"]

    response = client.delete(f"/wishlists/{entry_id}")

    assert response.json() == {"acknowledged": True, "deletedCount": 1}
    assert collections["wishlists"].rows == []


def test_non_owner_cannot_delete_entry(as_user, collections):
    entry_id = as_user(USER).post("/wishlists", json=_entry()).json()["insertedId"]

    response = as_user(OTHER).delete(f"/wishlists/{entry_id}")

    assert response.status_code == 403
    assert len(collections["wishlists"].rows) == 1


def test_delete_missing_entry_is_zero_count(as_user):
    response = as_user(USER).delete(f"/wishlists/{uuid.uuid4()}")

    assert response.status_code == 200
    assert response.json()["deletedCount"] == 0


def test_purge_for_unreferenced_blog_is_zero(collections):
    result = asyncio.run(repository.delete_for_blog(str(uuid.uuid4())))

    assert result.deleted_count == 0
