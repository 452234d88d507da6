"""
Shared fixtures: the real FastAPI app over in-memory collections.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Iterable
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

import blogs.repository as blog_repository
import comments.repository as comment_repository
import wishlists.repository as wishlist_repository
from auth import security, session
from core import store

TEST_SECRET = "test-secret-for-signing-tokens-0123456789"


class MemoryCollection:
    """
    In-process stand-in for `core.store.Collection` with the same async verbs.
    """

    def __init__(self, *, id_columns: Iterable[str] = ("id",)) -> None:
        self.rows: list[dict[str, Any]] = []
        self.id_columns = set(id_columns) | {"id"}
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _normalize(self, document: dict[str, Any]) -> dict[str, Any]:
        return {
            key: store.parse_object_id(value) if key in self.id_columns and value is not None else value
            for key, value in document.items()
        }

    def _matches(self, row: dict[str, Any], filters: dict[str, Any] | None) -> bool:
        return all(row.get(key) == value for key, value in self._normalize(filters or {}).items())

    def _new_row(self, document: dict[str, Any]) -> dict[str, Any]:
        self._clock += timedelta(seconds=1)
        row = {"id": str(uuid4()), "created_at": self._clock, **self._normalize(document)}
        self.rows.append(row)
        return row

    async def find_many(self, filters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return [dict(row) for row in self.rows if self._matches(row, filters)]

    async def find_one(self, filters: dict[str, Any]) -> dict[str, Any] | None:
        for row in self.rows:
            if self._matches(row, filters):
                return dict(row)
        return None

    async def find_longest(
        self,
        column: str,
        *,
        limit: int,
        ties_desc: Iterable[str] = (),
    ) -> list[dict[str, Any]]:
        rows = [
            {**row, "content_length": len(row.get(column) or "")}
            for row in self.rows
            if row.get(column)
        ]
        # Stable sorts, least significant key first; NULLs sort last.
        for name in reversed(list(ties_desc)):
            rows.sort(key=lambda row: (row.get(name) is not None, row.get(name) or ""), reverse=True)
        rows.sort(key=lambda row: row["content_length"], reverse=True)
        return rows[: max(limit, 0)]

    async def insert_one(self, document: dict[str, Any]) -> store.InsertResult:
        row = self._new_row(document)
        return store.InsertResult(inserted_id=row["id"])

    async def upsert_one(
        self,
        filters: dict[str, Any],
        patch: dict[str, Any],
        *,
        on_insert: dict[str, Any] | None = None,
        guard: Iterable[str] = (),
    ) -> store.UpdateResult:
        document = self._normalize({**(on_insert or {}), **patch, **filters})
        for row in self.rows:
            if self._matches(row, filters):
                if any(row.get(column) != document.get(column) for column in guard):
                    return store.UpdateResult(matched_count=0, modified_count=0)
                row.update(self._normalize(patch))
                return store.UpdateResult(matched_count=1, modified_count=1)
        row = self._new_row(document)
        return store.UpdateResult(matched_count=0, modified_count=0, upserted_id=row["id"])

    async def delete_one(self, filters: dict[str, Any]) -> store.DeleteResult:
        for index, row in enumerate(self.rows):
            if self._matches(row, filters):
                del self.rows[index]
                return store.DeleteResult(deleted_count=1)
        return store.DeleteResult(deleted_count=0)

    async def delete_many(self, filters: dict[str, Any]) -> store.DeleteResult:
        kept = [row for row in self.rows if not self._matches(row, filters)]
        deleted = len(self.rows) - len(kept)
        self.rows = kept
        return store.DeleteResult(deleted_count=deleted)


@pytest.fixture(autouse=True)
def auth_env(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_SECRET", TEST_SECRET)
    monkeypatch.setenv("APP_ENV", "development")
    monkeypatch.delenv("ACCESS_TOKEN_EXPIRE_MIN", raising=False)
    monkeypatch.delenv("JWT_ALG", raising=False)


@pytest.fixture()
def collections(monkeypatch) -> dict[str, MemoryCollection]:
    fakes = {
        "blogs": MemoryCollection(),
        "wishlists": MemoryCollection(id_columns=("id", "blog_id")),
        "comments": MemoryCollection(id_columns=("id", "blog_id")),
    }
    monkeypatch.setattr(blog_repository, "collection", fakes["blogs"])
    monkeypatch.setattr(wishlist_repository, "collection", fakes["wishlists"])
    monkeypatch.setattr(comment_repository, "collection", fakes["comments"])
    return fakes


@pytest.fixture()
def client(collections) -> TestClient:
    # No context manager: the lifespan (DB pool) never runs.
    from main import app

    return TestClient(app)


def login(client: TestClient, email: str) -> None:
    client.cookies.set(session.SESSION_COOKIE_NAME, security.build_access_token(email=email))


@pytest.fixture()
def as_user(client):
    def _as_user(email: str) -> TestClient:
        login(client, email)
        return client

    return _as_user


def blog_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "postTitle": "Hello",
        "postDescription": "A short description",
        "postCover": "https://img.example/cover.png",
        "category": "Tech",
        "publishingDate": "2024-05-01",
    }
    payload.update(overrides)
    return payload
