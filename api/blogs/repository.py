"""
Blog persistence.
"""

from __future__ import annotations

from typing import Any

from core import store

BLOG_COLUMNS = (
    "email",
    "post_title",
    "post_description",
    "post_cover",
    "category",
    "publishing_date",
    "created_at",
)

collection = store.Collection("blogs", BLOG_COLUMNS)


def normalize_category(category: str | None) -> str | None:
    """
    Categories are stored with a capitalized first letter, so "tech" finds
    "Tech".
    """
    value = (category or "").strip()
    if not value:
        return None
    return value[:1].upper() + value[1:]


async def list_blogs(*, category: str | None = None) -> list[dict[str, Any]]:
    filters: dict[str, Any] = {}
    normalized = normalize_category(category)
    if normalized:
        filters["category"] = normalized
    return await collection.find_many(filters)


async def list_blogs_by_owner(email: str) -> list[dict[str, Any]]:
    return await collection.find_many({"email": email})


async def list_featured(*, limit: int) -> list[dict[str, Any]]:
    # Ranked in SQL; only `limit` rows leave the database.
    return await collection.find_longest("post_description", limit=limit, ties_desc=("publishing_date",))


async def get_blog(blog_id: str) -> dict[str, Any] | None:
    return await collection.find_one({"id": blog_id})


async def insert_blog(document: dict[str, Any]) -> store.InsertResult:
    return await collection.insert_one(document)


async def upsert_blog(blog_id: str, patch: dict[str, Any], *, owner_email: str) -> store.UpdateResult:
    # The owner is written only when the row is created; an existing row is
    # updated only if it already belongs to `owner_email`.
    return await collection.upsert_one(
        {"id": blog_id},
        patch,
        on_insert={"email": owner_email},
        guard=("email",),
    )


async def delete_blog(blog_id: str) -> store.DeleteResult:
    return await collection.delete_one({"id": blog_id})
