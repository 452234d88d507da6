"""
Wishlist persistence.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import store

WISHLIST_COLUMNS = (
    "wishlist_user_email",
    "blog_id",
    "email",
    "post_title",
    "post_description",
    "post_cover",
    "category",
    "publishing_date",
    "created_at",
)

collection = store.Collection("wishlists", WISHLIST_COLUMNS, id_columns=("id", "blog_id"))


class DuplicateEntryError(RuntimeError):
    pass


async def list_for_user(email: str) -> list[dict[str, Any]]:
    return await collection.find_many({"wishlist_user_email": email})


async def find_entry(*, user_email: str, blog_id: str) -> dict[str, Any] | None:
    return await collection.find_one({"wishlist_user_email": user_email, "blog_id": blog_id})


async def get_entry(entry_id: str) -> dict[str, Any] | None:
    return await collection.find_one({"id": entry_id})


async def insert_entry(document: dict[str, Any]) -> store.InsertResult:
    try:
        return await collection.insert_one(document)
    except asyncpg.UniqueViolationError as exc:
        # A concurrent insert won the race past the lookup.
        raise DuplicateEntryError("Wishlist entry already exists.") from exc


async def delete_entry(entry_id: str) -> store.DeleteResult:
    return await collection.delete_one({"id": entry_id})


async def delete_for_blog(blog_id: str, *, author_email: str | None = None) -> store.DeleteResult:
    """
    Remove every entry pointing at `blog_id`, or only those whose snapshot
    names `author_email`. Safe to repeat.
    """
    filters: dict[str, Any] = {"blog_id": blog_id}
    if author_email is not None:
        filters["email"] = author_email
    return await collection.delete_many(filters)
