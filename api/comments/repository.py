"""
Comment persistence. Comments are append-only.
"""

from __future__ import annotations

from typing import Any

from core import store

COMMENT_COLUMNS = (
    "blog_id",
    "comment_email",
    "text",
    "commenter_name",
    "commenter_photo",
    "created_at",
)

collection = store.Collection("comments", COMMENT_COLUMNS, id_columns=("id", "blog_id"))


async def list_for_blog(blog_id: str) -> list[dict[str, Any]]:
    return await collection.find_many({"blog_id": blog_id})


async def insert_comment(document: dict[str, Any]) -> store.InsertResult:
    return await collection.insert_one(document)
