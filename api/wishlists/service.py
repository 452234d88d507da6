"""
Wishlist business logic: owner-only access and one entry per (user, blog).
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from auth import policy
from auth.security import IdentityClaim, normalize_email
from core import http, store

from . import repository, schemas

logger = logging.getLogger(__name__)

RESOURCE = "wishlist"
SNAPSHOT_FIELDS = ("email", "post_title", "post_description", "post_cover", "category", "publishing_date")


def _duplicate() -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Post already exists")


def _to_wishlist_response(row: dict[str, Any]) -> schemas.WishlistResponse:
    return schemas.WishlistResponse(**row)


async def list_wishlist(identity: IdentityClaim, *, email: str | None = None) -> list[schemas.WishlistResponse]:
    if email is not None:
        policy.ensure_owner(identity, email, resource=RESOURCE)
    rows = await repository.list_for_user(identity.email)
    return [_to_wishlist_response(row) for row in rows]


async def add_to_wishlist(payload: schemas.WishlistCreateRequest, identity: IdentityClaim) -> dict:
    policy.ensure_owner(identity, payload.wishlist_user_email, resource=RESOURCE)
    blog_id = http.object_id_or_400(payload.blog_id, label="Blog")

    # Best-effort check; the unique index on (user, blog) catches the race.
    existing = await repository.find_entry(user_email=identity.email, blog_id=blog_id)
    if existing is not None and existing.get("blog_id"):
        logger.info("wishlist_duplicate user=%s blog_id=%s", identity.email, blog_id)
        raise _duplicate()

    document: dict[str, Any] = {
        field: getattr(payload, field) for field in SNAPSHOT_FIELDS if getattr(payload, field) is not None
    }
    if "email" in document:
        document["email"] = normalize_email(document["email"])
    document["wishlist_user_email"] = identity.email
    document["blog_id"] = blog_id

    try:
        result = await repository.insert_entry(document)
    except repository.DuplicateEntryError as exc:
        logger.info("wishlist_duplicate user=%s blog_id=%s source=index", identity.email, blog_id)
        raise _duplicate() from exc
    return result.to_dict()


async def remove_from_wishlist(entry_id: str, identity: IdentityClaim) -> dict:
    entry_id = http.object_id_or_400(entry_id, label="Wishlist")
    entry = await repository.get_entry(entry_id)
    if entry is None:
        return store.DeleteResult(deleted_count=0).to_dict()

    policy.ensure_owner(identity, entry.get("wishlist_user_email"), resource=RESOURCE, resource_id=entry_id)
    result = await repository.delete_entry(entry_id)
    return result.to_dict()
