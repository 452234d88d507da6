"""
Blog business logic.

Ownership is always read from the stored blog, never from fields the client
sends. Deleting a blog also purges wishlist entries that point at it; the two
deletes are separate statements, so a failure in between leaves orphans that
a repeated delete by the author cleans up.
"""

from __future__ import annotations

import logging
from typing import Any

from auth import policy
from auth.security import IdentityClaim
from core import http, store
from wishlists import repository as wishlist_repository

from . import repository, schemas

logger = logging.getLogger(__name__)

RESOURCE = "blog"
FEATURED_LIMIT = 5


def _to_blog_response(row: dict[str, Any]) -> schemas.BlogResponse:
    return schemas.BlogResponse(**row)


def _blog_patch(payload: schemas.BlogWriteRequest) -> dict[str, Any]:
    return {
        "post_title": payload.post_title,
        "post_description": payload.post_description,
        "post_cover": payload.post_cover,
        "category": repository.normalize_category(payload.category),
        "publishing_date": payload.publishing_date,
    }


async def list_blogs(*, category: str | None = None) -> list[schemas.BlogResponse]:
    rows = await repository.list_blogs(category=category)
    return [_to_blog_response(row) for row in rows]


async def get_blog(blog_id: str) -> schemas.BlogResponse | None:
    blog_id = http.object_id_or_400(blog_id, label="Blog")
    row = await repository.get_blog(blog_id)
    # A missing blog is an empty 200, not a 404.
    return _to_blog_response(row) if row is not None else None


async def list_user_blogs(email: str, identity: IdentityClaim) -> list[schemas.BlogResponse]:
    policy.ensure_owner(identity, email, resource=RESOURCE)
    rows = await repository.list_blogs_by_owner(identity.email)
    return [_to_blog_response(row) for row in rows]


async def create_blog(payload: schemas.BlogWriteRequest, identity: IdentityClaim) -> dict:
    policy.ensure_claimed_owner(identity, payload.email, resource=RESOURCE)
    document = {**_blog_patch(payload), "email": identity.email}
    result = await repository.insert_blog(document)
    logger.info("blog_created id=%s owner=%s", result.inserted_id, identity.email)
    return result.to_dict()


async def update_blog(blog_id: str, payload: schemas.BlogWriteRequest, identity: IdentityClaim) -> dict:
    blog_id = http.object_id_or_400(blog_id, label="Blog")
    policy.ensure_claimed_owner(identity, payload.email, resource=RESOURCE, resource_id=blog_id)

    stored = await repository.get_blog(blog_id)
    if stored is not None:
        policy.ensure_owner(identity, stored.get("email"), resource=RESOURCE, resource_id=blog_id)

    result = await repository.upsert_blog(blog_id, _blog_patch(payload), owner_email=identity.email)
    if result.matched_count == 0 and result.upserted_id is None:
        # Created by someone else between the lookup and the upsert.
        policy.ensure_owner(identity, None, resource=RESOURCE, resource_id=blog_id)
    return result.to_dict()


async def purge_wishlist_references(blog_id: str, *, author_email: str | None = None) -> store.DeleteResult:
    """
    Second phase of a blog delete. Failures are logged and reported as an
    unacknowledged result; they never fail the request.

    With `author_email`, only entries whose blog snapshot names that author
    are removed.
    """
    try:
        return await wishlist_repository.delete_for_blog(blog_id, author_email=author_email)
    except Exception:
        logger.exception("wishlist_purge_failed blog_id=%s", blog_id)
        return store.DeleteResult(deleted_count=0, acknowledged=False)


async def delete_blog(blog_id: str, identity: IdentityClaim) -> dict:
    blog_id = http.object_id_or_400(blog_id, label="Blog")

    stored = await repository.get_blog(blog_id)
    if stored is None:
        # The blog is already gone, so ownership can only be shown through the
        # snapshots: a retry by the author repairs an interrupted purge without
        # touching entries that name anyone else.
        result = store.DeleteResult(deleted_count=0)
        purged = await purge_wishlist_references(blog_id, author_email=identity.email)
        if purged.deleted_count:
            logger.info(
                "wishlist_orphans_purged blog_id=%s caller=%s deleted=%s",
                blog_id,
                identity.email,
                purged.deleted_count,
            )
    else:
        policy.ensure_owner(identity, stored.get("email"), resource=RESOURCE, resource_id=blog_id)
        result = await repository.delete_blog(blog_id)
        purged = await purge_wishlist_references(blog_id)

    logger.info(
        "blog_deleted id=%s deleted=%s wishlist_purged=%s",
        blog_id,
        result.deleted_count,
        purged.deleted_count,
    )
    return {"result": result.to_dict(), "deleteFromWishlists": purged.to_dict()}


async def featured_blogs() -> list[schemas.FeaturedBlogResponse]:
    rows = await repository.list_featured(limit=FEATURED_LIMIT)
    return [schemas.FeaturedBlogResponse(**row) for row in rows]
