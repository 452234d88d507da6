"""
Comment business logic.
"""

from __future__ import annotations

from auth import policy
from auth.security import IdentityClaim
from core import http

from . import repository, schemas


async def list_comments(blog_id: str) -> list[schemas.CommentResponse]:
    blog_id = http.object_id_or_400(blog_id, label="Blog")
    rows = await repository.list_for_blog(blog_id)
    return [schemas.CommentResponse(**row) for row in rows]


async def add_comment(payload: schemas.CommentCreateRequest, identity: IdentityClaim) -> dict:
    policy.ensure_owner(identity, payload.comment_email, resource="comment")
    blog_id = http.object_id_or_400(payload.blog_id, label="Blog")

    result = await repository.insert_comment(
        {
            "blog_id": blog_id,
            "comment_email": identity.email,
            "text": payload.text,
            "commenter_name": payload.commenter_name,
            "commenter_photo": payload.commenter_photo,
        }
    )
    return result.to_dict()
