"""
Comment API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from auth.security import IdentityClaim

from . import schemas, service

router = APIRouter()


@router.get("/comments/{blog_id}", response_model=list[schemas.CommentResponse])
async def list_comments(blog_id: str) -> list[schemas.CommentResponse]:
    return await service.list_comments(blog_id)


@router.post("/comments")
async def add_comment(
    payload: schemas.CommentCreateRequest,
    identity: IdentityClaim = Depends(auth_dependencies.get_identity),
) -> dict:
    return await service.add_comment(payload, identity)
