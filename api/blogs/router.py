"""
Blog API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies
from auth.security import IdentityClaim

from . import schemas, service

router = APIRouter()


@router.get("/blogs", response_model=list[schemas.BlogResponse])
async def list_blogs(
    category: str | None = Query(default=None, max_length=100),
) -> list[schemas.BlogResponse]:
    return await service.list_blogs(category=category)


@router.post("/blogs")
async def create_blog(
    payload: schemas.BlogWriteRequest,
    identity: IdentityClaim = Depends(auth_dependencies.get_identity),
) -> dict:
    return await service.create_blog(payload, identity)


@router.get("/blogs/user/{email}", response_model=list[schemas.BlogResponse])
async def list_user_blogs(
    email: str,
    identity: IdentityClaim = Depends(auth_dependencies.get_identity),
) -> list[schemas.BlogResponse]:
    return await service.list_user_blogs(email, identity)


@router.get("/blogs/{blog_id}", response_model=schemas.BlogResponse | None)
async def get_blog(blog_id: str) -> schemas.BlogResponse | None:
    return await service.get_blog(blog_id)


@router.put("/blogs/{blog_id}")
async def update_blog(
    blog_id: str,
    payload: schemas.BlogWriteRequest,
    identity: IdentityClaim = Depends(auth_dependencies.get_identity),
) -> dict:
    return await service.update_blog(blog_id, payload, identity)


@router.delete("/blogs/{blog_id}")
async def delete_blog(
    blog_id: str,
    identity: IdentityClaim = Depends(auth_dependencies.get_identity),
) -> dict:
    return await service.delete_blog(blog_id, identity)


@router.get("/featured-blogs", response_model=list[schemas.FeaturedBlogResponse])
async def featured_blogs() -> list[schemas.FeaturedBlogResponse]:
    return await service.featured_blogs()
