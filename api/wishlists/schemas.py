"""
Pydantic schemas for wishlist endpoints.

An entry carries a snapshot of the blog it points at, so the wishlist page
renders without joining back to `blogs`.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BlogSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str | None = Field(default=None, max_length=320)
    post_title: str | None = Field(default=None, alias="postTitle", max_length=300)
    post_description: str | None = Field(default=None, alias="postDescription")
    post_cover: str | None = Field(default=None, alias="postCover", max_length=2048)
    category: str | None = Field(default=None, max_length=100)
    publishing_date: str | None = Field(default=None, alias="publishingDate", max_length=64)


class WishlistCreateRequest(BlogSnapshot):
    wishlist_user_email: str = Field(..., alias="wishlistUserEmail", min_length=3, max_length=320)
    blog_id: str = Field(..., alias="blogId", min_length=1, max_length=64)


class WishlistResponse(BlogSnapshot):
    id: str
    wishlist_user_email: str = Field(..., alias="wishlistUserEmail")
    blog_id: str = Field(..., alias="blogId")
    created_at: datetime | None = Field(default=None, alias="createdAt")
