"""
Pydantic schemas for comment endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    blog_id: str = Field(..., alias="blogId", min_length=1, max_length=64)
    comment_email: str = Field(..., alias="commentEmail", min_length=3, max_length=320)
    text: str = Field(..., min_length=1, max_length=5000)
    commenter_name: str | None = Field(default=None, alias="commenterName", max_length=200)
    commenter_photo: str | None = Field(default=None, alias="commenterPhoto", max_length=2048)


class CommentCreateRequest(CommentFields):
    pass


class CommentResponse(CommentFields):
    id: str
    text: str
    created_at: datetime | None = Field(default=None, alias="createdAt")
