"""
Pydantic schemas for blog endpoints.

Wire names stay camelCase (`postTitle`, ...) through aliases; Python code and
storage use snake_case.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BlogFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    post_title: str = Field(..., alias="postTitle", min_length=1, max_length=300)
    post_description: str = Field(default="", alias="postDescription")
    post_cover: str | None = Field(default=None, alias="postCover", max_length=2048)
    category: str | None = Field(default=None, max_length=100)
    publishing_date: str | None = Field(default=None, alias="publishingDate", max_length=64)


class BlogWriteRequest(BlogFields):
    # Optional on the wire; when sent it must be the caller's own email.
    email: str | None = Field(default=None, max_length=320)

    @field_validator("publishing_date")
    @classmethod
    def _iso_publishing_date(cls, value: str | None) -> str | None:
        # Stored as ISO 8601 text (UTC for datetimes) so text order is date order.
        raw = (value or "").strip()
        if not raw:
            return None
        try:
            if len(raw) == 10:
                return date.fromisoformat(raw).isoformat()
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError("publishingDate must be an ISO 8601 date") from exc
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        return parsed.isoformat()


class BlogResponse(BlogFields):
    id: str
    email: str
    post_title: str = Field(default="", alias="postTitle")
    created_at: datetime | None = Field(default=None, alias="createdAt")


class FeaturedBlogResponse(BlogResponse):
    content_length: int = Field(..., alias="contentLength")
