"""Post, like and comment Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    body: str = Field(..., description="Introduction text")
    tagline: str | None = Field(None, description="What the author is looking for")
    images: list[str] = Field(default_factory=list, description="Image URLs or data URIs")


class PostRef(BaseModel):
    """Payload addressing a single post (delete, like)."""

    post_id: int


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    author_handle: str
    author_snapshot: dict[str, Any]
    body: str
    tagline: str
    images: list[str]
    like_count: int
    comment_count: int
    created_at: datetime
    liked: bool = False

    model_config = ConfigDict(from_attributes=True)


class CommentCreate(BaseModel):
    """Schema for adding a comment to a post."""

    post_id: int
    body: str


class CommentRef(BaseModel):
    """Payload addressing a comment under its post."""

    post_id: int
    comment_id: int


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: int
    post_id: int
    author_handle: str
    author_snapshot: dict[str, Any]
    body: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
