"""Guestbook Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class WallMessageCreate(BaseModel):
    """Schema for a guestbook entry."""

    content: str


class WallMessageResponse(BaseModel):
    """Guestbook entry returned by the API."""

    id: int
    content: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
