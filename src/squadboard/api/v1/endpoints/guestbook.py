# src/squadboard/api/v1/endpoints/guestbook.py
"""Guestbook endpoints: an anonymous public wall."""

from typing import Any

from fastapi import APIRouter, status

from squadboard.api.v1.dependencies import SessionDep
from squadboard.schemas.guestbook import WallMessageCreate, WallMessageResponse
from squadboard.services.guestbook import list_wall, post_to_wall

router = APIRouter(prefix="/guestbook", tags=["guestbook"])


@router.get("/")
def get_wall(db: SessionDep) -> dict[str, Any]:
    """Return the newest wall messages."""
    messages = list_wall(db)
    return {
        "success": True,
        "messages": [
            WallMessageResponse.model_validate(message).model_dump(mode="json")
            for message in messages
        ],
    }


@router.post("/", status_code=status.HTTP_200_OK)
def add_to_wall(payload: WallMessageCreate, db: SessionDep) -> dict[str, Any]:
    """Leave a message on the wall."""
    message = post_to_wall(db, payload.content)
    return {"success": True, "id": message.id}
