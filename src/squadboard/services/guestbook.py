"""Anonymous guestbook wall."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from squadboard.core.errors import ValidationError
from squadboard.db.transaction import run_transaction
from squadboard.models import WallMessage

__all__ = ["list_wall", "post_to_wall"]

WALL_MESSAGE_MAX_LENGTH = 500


def list_wall(db: Session, limit: int = 50) -> list[WallMessage]:
    """Return the newest wall messages first."""
    return list(
        db.scalars(
            select(WallMessage)
            .order_by(WallMessage.created_at.desc(), WallMessage.id.desc())
            .limit(limit)
        )
    )


def post_to_wall(db: Session, content: str) -> WallMessage:
    """Persist a non-empty wall message."""
    content = (content or "").strip()
    if not content:
        raise ValidationError("Content cannot be empty")

    def work(session: Session) -> WallMessage:
        message = WallMessage(content=content[:WALL_MESSAGE_MAX_LENGTH])
        session.add(message)
        return message

    return run_transaction(db, work)
