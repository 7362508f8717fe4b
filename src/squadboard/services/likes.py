"""Like toggling on posts."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from squadboard.core.errors import NotFoundError, ValidationError
from squadboard.core.settings import settings
from squadboard.db.transaction import run_transaction
from squadboard.models import Post


@dataclass(frozen=True)
class LikeOutcome:
    """State of the actor's like after a toggle."""

    liked: bool
    like_count: int


def actor_id_for(handle: str | None, client_address: str | None) -> str:
    """Return the identifier used to dedupe likes.

    Authenticated callers are keyed by handle; anonymous callers fall back to
    their network address, which is only a best-effort dedup key.
    """
    if handle:
        return f"user:{handle}"
    return f"ip:{client_address or 'unknown'}"


def apply_toggle(liker_ids: list[str], actor_id: str, cap: int) -> tuple[list[str], bool]:
    """Return the new liker list and whether `actor_id` is now a liker."""
    if actor_id in liker_ids:
        return [liker for liker in liker_ids if liker != actor_id], False
    updated = [*liker_ids, actor_id]
    if len(updated) > cap:
        # Oldest likers are forgotten to bound the row size.
        updated = updated[len(updated) - cap:]
    return updated, True


class LikeLedger:
    """Toggleable like membership and the derived counter on posts."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def toggle_like(self, post_id: int, actor_id: str) -> LikeOutcome:
        """Flip `actor_id`'s like on a post in a single versioned write.

        Re-sending the same request flips the state again; callers must not
        retry blindly without knowing the previous outcome.
        """
        if not actor_id:
            raise ValidationError("Actor identifier is required")

        def work(db: Session) -> LikeOutcome:
            post = db.get(Post, post_id)
            if post is None:
                raise NotFoundError("Post not found")
            liker_ids, liked = apply_toggle(list(post.liker_ids), actor_id, settings.liker_cap)
            post.liker_ids = liker_ids
            post.like_count = len(liker_ids)
            return LikeOutcome(liked=liked, like_count=post.like_count)

        return run_transaction(self.db, work)
