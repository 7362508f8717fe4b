"""Service-level helpers for the post lifecycle."""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from squadboard.core.errors import AuthorizationError, NotFoundError, ValidationError
from squadboard.core.settings import settings
from squadboard.db.time import utcnow
from squadboard.db.transaction import run_transaction
from squadboard.models import Account, Post

logger = logging.getLogger(__name__)

BODY_MAX_LENGTH = 200
TAGLINE_MAX_LENGTH = 200


@dataclass(frozen=True)
class PostView:
    """A post as seen by one actor."""

    post: Post
    liked: bool


class PostBoard:
    """Create, list and delete posts."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow) -> None:
        self.db = db
        self.clock = clock

    def create_post(
        self,
        author: Account,
        body: str,
        tagline: str | None = None,
        images: Sequence[str] | None = None,
    ) -> Post:
        """Publish a post carrying a snapshot of the author's profile.

        Over-long text is truncated rather than rejected.
        """
        body = (body or "").strip()
        if not body:
            raise ValidationError("Post body cannot be empty")
        images = [image for image in (images or []) if image]
        if len(images) > settings.post_max_images:
            raise ValidationError(f"A post can carry at most {settings.post_max_images} images")

        def work(db: Session) -> Post:
            post = Post(
                author_handle=author.handle,
                author_snapshot=author.snapshot(),
                body=body[:BODY_MAX_LENGTH],
                tagline=(tagline or "").strip()[:TAGLINE_MAX_LENGTH],
                images=list(images),
                like_count=0,
                liker_ids=[],
                comment_count=0,
                created_at=self.clock(),
            )
            db.add(post)
            return post

        post = run_transaction(self.db, work)
        logger.info("Post %s created by %s", post.id, author.handle)
        return post

    def list_recent(self, actor_id: str | None = None) -> list[PostView]:
        """Return the newest posts, flagged with the actor's like state."""
        posts = self.db.scalars(
            select(Post)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(settings.feed_page_size)
        ).all()
        return [
            PostView(post=post, liked=actor_id is not None and actor_id in post.liker_ids)
            for post in posts
        ]

    def delete_post(self, post_id: int, requestor: Account) -> None:
        """Delete a post and its comments; author or privileged callers only."""

        def work(db: Session) -> None:
            post = db.get(Post, post_id)
            if post is None:
                raise NotFoundError("Post not found")
            if not requestor.is_privileged and post.author_handle != requestor.handle:
                raise AuthorizationError("You can only delete your own posts")
            db.delete(post)

        run_transaction(self.db, work)
        logger.info("Post %s deleted by %s", post_id, requestor.handle)
