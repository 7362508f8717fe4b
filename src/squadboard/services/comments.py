"""Comments and the denormalized comment counter on their parent post."""
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from squadboard.core.errors import AuthorizationError, NotFoundError, ValidationError
from squadboard.db.time import utcnow
from squadboard.db.transaction import run_transaction
from squadboard.models import Account, Comment, Post

logger = logging.getLogger(__name__)

COMMENT_MAX_LENGTH = 200


class CommentThreads:
    """Add, delete and list comments, keeping `Post.comment_count` exact."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow) -> None:
        self.db = db
        self.clock = clock

    def add_comment(self, post_id: int, author: Account, body: str) -> Comment:
        """Insert a comment and bump the parent's counter in one transaction."""
        body = (body or "").strip()
        if not body:
            raise ValidationError("Comment cannot be empty")

        def work(db: Session) -> Comment:
            post = db.get(Post, post_id)
            if post is None:
                raise NotFoundError("Post not found")
            comment = Comment(
                post_id=post.id,
                author_handle=author.handle,
                author_snapshot=author.snapshot(),
                body=body[:COMMENT_MAX_LENGTH],
                created_at=self.clock(),
            )
            db.add(comment)
            post.comment_count += 1
            return comment

        return run_transaction(self.db, work)

    def delete_comment(self, post_id: int, comment_id: int, requestor: Account) -> None:
        """Delete a comment and decrement the counter; author or privileged only."""

        def work(db: Session) -> None:
            comment = db.get(Comment, comment_id)
            if comment is None or comment.post_id != post_id:
                raise NotFoundError("Comment not found")
            if not requestor.is_privileged and comment.author_handle != requestor.handle:
                raise AuthorizationError("You can only delete your own comments")
            post = comment.post
            db.delete(comment)
            post.comment_count = max(0, post.comment_count - 1)

        run_transaction(self.db, work)
        logger.info("Comment %s on post %s deleted by %s", comment_id, post_id, requestor.handle)

    def list_comments(self, post_id: int) -> list[Comment]:
        """Return a post's comments, oldest first."""
        if self.db.get(Post, post_id) is None:
            raise NotFoundError("Post not found")
        return list(
            self.db.scalars(
                select(Comment)
                .where(Comment.post_id == post_id)
                .order_by(Comment.created_at, Comment.id)
            )
        )
