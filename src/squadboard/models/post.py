# src/squadboard/models/post.py
"""SQLAlchemy model for board posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from squadboard.db.session import Base
from squadboard.db.time import utcnow

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .account import Account
    from .comment import Comment


class Post(Base):
    """A looking-for-teammates post.

    `like_count` always equals ``len(liker_ids)``; `comment_count` always
    equals the number of comment rows. Both are maintained only inside
    versioned transactions together with the collection they summarize.
    """

    __tablename__ = "post"
    __table_args__ = (Index("ix_post_created_at", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_handle: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("account.handle", ondelete="CASCADE"),
        nullable=False,
    )
    author_snapshot: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    body: Mapped[str] = mapped_column(Text, nullable=False)
    tagline: Mapped[str] = mapped_column(Text, nullable=False, default="")
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Actor identifiers, oldest first; trimmed from the front past the cap.
    liker_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    author: Mapped[Account] = relationship("Account", back_populates="posts")
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )

    __mapper_args__ = {"version_id_col": version}
