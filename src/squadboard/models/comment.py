# src/squadboard/models/comment.py
"""SQLAlchemy model for comments on posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from squadboard.db.session import Base
from squadboard.db.time import utcnow

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .account import Account
    from .post import Post


class Comment(Base):
    """Child record of a post; only written together with its parent's counter."""

    __tablename__ = "comment"
    __table_args__ = (Index("ix_comment_post_id", "post_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_handle: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("account.handle", ondelete="CASCADE"),
        nullable=False,
    )
    author_snapshot: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    post: Mapped[Post] = relationship("Post", back_populates="comments")
    author: Mapped[Account] = relationship("Account", back_populates="comments")
