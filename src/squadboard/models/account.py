# src/squadboard/models/account.py
"""SQLAlchemy model for board accounts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from squadboard.db.session import Base
from squadboard.db.time import utcnow

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .comment import Comment
    from .post import Post


class Account(Base):
    """Account keyed by its unique, immutable handle.

    Lockout bookkeeping (`failure_count`, `last_failed_at`, `locked_until`)
    lives on the row so that the login state machine can update it inside a
    single versioned transaction.
    """

    __tablename__ = "account"

    handle: Mapped[str] = mapped_column(String(64), primary_key=True)
    password_digest: Mapped[str] = mapped_column(Text, nullable=False)
    display_name: Mapped[str] = mapped_column(String(64), nullable=False)
    avatar: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Set once at registration; permission checks read this column only.
    is_privileged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    failure_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_failed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    locked_until: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    gender: Mapped[str | None] = mapped_column(String(16), nullable=True)
    looking_for: Mapped[str | None] = mapped_column(String(200), nullable=True)
    contact_qq: Mapped[str | None] = mapped_column(String(32), nullable=True)
    contact_wx: Mapped[str | None] = mapped_column(String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    posts: Mapped[list[Post]] = relationship(
        "Post",
        back_populates="author",
        cascade="all, delete-orphan",
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="author",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def profile_attrs(self) -> dict[str, Any]:
        """Return the free-form profile attributes as a mapping."""
        return {
            "gender": self.gender,
            "looking_for": self.looking_for,
            "contact_qq": self.contact_qq,
            "contact_wx": self.contact_wx,
        }

    def snapshot(self) -> dict[str, Any]:
        """Return the author details copied onto posts and comments."""
        return {
            "display_name": self.display_name,
            "avatar": self.avatar,
            **self.profile_attrs,
        }
