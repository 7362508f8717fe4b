# src/squadboard/models/conversation.py
"""Models describing pairwise conversations and their messages."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from squadboard.db.session import Base
from squadboard.db.time import utcnow


class Conversation(Base):
    """Chat session between exactly two accounts.

    The primary key is the canonical pairing of both handles, so either side
    addressing the other resolves to the same row and a concurrent first
    message from both sides collides on insert instead of creating two rows.
    """

    __tablename__ = "conversation"
    __table_args__ = (
        Index("ix_conversation_participant_a", "participant_a"),
        Index("ix_conversation_participant_b", "participant_b"),
    )

    id: Mapped[str] = mapped_column(String(160), primary_key=True)
    # Sorted: participant_a < participant_b.
    participant_a: Mapped[str] = mapped_column(String(64), nullable=False)
    participant_b: Mapped[str] = mapped_column(String(64), nullable=False)

    last_message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    last_sender: Mapped[str | None] = mapped_column(String(64), nullable=True)
    unread_counts: Mapped[dict[str, int]] = mapped_column(JSON, nullable=False, default=dict)
    hidden_for: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    messages: Mapped[list[ChatMessage]] = relationship(
        "ChatMessage",
        back_populates="conversation",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def participants(self) -> list[str]:
        """Return both handles in canonical order."""
        return [self.participant_a, self.participant_b]

    def counterpart(self, handle: str) -> str:
        """Return the other participant."""
        return self.participant_b if handle == self.participant_a else self.participant_a


class ChatMessage(Base):
    """Single message appended to a conversation."""

    __tablename__ = "chat_message"
    __table_args__ = (Index("ix_chat_message_conversation", "conversation_id", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    conversation_id: Mapped[str] = mapped_column(
        String(160),
        ForeignKey("conversation.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender: Mapped[str] = mapped_column(String(64), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    conversation: Mapped[Conversation] = relationship("Conversation", back_populates="messages")
