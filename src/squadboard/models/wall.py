# src/squadboard/models/wall.py
"""Model for the anonymous guestbook wall."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from squadboard.db.session import Base
from squadboard.db.time import utcnow


class WallMessage(Base):
    """Short public note left without an account."""

    __tablename__ = "wall_message"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
