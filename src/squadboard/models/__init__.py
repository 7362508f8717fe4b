# src/squadboard/models/__init__.py
"""SQLAlchemy models for the SquadBoard application."""

from .account import Account
from .comment import Comment
from .conversation import ChatMessage, Conversation
from .post import Post
from .wall import WallMessage

__all__ = [
    "Account",
    "ChatMessage", "Conversation",
    "Comment",
    "Post",
    "WallMessage",
]
