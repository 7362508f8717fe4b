# src/squadboard/services/__init__.py
"""Business logic services for the SquadBoard application."""

from .chat import ConversationLedger
from .comments import CommentThreads
from .identity import IdentityStore
from .likes import LikeLedger
from .posts import PostBoard

__all__ = [
    "CommentThreads",
    "ConversationLedger",
    "IdentityStore",
    "LikeLedger",
    "PostBoard",
]
