# src/squadboard/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .account import (
    AccountResponse,
    DeleteUserRequest,
    LoginRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    RegisterRequest,
)
from .chat import (
    ChatMessageResponse,
    ChatSendRequest,
    ConversationRef,
    InboxEntryResponse,
)
from .guestbook import WallMessageCreate, WallMessageResponse
from .post import (
    CommentCreate,
    CommentRef,
    CommentResponse,
    PostCreate,
    PostRef,
    PostResponse,
)

__all__ = [
    "AccountResponse", "DeleteUserRequest", "LoginRequest",
    "ProfileResponse", "ProfileUpdateRequest", "RegisterRequest",
    "ChatMessageResponse", "ChatSendRequest", "ConversationRef", "InboxEntryResponse",
    "WallMessageCreate", "WallMessageResponse",
    "CommentCreate", "CommentRef", "CommentResponse",
    "PostCreate", "PostRef", "PostResponse",
]
