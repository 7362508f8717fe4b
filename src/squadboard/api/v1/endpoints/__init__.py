# src/squadboard/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .board import router as board_router
from .guestbook import router as guestbook_router

__all__ = [
    "board_router",
    "guestbook_router",
]
