# src/squadboard/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import board_router, guestbook_router

__all__ = [
    "board_router",
    "guestbook_router",
]
