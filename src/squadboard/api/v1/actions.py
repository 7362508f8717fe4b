"""Registry mapping (HTTP method, action tag) pairs onto handlers.

Endpoint modules decorate plain functions with `action`; the board route
looks the pair up and invokes the handler with a `RequestContext`.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

from squadboard.api.v1.dependencies import RequestContext
from squadboard.core.errors import ValidationError

Handler = Callable[[RequestContext], dict[str, Any]]

_HANDLERS: dict[tuple[str, str], Handler] = {}


def action(method: str, *names: str) -> Callable[[Handler], Handler]:
    """Register the decorated handler for `method` under each action name.

    An empty name registers the handler used when no action is given.
    """

    def decorator(handler: Handler) -> Handler:
        for name in names:
            key = (method.upper(), name)
            if key in _HANDLERS:
                raise RuntimeError(f"Duplicate handler for {method} action={name!r}")
            _HANDLERS[key] = handler
        return handler

    return decorator


def resolve(method: str, name: str | None) -> Handler:
    """Return the handler for a request or raise ValidationError."""
    handler = _HANDLERS.get((method.upper(), name or ""))
    if handler is None:
        raise ValidationError(f"Unknown action: {name}")
    return handler


def registered_actions() -> list[tuple[str, str]]:
    """Return every registered (method, action) pair, sorted."""
    return sorted(_HANDLERS)
