"""Domain error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; `squadboard.main` registers handlers that
turn them into ``{"error": message}`` responses with the matching status.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any


class SquadBoardError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body describing this error."""
        return {"error": self.message}


class ValidationError(SquadBoardError):
    """Malformed or missing input."""

    status_code = 400


class ConflictError(SquadBoardError):
    """A uniqueness constraint (e.g. the account handle) was violated."""

    status_code = 400


class AuthenticationError(SquadBoardError):
    """Login could not be completed."""

    status_code = 400


class InvalidCredentialsError(AuthenticationError):
    """Wrong password; reports how many attempts remain before lockout."""

    def __init__(self, remaining_attempts: int) -> None:
        super().__init__(f"Incorrect password, {remaining_attempts} attempt(s) remaining")
        self.remaining_attempts = remaining_attempts

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, "remaining_attempts": self.remaining_attempts}


class NotAuthenticatedError(SquadBoardError):
    """Missing, malformed or expired bearer token."""

    status_code = 401


class AccountLockedError(SquadBoardError):
    """Too many failed logins; the account is locked until `locked_until`."""

    status_code = 403

    def __init__(self, locked_until: datetime) -> None:
        super().__init__("Account is locked after repeated failed logins, try again later")
        self.locked_until = locked_until

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, "locked_until": self.locked_until.isoformat()}


class AuthorizationError(SquadBoardError):
    """The caller is not allowed to perform the operation."""

    status_code = 403


class NotFoundError(SquadBoardError):
    """The addressed record does not exist."""

    status_code = 404


class UnsupportedOperationError(SquadBoardError):
    """HTTP method not supported by the endpoint."""

    status_code = 405


class DependencyError(SquadBoardError):
    """The backing store is unreachable or kept rejecting the transaction."""

    status_code = 500
