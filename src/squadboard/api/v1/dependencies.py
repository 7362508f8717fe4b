"""Shared API dependencies for authentication and request context."""

from dataclasses import dataclass, field
from typing import Annotated, Any, TypeVar

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from squadboard.core.errors import NotAuthenticatedError, ValidationError
from squadboard.core.security import decode_access_token
from squadboard.db.session import get_db
from squadboard.models import Account
from squadboard.services.likes import actor_id_for

# Bearer tokens are optional: anonymous callers may still browse and like.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_optional_account(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> Account | None:
    """Return the account named by the bearer token, or None without a token.

    Raises:
        NotAuthenticatedError: If a token is present but invalid, or names an
            account that no longer exists.
    """
    if credentials is None:
        return None
    handle = decode_access_token(credentials.credentials)
    account = db.get(Account, handle)
    if account is None:
        raise NotAuthenticatedError("User not found")
    return account


def get_client_address(request: Request) -> str | None:
    """Return the caller's address, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client is not None:
        return request.client.host
    return None


OptionalAccountDep = Annotated[Account | None, Depends(get_optional_account)]


@dataclass(frozen=True)
class RequestContext:
    """Everything an action handler needs from the inbound request."""

    db: Session
    account: Account | None
    client_address: str | None
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def actor_id(self) -> str:
        """Identifier used for like dedup (handle or network address)."""
        return actor_id_for(self.account.handle if self.account else None, self.client_address)

    def require_account(self) -> Account:
        """Return the authenticated account or raise NotAuthenticatedError."""
        if self.account is None:
            raise NotAuthenticatedError("Login required")
        return self.account

    def parse(self, model: type[ModelT]) -> ModelT:
        """Validate the request parameters against a payload schema."""
        try:
            return model.model_validate(self.params)
        except PydanticValidationError as err:
            first = err.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            message = first.get("msg", "Invalid request")
            raise ValidationError(f"{location}: {message}" if location else message) from err
