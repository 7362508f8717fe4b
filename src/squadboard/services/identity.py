"""Account registration, login lockout and profile management."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.orm import Session

from squadboard.core.errors import (
    AccountLockedError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from squadboard.core.security import hash_password, verify_password
from squadboard.core.settings import settings
from squadboard.db.time import as_utc, utcnow
from squadboard.db.transaction import run_transaction
from squadboard.models import Account

logger = logging.getLogger(__name__)

HANDLE_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")
HANDLE_MAX_LENGTH = 32
DISPLAY_NAME_MAX_LENGTH = 20

PROFILE_FIELDS = frozenset(
    {"display_name", "avatar", "gender", "looking_for", "contact_qq", "contact_wx"}
)


@dataclass(frozen=True)
class LoginOutcome:
    """Result of one pass through the lockout state machine."""

    account: Account | None = None
    remaining_attempts: int = 0
    locked_until: datetime | None = None


class IdentityStore:
    """Accounts keyed by handle, with password verification and lockout."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow) -> None:
        self.db = db
        self.clock = clock

    # --- Registration -------------------------------------------------------------
    def _validate_registration(self, handle: str, password: str, display_name: str | None) -> None:
        if not handle:
            raise ValidationError("Handle is required")
        if handle != settings.admin_handle and len(handle) < settings.handle_min_length:
            raise ValidationError(
                f"Handle must be at least {settings.handle_min_length} characters"
            )
        if len(handle) > HANDLE_MAX_LENGTH:
            raise ValidationError(f"Handle must be at most {HANDLE_MAX_LENGTH} characters")
        if not HANDLE_PATTERN.match(handle):
            raise ValidationError("Handle may only contain letters, digits, '_', '.' and '-'")
        if len(password or "") < settings.password_min_length:
            raise ValidationError(
                f"Password must be at least {settings.password_min_length} characters"
            )
        if not display_name or not display_name.strip():
            raise ValidationError("Nickname is required")

    def register(
        self,
        handle: str,
        password: str,
        display_name: str | None,
        avatar: str | None = None,
    ) -> Account:
        """Create a new account.

        Raises:
            ValidationError: On a short handle/password or a missing nickname.
            ConflictError: If the handle is already registered.
        """
        handle = (handle or "").strip()
        self._validate_registration(handle, password, display_name)
        digest = hash_password(password)

        def work(db: Session) -> Account:
            if db.get(Account, handle) is not None:
                raise ConflictError("Handle is already taken")
            account = Account(
                handle=handle,
                password_digest=digest,
                display_name=(display_name or "").strip()[:DISPLAY_NAME_MAX_LENGTH],
                avatar=avatar or None,
                is_privileged=handle == settings.admin_handle,
                failure_count=0,
                created_at=self.clock(),
            )
            db.add(account)
            return account

        account = run_transaction(self.db, work)
        logger.info("Registered account %s", handle)
        return account

    # --- Login --------------------------------------------------------------------
    def _attempt(self, db: Session, handle: str, password: str) -> LoginOutcome:
        account = db.get(Account, handle)
        if account is None:
            raise AuthenticationError("Account does not exist")

        now = self.clock()
        if account.locked_until is not None:
            locked_until = as_utc(account.locked_until)
            if locked_until > now:
                # Locked: refuse without touching counters or the password.
                return LoginOutcome(locked_until=locked_until)
            account.locked_until = None
            account.failure_count = 0

        if verify_password(password, account.password_digest):
            if account.failure_count or account.last_failed_at is not None:
                account.failure_count = 0
                account.last_failed_at = None
            return LoginOutcome(account=account)

        window = timedelta(minutes=settings.failure_window_minutes)
        if account.last_failed_at is not None and now - as_utc(account.last_failed_at) > window:
            account.failure_count = 0

        account.failure_count += 1
        account.last_failed_at = now
        if account.failure_count >= settings.max_login_failures:
            account.locked_until = now + timedelta(minutes=settings.lockout_minutes)
            return LoginOutcome(locked_until=account.locked_until)
        return LoginOutcome(remaining_attempts=settings.max_login_failures - account.failure_count)

    def login(self, handle: str, password: str) -> Account:
        """Verify a password, driving the lockout state machine.

        Counter changes are committed before any failure is raised.

        Raises:
            AuthenticationError: If the handle is unknown.
            InvalidCredentialsError: Wrong password, attempts remain.
            AccountLockedError: The account is, or has just become, locked.
        """
        handle = (handle or "").strip()
        if not handle or not password:
            raise ValidationError("Handle and password are required")

        outcome = run_transaction(self.db, lambda db: self._attempt(db, handle, password))
        if outcome.account is not None:
            return outcome.account
        if outcome.locked_until is not None:
            logger.warning("Login refused for locked account %s", handle)
            raise AccountLockedError(outcome.locked_until)
        logger.info(
            "Failed login for %s, %d attempt(s) remaining", handle, outcome.remaining_attempts
        )
        raise InvalidCredentialsError(outcome.remaining_attempts)

    # --- Profiles -----------------------------------------------------------------
    def get_account(self, handle: str) -> Account:
        """Return an account or raise NotFoundError."""
        account = self.db.get(Account, handle)
        if account is None:
            raise NotFoundError("User not found")
        return account

    def get_profile(self, handle: str) -> Account:
        """Return the account whose public profile is requested."""
        return self.get_account((handle or "").strip())

    def update_profile(
        self,
        handle: str,
        requestor_handle: str,
        fields: Mapping[str, Any],
    ) -> Account:
        """Apply profile changes to the requestor's own account."""
        if requestor_handle != handle:
            raise AuthorizationError("You can only edit your own profile")

        changes = {key: value for key, value in fields.items() if key in PROFILE_FIELDS}
        if "display_name" in changes:
            name = (changes["display_name"] or "").strip()
            if not name:
                raise ValidationError("Nickname cannot be empty")
            changes["display_name"] = name[:DISPLAY_NAME_MAX_LENGTH]

        def work(db: Session) -> Account:
            account = db.get(Account, handle)
            if account is None:
                raise NotFoundError("User not found")
            for key, value in changes.items():
                setattr(account, key, value)
            return account

        return run_transaction(self.db, work)

    def delete_account(self, handle: str, requestor: Account) -> None:
        """Remove an account with its posts and comments; privileged callers only."""
        requestor_handle = requestor.handle
        if not requestor.is_privileged:
            raise AuthorizationError("Only administrators can delete accounts")

        def work(db: Session) -> None:
            account = db.get(Account, handle)
            if account is None:
                raise NotFoundError("User not found")
            # Comments left on other authors' posts disappear with the account.
            for comment in account.comments:
                post = comment.post
                if post.author_handle != handle:
                    post.comment_count = max(0, post.comment_count - 1)
            db.delete(account)

        run_transaction(self.db, work)
        logger.info("Account %s deleted by %s", handle, requestor_handle)
