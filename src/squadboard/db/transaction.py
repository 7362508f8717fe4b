"""Optimistic read-modify-write transactions with bounded retry.

Every mutable document row maps a ``version`` column as SQLAlchemy's
``version_id_col``. When two requests read the same version and both try to
write, the second UPDATE matches no row and the flush raises
``StaleDataError``; an insert racing another insert on the same key raises
``IntegrityError``. `run_transaction` rolls back and re-runs the whole unit of
work in either case, so callers observe compare-and-swap semantics.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from squadboard.core.errors import DependencyError
from squadboard.core.settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_ERRORS = (StaleDataError, IntegrityError, OperationalError)


def _backoff(attempt: int) -> None:
    base = max(0.0, settings.transaction_retry_backoff_seconds)
    if base:
        time.sleep(base * attempt * (1 + random.random()))


def run_transaction(
    db: Session,
    work: Callable[[Session], T],
    *,
    max_attempts: int | None = None,
) -> T:
    """Run `work` and commit, retrying the whole unit on write conflicts.

    Args:
        db: Session used for every attempt; it is rolled back between attempts.
        work: Callable performing reads and writes. It must re-read all state it
            depends on, since it may run more than once.
        max_attempts: Override for ``settings.transaction_max_attempts``.

    Returns:
        Whatever `work` returned on the attempt that committed.

    Raises:
        DependencyError: If every attempt conflicted or the store was unreachable.
    """
    attempts = max(1, max_attempts or settings.transaction_max_attempts)
    for attempt in range(1, attempts + 1):
        try:
            result = work(db)
            db.commit()
            return result
        except RETRYABLE_ERRORS as exc:
            db.rollback()
            if attempt == attempts:
                logger.error(
                    "Transaction gave up after %d attempt(s): %s",
                    attempts,
                    exc.__class__.__name__,
                )
                raise DependencyError("Storage is busy, please retry") from exc
            logger.info(
                "Transaction conflict (%s), retrying attempt %d/%d",
                exc.__class__.__name__,
                attempt + 1,
                attempts,
            )
            _backoff(attempt)
        except Exception:
            db.rollback()
            raise

    raise AssertionError("unreachable")  # pragma: no cover
