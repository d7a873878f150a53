"""Translate driver errors into merge-domain errors at the adapter boundary."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Final

from sqlalchemy.exc import DBAPIError, IntegrityError

from rostermerge.domain.merge.errors import (
    ConflictRetryableError,
    MergeError,
    StoreError,
    TransactionTimeoutError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

# serialization_failure, deadlock_detected, lock_not_available
RETRYABLE_SQLSTATES: Final[frozenset[str]] = frozenset({"40001", "40P01", "55P03"})
# query_canceled (statement_timeout, cancel request)
TIMEOUT_SQLSTATES: Final[frozenset[str]] = frozenset({"57014"})
SQLITE_LOCKED_MESSAGES: Final[tuple[str, ...]] = (
    "database is locked",
    "database table is locked",
)


def _sqlstate(exc: DBAPIError) -> str | None:
    orig = exc.orig
    for attribute in ("sqlstate", "pgcode"):
        value = getattr(orig, attribute, None)
        if isinstance(value, str):
            return value
    return None


def translate_error(exc: DBAPIError) -> MergeError:
    """Map a SQLAlchemy driver error onto the merge error taxonomy."""

    sqlstate = _sqlstate(exc)
    message = str(exc.orig).lower()
    if sqlstate in RETRYABLE_SQLSTATES or any(
        locked in message for locked in SQLITE_LOCKED_MESSAGES
    ):
        return ConflictRetryableError(f"Concurrent write prevented the merge: {exc.orig}")
    if sqlstate in TIMEOUT_SQLSTATES or "interrupted" in message:
        return TransactionTimeoutError(f"Merge transaction was cancelled: {exc.orig}")
    if isinstance(exc, IntegrityError):
        return StoreError(f"Integrity violation: {exc.orig}")
    return StoreError(f"Store error: {exc.orig}")


@contextmanager
def translated_errors() -> Iterator[None]:
    try:
        yield
    except DBAPIError as exc:
        raise translate_error(exc) from exc
