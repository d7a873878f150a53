from __future__ import annotations

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from rostermerge.adapters.sqlalchemy.errors import translate_error, translated_errors
from rostermerge.domain.merge import (
    ConflictRetryableError,
    MergeError,
    StoreError,
    TransactionTimeoutError,
)


class _DriverError(Exception):
    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def _operational(message: str, sqlstate: str | None = None) -> DBAPIError:
    return OperationalError(
        "UPDATE enrollment SET student_id = ?", {}, _DriverError(message, sqlstate)
    )


@pytest.mark.parametrize(
    ("sqlstate", "message"),
    [
        ("40001", "could not serialize access due to concurrent update"),
        ("40P01", "deadlock detected"),
        ("55P03", "could not obtain lock on row"),
        (None, "database is locked"),
    ],
)
def test_concurrency_failures_are_retryable(sqlstate: str | None, message: str) -> None:
    assert isinstance(translate_error(_operational(message, sqlstate)), ConflictRetryableError)


@pytest.mark.parametrize(
    ("sqlstate", "message"),
    [("57014", "canceling statement due to statement timeout"), (None, "interrupted")],
)
def test_cancellation_is_a_timeout(sqlstate: str | None, message: str) -> None:
    assert isinstance(translate_error(_operational(message, sqlstate)), TransactionTimeoutError)


def test_integrity_violation_is_a_store_error() -> None:
    exc = IntegrityError("DELETE FROM student", {}, _DriverError("FOREIGN KEY constraint failed"))

    translated = translate_error(exc)

    assert type(translated) is StoreError
    assert "FOREIGN KEY constraint failed" in str(translated)


def test_other_driver_errors_are_store_errors() -> None:
    assert type(translate_error(_operational("disk I/O error"))) is StoreError


def test_context_manager_chains_the_driver_error() -> None:
    original = _operational("database is locked")

    with pytest.raises(MergeError) as excinfo, translated_errors():
        raise original

    assert isinstance(excinfo.value, ConflictRetryableError)
    assert excinfo.value.__cause__ is original


def test_context_manager_ignores_non_driver_errors() -> None:
    with pytest.raises(KeyError), translated_errors():
        raise KeyError("student")
