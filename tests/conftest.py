from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from rostermerge.adapters.sqlalchemy import start_mappers
from rostermerge.adapters.sqlalchemy.migrations import upgrade_head
from rostermerge.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyMergeUnitOfWork,
    build_engine,
    shutdown,
    startup,
)
from rostermerge.config import DatabaseConfig
from tests.helpers.students import FakeMergeStore

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

# short enough that lock contention tests fail fast
TEST_BUSY_TIMEOUT = 0.2


@pytest.fixture
def sqlite_engine(tmp_path: Path) -> Iterator[Engine]:
    # file-backed: every connection must see the same database for locking to apply
    config = DatabaseConfig(
        uri=f"sqlite+pysqlite:///{tmp_path / 'rostermerge.db'}",
        busy_timeout=TEST_BUSY_TIMEOUT,
    )
    engine = build_engine(config)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session_factory(sqlite_engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=sqlite_engine, expire_on_commit=False)


@pytest.fixture
def sqlite_session(sqlite_session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = sqlite_session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyMergeUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyMergeUnitOfWork:
        return SqlAlchemyMergeUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def merge_store() -> FakeMergeStore:
    return FakeMergeStore()
