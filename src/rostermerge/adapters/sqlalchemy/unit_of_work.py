"""SQLAlchemy-backed unit of work for student merges."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from rostermerge.adapters.sqlalchemy.errors import translated_errors
from rostermerge.adapters.sqlalchemy.mappings import TABLE_BY_RELATION, start_mappers
from rostermerge.adapters.sqlalchemy.migrations import upgrade_head
from rostermerge.adapters.sqlalchemy.repositories import (
    SqlAlchemyDependentRecordRepository,
    SqlAlchemyStudentRepository,
)
from rostermerge.config import get_database_config
from rostermerge.domain.merge.catalog import RELATION_CATALOG
from rostermerge.domain.ports import MergeRepositories, RepositoryCollection

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Connection, Engine

    from rostermerge.config import DatabaseConfig

log = logging.getLogger(__name__)

ISOLATION_LEVEL = "SERIALIZABLE"


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


def _sqlite_on_connect(dbapi_connection: Any, _connection_record: object) -> None:
    # let SQLAlchemy, not pysqlite, decide when transactions start
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def _sqlite_on_begin(connection: Connection) -> None:
    # take the write lock up front so concurrent merges serialize
    connection.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(config: DatabaseConfig) -> Engine:
    """Create an engine whose transactions are serializable."""

    if config.uri.startswith("sqlite"):
        engine = create_engine(
            config.uri,
            future=True,
            connect_args={"timeout": config.busy_timeout},
        )
        event.listen(engine, "connect", _sqlite_on_connect)
        event.listen(engine, "begin", _sqlite_on_begin)
        return engine
    return create_engine(config.uri, future=True, isolation_level=ISOLATION_LEVEL)


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call rostermerge.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_config: DatabaseConfig | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine, schema, and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or build_engine(database_config or get_database_config())
    start_mappers()
    upgrade_head(engine=resolved_engine)
    log.info("SQLAlchemy adapter started on %s", resolved_engine.url.render_as_string())

    _STATE.engine = resolved_engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """Generic SQLAlchemy unit of work with pluggable repository collections."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.session_factory
        self._session: Session | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        self.session = self.session_factory()
        self._repositories = self._build_repositories(self.session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        # anything not committed explicitly is rolled back by close()
        if exc_type is not None:
            self.rollback()
        self.session.close()
        self.session = None
        return False

    def commit(self) -> None:
        with translated_errors():
            self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> TRepositories:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


class SqlAlchemyMergeUnitOfWork(BaseSqlAlchemyUnitOfWork[MergeRepositories]):
    """Unit of work managing one serializable session for a student merge."""

    def _build_repositories(self, session: Session) -> MergeRepositories:
        return MergeRepositories(
            students=SqlAlchemyStudentRepository(session),
            dependents={
                descriptor.name: SqlAlchemyDependentRecordRepository(
                    session,
                    TABLE_BY_RELATION[descriptor.name],
                    other_key=descriptor.other_key,
                )
                for descriptor in RELATION_CATALOG
            },
        )


if TYPE_CHECKING:
    from rostermerge.domain.ports import MergeUnitOfWork

    _uow_check: MergeUnitOfWork = SqlAlchemyMergeUnitOfWork()
