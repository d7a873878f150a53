from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, text

from rostermerge.adapters.sqlalchemy.repositories import (
    SqlAlchemyDependentRecordRepository,
    SqlAlchemyStudentRepository,
)
from rostermerge.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyMergeUnitOfWork,
    StartupError,
    build_engine,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from rostermerge.config import DatabaseConfig
from rostermerge.domain.model import RelationName, Student
from tests.helpers.students import make_student

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyMergeUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)
    assert is_started()

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_startup_builds_engine_from_config(tmp_path: Path) -> None:
    config = DatabaseConfig(uri=f"sqlite+pysqlite:///{tmp_path / 'configured.db'}")

    startup(database_config=config)

    engine = configured_engine()
    assert engine is not None
    assert engine.url.database == str(tmp_path / "configured.db")


def test_repositories_cover_every_relation(
    sqlite_unit_of_work: Callable[[], SqlAlchemyMergeUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        repositories = uow.repositories
        assert isinstance(repositories.students, SqlAlchemyStudentRepository)
        assert set(repositories.dependents) == set(RelationName)
        assert all(
            isinstance(repository, SqlAlchemyDependentRecordRepository)
            for repository in repositories.dependents.values()
        )


def test_repositories_require_an_open_unit_of_work(
    sqlite_unit_of_work: Callable[[], SqlAlchemyMergeUnitOfWork],
) -> None:
    uow = sqlite_unit_of_work()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_commit_persists_changes(
    sqlite_unit_of_work: Callable[[], SqlAlchemyMergeUnitOfWork],
) -> None:
    student = make_student(claimed=True)

    with sqlite_unit_of_work() as uow:
        uow.repositories.students.add(student)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.students.get(student.id) is not None


def test_leaving_without_commit_discards_changes(
    sqlite_unit_of_work: Callable[[], SqlAlchemyMergeUnitOfWork],
) -> None:
    student = make_student()

    with sqlite_unit_of_work() as uow:
        uow.repositories.students.add(student)
        uow.session.flush()

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.students.get(student.id) is None


def test_exception_rolls_back(
    sqlite_unit_of_work: Callable[[], SqlAlchemyMergeUnitOfWork],
) -> None:
    student = make_student()

    with pytest.raises(RuntimeError), sqlite_unit_of_work() as uow:
        uow.repositories.students.add(student)
        uow.session.flush()
        raise RuntimeError("boom")

    with sqlite_unit_of_work() as uow:
        assert uow.session.get(Student, student.id) is None


def test_sqlite_engine_enforces_foreign_keys(sqlite_engine: Engine) -> None:
    with sqlite_engine.connect() as connection:
        assert connection.execute(text("PRAGMA foreign_keys")).scalar_one() == 1


def test_sqlite_engine_uses_busy_timeout(tmp_path: Path) -> None:
    engine = build_engine(
        DatabaseConfig(uri=f"sqlite+pysqlite:///{tmp_path / 'timeout.db'}", busy_timeout=1.5)
    )
    try:
        with engine.connect() as connection:
            assert connection.execute(text("PRAGMA busy_timeout")).scalar_one() == 1500
    finally:
        engine.dispose()
