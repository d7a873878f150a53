"""SQLAlchemy adapter package for rostermerge."""

from __future__ import annotations

from .errors import translate_error, translated_errors
from .mappings import TABLE_BY_RELATION, mapper_registry, start_mappers
from .repositories import SqlAlchemyDependentRecordRepository, SqlAlchemyStudentRepository
from .unit_of_work import (
    SqlAlchemyMergeUnitOfWork,
    StartupError,
    build_engine,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "TABLE_BY_RELATION",
    "SqlAlchemyDependentRecordRepository",
    "SqlAlchemyMergeUnitOfWork",
    "SqlAlchemyStudentRepository",
    "StartupError",
    "build_engine",
    "configured_engine",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
    "translate_error",
    "translated_errors",
]
