"""Domain ports (repository and unit-of-work contracts)."""

from __future__ import annotations

from .persistence import (
    DependentRecordRef,
    DependentRecordRepository,
    Repository,
    StudentRepository,
)
from .unit_of_work import MergeRepositories, MergeUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "DependentRecordRef",
    "DependentRecordRepository",
    "MergeRepositories",
    "MergeUnitOfWork",
    "Repository",
    "RepositoryCollection",
    "StudentRepository",
    "UnitOfWork",
]
