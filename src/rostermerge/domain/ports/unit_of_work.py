"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from rostermerge.domain.model import RelationName
    from rostermerge.domain.ports.persistence import (
        DependentRecordRepository,
        StudentRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection.

    Everything done through ``repositories`` between ``__enter__`` and ``commit``
    is one transaction. Leaving the block with an exception rolls it back, and
    leaving it without ``commit`` discards the work as well.
    """

    @property
    def repositories(self) -> TRepositories: ...  # the repo list itself should be immutable

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class MergeRepositories(RepositoryCollection):
    """Repositories required to merge two student identities."""

    students: StudentRepository
    dependents: Mapping[RelationName, DependentRecordRepository]

    def dependent(self, name: RelationName) -> DependentRecordRepository:
        return self.dependents[name]


type MergeUnitOfWork = UnitOfWork[MergeRepositories]
