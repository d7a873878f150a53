"""Ports for reading, reassigning and deleting student-owned data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from rostermerge.domain.model import Student

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping, Sequence
    from uuid import UUID


@dataclass(frozen=True, slots=True)
class DependentRecordRef:
    """Identity of a dependent record plus its uniqueness partner key (if any)."""

    id: UUID
    other_key: UUID | None = None


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class StudentRepository(Repository[Student], Protocol):
    """Persistence contract for student identities."""

    def get(self, student_id: UUID) -> Student | None: ...

    def get_for_update(self, student_id: UUID) -> Student | None:
        """Load a student and hold a row lock on it until the transaction ends."""
        ...

    def update_fields(self, student_id: UUID, values: Mapping[str, object]) -> None: ...

    def delete(self, student_id: UUID) -> None: ...


@runtime_checkable
class DependentRecordRepository(Protocol):
    """Uniform access to one dependent record collection, keyed by ``student_id``."""

    def list_by_student(self, student_id: UUID) -> Sequence[DependentRecordRef]: ...

    def list_other_keys_by_student(self, student_id: UUID) -> set[UUID]:
        """Return the uniqueness partner keys held by ``student_id``.

        Only meaningful for relations with a (student, other key) constraint.
        """
        ...

    def reassign_student(self, record_ids: Collection[UUID], new_student_id: UUID) -> int:
        """Point ``record_ids`` at ``new_student_id`` and return the rows changed."""
        ...

    def delete_records(self, record_ids: Collection[UUID]) -> int: ...
