"""Declarative registry of the record collections that reference a student.

Adding a dependent relation means adding a :class:`RelationDescriptor` here (and a
repository for it in the persistence adapter); the merge executor iterates the
catalog and has no per-relation control flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from rostermerge.domain.model import RelationName

if TYPE_CHECKING:
    from rostermerge.domain.ports import DependentRecordRepository, MergeRepositories


@dataclass(frozen=True, slots=True)
class RelationDescriptor:
    """One dependent relation and the shape of its uniqueness constraint."""

    name: RelationName
    # attribute that is unique together with ``student_id``; None if unconstrained
    other_key: str | None = None

    @property
    def is_unique(self) -> bool:
        return self.other_key is not None

    def repository(self, repositories: MergeRepositories) -> DependentRecordRepository:
        return repositories.dependent(self.name)


RELATION_CATALOG: Final[tuple[RelationDescriptor, ...]] = (
    RelationDescriptor(RelationName.ENROLLMENTS, other_key="class_id"),
    RelationDescriptor(RelationName.NOTES),
    RelationDescriptor(RelationName.PAYMENTS),
    RelationDescriptor(RelationName.LESSON_REQUESTS),
    RelationDescriptor(RelationName.LESSON_PACK_PURCHASES),
    RelationDescriptor(RelationName.WAIVERS),
    RelationDescriptor(RelationName.RELATIONSHIPS, other_key="instructor_id"),
)

