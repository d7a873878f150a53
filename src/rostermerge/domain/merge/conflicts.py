"""Partition a source student's records into transferable and conflicting sets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from rostermerge.domain.merge.catalog import RelationDescriptor
    from rostermerge.domain.ports import DependentRecordRepository


@dataclass(frozen=True, slots=True)
class ConflictResolution:
    """Record ids to reassign to the target and ids the target already covers."""

    transferable: tuple[UUID, ...] = ()
    conflicting: tuple[UUID, ...] = ()


def resolve_conflicts(
    source_id: UUID,
    target_id: UUID,
    descriptor: RelationDescriptor,
    repository: DependentRecordRepository,
) -> ConflictResolution:
    """Classify the source's records for ``descriptor`` without touching the store.

    A source record conflicts when the target already holds a record with the same
    partner key; the target's record always wins. Records of unconstrained
    relations and records without a partner key are always transferable.
    """

    records = repository.list_by_student(source_id)
    if not records:
        return ConflictResolution()
    if not descriptor.is_unique:
        return ConflictResolution(transferable=tuple(record.id for record in records))

    taken = repository.list_other_keys_by_student(target_id)
    transferable: list[UUID] = []
    conflicting: list[UUID] = []
    for record in records:
        if record.other_key is not None and record.other_key in taken:
            conflicting.append(record.id)
        else:
            transferable.append(record.id)
    return ConflictResolution(transferable=tuple(transferable), conflicting=tuple(conflicting))
