"""Merge one unclaimed student identity into a claimed one.

The whole procedure runs inside a single unit of work: both student rows are
locked, every catalog relation is moved (conflicts discarded), blank profile
fields on the target are filled from the source, and the source is deleted.
Nothing is committed unless all of that succeeds.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from rostermerge.domain.merge.catalog import RELATION_CATALOG
from rostermerge.domain.merge.conflicts import resolve_conflicts
from rostermerge.domain.merge.errors import (
    ConflictRetryableError,
    FatalInconsistencyError,
    InvalidMergeReason,
    InvalidOperationError,
    MergeSide,
    NotFoundError,
    StoreError,
)
from rostermerge.domain.merge.fields import reconcile_fields
from rostermerge.domain.merge.report import MergeReport
from rostermerge.domain.model import PROFILE_FIELDS

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from rostermerge.domain.merge.catalog import RelationDescriptor
    from rostermerge.domain.merge.conflicts import ConflictResolution
    from rostermerge.domain.model import RelationName, Student
    from rostermerge.domain.ports import MergeRepositories, MergeUnitOfWork, StudentRepository

    ConflictHandler = Callable[[RelationDescriptor, ConflictResolution], None]

log = logging.getLogger(__name__)


def merge_students(
    source_id: UUID,
    target_id: UUID,
    *,
    unit_of_work_factory: Callable[[], MergeUnitOfWork],
    catalog: Sequence[RelationDescriptor] = RELATION_CATALOG,
    mergeable_fields: Sequence[str] = PROFILE_FIELDS,
    on_conflict: ConflictHandler | None = None,
) -> MergeReport:
    """Merge ``source_id`` into ``target_id`` and return what moved.

    ``on_conflict`` sees every non-empty conflict set before it is discarded;
    raising from it aborts the merge.
    """

    if source_id == target_id:
        log.warning("Rejected self-merge of student %s", source_id)
        raise InvalidOperationError(InvalidMergeReason.SELF_MERGE)

    log.info("Merging student %s into %s", source_id, target_id)

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        source, target = _lock_students(repositories.students, source_id, target_id)
        _check_claims(source, target)

        transferred: dict[RelationName, int] = {}
        discarded: dict[RelationName, int] = {}
        for descriptor in catalog:
            moved, dropped = _merge_relation(
                descriptor,
                repositories,
                source_id=source_id,
                target_id=target_id,
                on_conflict=on_conflict,
            )
            transferred[descriptor.name] = moved
            discarded[descriptor.name] = dropped

        updates = reconcile_fields(
            source.profile_values(mergeable_fields),
            target.profile_values(mergeable_fields),
            mergeable_fields,
        )
        if updates:
            repositories.students.update_fields(target_id, updates)

        _delete_source(repositories.students, source_id, target_id)

        report = MergeReport(
            merged_into_id=target_id,
            source_id=source_id,
            transferred_counts=MappingProxyType(transferred),
            discarded_counts=MappingProxyType(discarded),
            reconciled_fields=tuple(updates),
        )
        uow.commit()

    log.info(
        "Merged student %s into %s: transferred=%s, discarded=%s, reconciled=%s",
        source_id,
        target_id,
        report.total_transferred,
        sum(report.discarded_counts.values()),
        list(report.reconciled_fields),
    )
    return report


def _lock_students(
    students: StudentRepository,
    source_id: UUID,
    target_id: UUID,
) -> tuple[Student, Student]:
    # fixed lock order so two merges sharing a student cannot deadlock
    locked = {
        student_id: students.get_for_update(student_id)
        for student_id in sorted((source_id, target_id))
    }
    source = locked[source_id]
    if source is None:
        log.warning("Source student %s not found", source_id)
        raise NotFoundError(source_id, MergeSide.SOURCE)
    target = locked[target_id]
    if target is None:
        log.warning("Target student %s not found", target_id)
        raise NotFoundError(target_id, MergeSide.TARGET)
    return source, target


def _check_claims(source: Student, target: Student) -> None:
    if source.is_claimed:
        log.warning("Source student %s is claimed by profile %s", source.id, source.profile_id)
        raise InvalidOperationError(InvalidMergeReason.SOURCE_CLAIMED)
    if not target.is_claimed:
        log.warning("Target student %s is not claimed", target.id)
        raise InvalidOperationError(InvalidMergeReason.TARGET_UNCLAIMED)


def _merge_relation(
    descriptor: RelationDescriptor,
    repositories: MergeRepositories,
    *,
    source_id: UUID,
    target_id: UUID,
    on_conflict: ConflictHandler | None,
) -> tuple[int, int]:
    repository = descriptor.repository(repositories)
    resolution = resolve_conflicts(source_id, target_id, descriptor, repository)

    if resolution.conflicting:
        if on_conflict is not None:
            on_conflict(descriptor, resolution)
        log.info(
            "Discarding %d %s of student %s already held by %s",
            len(resolution.conflicting),
            descriptor.name,
            source_id,
            target_id,
        )
        deleted = repository.delete_records(resolution.conflicting)
        if deleted != len(resolution.conflicting):
            raise ConflictRetryableError(
                f"{descriptor.name}: expected to discard {len(resolution.conflicting)} "
                f"records, store deleted {deleted}"
            )

    moved = 0
    if resolution.transferable:
        moved = repository.reassign_student(resolution.transferable, target_id)
        if moved != len(resolution.transferable):
            raise ConflictRetryableError(
                f"{descriptor.name}: expected to move {len(resolution.transferable)} "
                f"records, store moved {moved}"
            )

    log.debug(
        "%s: moved=%d discarded=%d", descriptor.name, moved, len(resolution.conflicting)
    )
    return moved, len(resolution.conflicting)


def _delete_source(students: StudentRepository, source_id: UUID, target_id: UUID) -> None:
    try:
        students.delete(source_id)
    except StoreError as exc:
        log.error(  # noqa: TRY400
            "Store refused to delete source student %s after merging into %s: %s",
            source_id,
            target_id,
            exc,
        )
        raise FatalInconsistencyError(source_id, target_id) from exc
