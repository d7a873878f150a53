from __future__ import annotations

from uuid import uuid4

import pytest

from rostermerge.domain.merge import RelationDescriptor, resolve_conflicts
from rostermerge.domain.model import RelationName
from tests.helpers.students import (
    FakeDependentRecordRepository,
    FakeMergeStore,
    make_record,
    make_student,
)

ENROLLMENTS = RelationDescriptor(RelationName.ENROLLMENTS, other_key="class_id")
NOTES = RelationDescriptor(RelationName.NOTES)


def _repository(store: FakeMergeStore, relation: RelationName) -> FakeDependentRecordRepository:
    return FakeDependentRecordRepository(store, relation)


def test_empty_source_resolves_to_nothing(merge_store: FakeMergeStore) -> None:
    resolution = resolve_conflicts(
        uuid4(), uuid4(), ENROLLMENTS, _repository(merge_store, RelationName.ENROLLMENTS)
    )

    assert resolution.transferable == ()
    assert resolution.conflicting == ()


def test_unconstrained_relation_transfers_everything(merge_store: FakeMergeStore) -> None:
    source, target = make_student(), make_student(claimed=True)
    notes = [
        merge_store.add_record(RelationName.NOTES, make_record(RelationName.NOTES, source.id))
        for _ in range(3)
    ]
    merge_store.add_record(RelationName.NOTES, make_record(RelationName.NOTES, target.id))

    resolution = resolve_conflicts(
        source.id, target.id, NOTES, _repository(merge_store, RelationName.NOTES)
    )

    assert set(resolution.transferable) == {note.id for note in notes}
    assert resolution.conflicting == ()


def test_shared_partner_key_conflicts(merge_store: FakeMergeStore) -> None:
    source, target = make_student(), make_student(claimed=True)
    shared, own = uuid4(), uuid4()
    conflicting = merge_store.add_record(
        RelationName.ENROLLMENTS,
        make_record(RelationName.ENROLLMENTS, source.id, class_id=shared),
    )
    transferable = merge_store.add_record(
        RelationName.ENROLLMENTS,
        make_record(RelationName.ENROLLMENTS, source.id, class_id=own),
    )
    merge_store.add_record(
        RelationName.ENROLLMENTS,
        make_record(RelationName.ENROLLMENTS, target.id, class_id=shared),
    )

    resolution = resolve_conflicts(
        source.id, target.id, ENROLLMENTS, _repository(merge_store, RelationName.ENROLLMENTS)
    )

    assert resolution.transferable == (transferable.id,)
    assert resolution.conflicting == (conflicting.id,)


def test_partition_covers_every_source_record(merge_store: FakeMergeStore) -> None:
    source, target = make_student(), make_student(claimed=True)
    instructors = [uuid4() for _ in range(5)]
    created = [
        merge_store.add_record(
            RelationName.RELATIONSHIPS,
            make_record(RelationName.RELATIONSHIPS, source.id, instructor_id=instructor),
        )
        for instructor in instructors
    ]
    for instructor in instructors[::2]:
        merge_store.add_record(
            RelationName.RELATIONSHIPS,
            make_record(RelationName.RELATIONSHIPS, target.id, instructor_id=instructor),
        )
    descriptor = RelationDescriptor(RelationName.RELATIONSHIPS, other_key="instructor_id")

    resolution = resolve_conflicts(
        source.id, target.id, descriptor, _repository(merge_store, RelationName.RELATIONSHIPS)
    )

    assert len(resolution.conflicting) == 3
    assert len(resolution.transferable) == 2
    assert set(resolution.transferable).isdisjoint(resolution.conflicting)
    assert set(resolution.transferable) | set(resolution.conflicting) == {r.id for r in created}


def test_resolution_does_not_modify_the_store(merge_store: FakeMergeStore) -> None:
    source, target = make_student(), make_student(claimed=True)
    class_id = uuid4()
    for student in (source, target):
        merge_store.add_record(
            RelationName.ENROLLMENTS,
            make_record(RelationName.ENROLLMENTS, student.id, class_id=class_id),
        )

    resolve_conflicts(
        source.id, target.id, ENROLLMENTS, _repository(merge_store, RelationName.ENROLLMENTS)
    )

    assert len(merge_store.records_of(RelationName.ENROLLMENTS, source.id)) == 1
    assert len(merge_store.records_of(RelationName.ENROLLMENTS, target.id)) == 1


def test_partner_keys_require_a_unique_relation(merge_store: FakeMergeStore) -> None:
    with pytest.raises(TypeError):
        _repository(merge_store, RelationName.NOTES).list_other_keys_by_student(uuid4())
