from __future__ import annotations

from uuid import uuid4

from rostermerge.domain.model import PROFILE_FIELDS, Student


def test_student_is_claimed_once_linked_to_a_profile() -> None:
    student = Student()
    assert not student.is_claimed

    student.profile_id = uuid4()

    assert student.is_claimed


def test_profile_values_cover_mergeable_fields() -> None:
    student = Student(age_group="Kids", goals="Recital")

    values = student.profile_values()

    assert tuple(values) == PROFILE_FIELDS
    assert values["age_group"] == "Kids"
    assert values["skill_level"] is None


def test_students_compare_by_identity() -> None:
    first = Student(full_name="Alex")
    second = Student(full_name="Alex")

    assert first != second
    assert first.id != second.id
    assert first.is_active
