from __future__ import annotations

import pytest

from rostermerge.domain.merge import is_blank, reconcile_fields
from rostermerge.domain.model import PROFILE_FIELDS


@pytest.mark.parametrize("value", [None, ""])
def test_blank_values(value: object) -> None:
    assert is_blank(value)


@pytest.mark.parametrize("value", ["Beginner", " x ", "   ", "\t\n", 0, False])
def test_present_values(value: object) -> None:
    assert not is_blank(value)


def test_fills_only_blank_target_fields() -> None:
    source = {"age_group": "Adult", "skill_level": "Advanced", "goals": "Showcase"}
    target = {"age_group": None, "skill_level": "Beginner", "goals": ""}

    updates = reconcile_fields(source, target)

    assert updates == {"age_group": "Adult", "goals": "Showcase"}


def test_never_overwrites_present_target_values() -> None:
    source = dict.fromkeys(PROFILE_FIELDS, "from source")
    target = dict.fromkeys(PROFILE_FIELDS, "from target")

    assert reconcile_fields(source, target) == {}


def test_blank_source_values_are_not_copied() -> None:
    source = {"medical_notes": "", "emergency_contact_name": None}
    target: dict[str, object] = {}

    assert reconcile_fields(source, target) == {}


def test_updates_follow_field_order() -> None:
    source = dict.fromkeys(PROFILE_FIELDS, "value")

    updates = reconcile_fields(source, {})

    assert tuple(updates) == PROFILE_FIELDS


def test_ignores_fields_outside_the_mergeable_set() -> None:
    source = {"full_name": "Jordan", "goals": "Flexibility"}

    updates = reconcile_fields(source, {}, fields=("goals",))

    assert updates == {"goals": "Flexibility"}


def test_whitespace_target_value_is_kept() -> None:
    source = {"goals": "Improve turns"}
    target = {"goals": "  "}

    assert reconcile_fields(source, target) == {}
