"""The student identity being deduplicated."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from rostermerge.domain.model.base import Entity, utcnow

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from uuid import UUID

# Scalar profile attributes eligible for fill-gap reconciliation, in report order.
PROFILE_FIELDS: Final[tuple[str, ...]] = (
    "age_group",
    "skill_level",
    "goals",
    "medical_notes",
    "emergency_contact_name",
    "emergency_contact_phone",
)


@dataclass(eq=False, kw_only=True)
class Student(Entity):
    """A person tracked by the studio, optionally linked to a login profile.

    ``full_name``/``email``/``phone`` are stored directly while the student is
    unclaimed; once ``profile_id`` is set the linked profile owns them.
    """

    profile_id: UUID | None = None
    guardian_id: UUID | None = None

    full_name: str | None = None
    email: str | None = None
    phone: str | None = None

    age_group: str | None = None
    skill_level: str | None = None
    goals: str | None = None
    medical_notes: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None

    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def is_claimed(self) -> bool:
        return self.profile_id is not None

    def profile_values(self, fields: Sequence[str] = PROFILE_FIELDS) -> dict[str, object]:
        return {name: getattr(self, name, None) for name in fields}
