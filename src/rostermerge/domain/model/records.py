"""Dependent records that reference a student identity.

Every record carries a plain ``student_id`` reference; none of them hold an
in-memory back-reference to :class:`Student`, so reassigning a record is a
single column update.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rostermerge.domain.model.base import StudentOwned, utcnow
from rostermerge.domain.model.enums import (
    AttendanceStatus,
    LessonRequestStatus,
    NoteVisibility,
    PaymentMethod,
    PaymentStatus,
)

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class Enrollment(StudentOwned):
    """Unique per (student, class)."""

    class_id: UUID
    enrolled_at: datetime = field(default_factory=utcnow)
    attendance_status: AttendanceStatus | None = None
    notes: str | None = None


@dataclass(eq=False, kw_only=True)
class Note(StudentOwned):
    author_id: UUID
    content: str
    class_id: UUID | None = None
    title: str | None = None
    visibility: NoteVisibility = NoteVisibility.PRIVATE
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(eq=False, kw_only=True)
class Payment(StudentOwned):
    amount_cents: int
    payment_method: PaymentMethod
    payment_status: PaymentStatus = PaymentStatus.PENDING
    class_id: UUID | None = None
    studio_id: UUID | None = None
    transaction_date: datetime = field(default_factory=utcnow)


@dataclass(eq=False, kw_only=True)
class LessonRequest(StudentOwned):
    """A private lesson request."""

    requested_focus: str | None = None
    additional_notes: str | None = None
    status: LessonRequestStatus = LessonRequestStatus.PENDING
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(eq=False, kw_only=True)
class LessonPackPurchase(StudentOwned):
    lesson_pack_id: UUID
    lessons_remaining: int
    purchased_at: datetime = field(default_factory=utcnow)


@dataclass(eq=False, kw_only=True)
class Waiver(StudentOwned):
    template_id: UUID
    status: str = "pending"
    signed_at: datetime | None = None


@dataclass(eq=False, kw_only=True)
class InstructorRelationship(StudentOwned):
    """Unique per (student, instructor)."""

    instructor_id: UUID
    created_at: datetime = field(default_factory=utcnow)
