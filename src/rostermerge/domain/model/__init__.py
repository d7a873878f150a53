"""Public domain model surface."""

from __future__ import annotations

from rostermerge.domain.model.base import Entity, StudentOwned, new_id, utcnow
from rostermerge.domain.model.enums import (
    AttendanceStatus,
    LessonRequestStatus,
    NoteVisibility,
    PaymentMethod,
    PaymentStatus,
    RelationName,
    Role,
)
from rostermerge.domain.model.records import (
    Enrollment,
    InstructorRelationship,
    LessonPackPurchase,
    LessonRequest,
    Note,
    Payment,
    Waiver,
)
from rostermerge.domain.model.student import PROFILE_FIELDS, Student

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "StudentOwned",
    "new_id",
    "utcnow",
    # enums
    "AttendanceStatus",
    "LessonRequestStatus",
    "NoteVisibility",
    "PaymentMethod",
    "PaymentStatus",
    "RelationName",
    "Role",
    # student
    "PROFILE_FIELDS",
    "Student",
    # dependent records
    "Enrollment",
    "InstructorRelationship",
    "LessonPackPurchase",
    "LessonRequest",
    "Note",
    "Payment",
    "Waiver",
]
