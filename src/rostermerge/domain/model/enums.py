"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    INSTRUCTOR = "instructor"
    DANCER = "dancer"
    GUARDIAN = "guardian"
    STUDIO = "studio"
    ADMIN = "admin"


class RelationName(StrEnum):
    """Dependent record collections that reference a student identity."""

    ENROLLMENTS = "enrollments"
    NOTES = "notes"
    PAYMENTS = "payments"
    LESSON_REQUESTS = "lesson_requests"
    LESSON_PACK_PURCHASES = "lesson_pack_purchases"
    WAIVERS = "waivers"
    RELATIONSHIPS = "relationships"


class AttendanceStatus(StrEnum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class NoteVisibility(StrEnum):
    PRIVATE = "private"
    SHARED_WITH_STUDENT = "shared_with_student"
    SHARED_WITH_GUARDIAN = "shared_with_guardian"
    SHARED_WITH_STUDIO = "shared_with_studio"


class PaymentMethod(StrEnum):
    STRIPE = "stripe"
    CASH = "cash"
    CHECK = "check"
    OTHER = "other"


class PaymentStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DISPUTED = "disputed"
    CANCELLED = "cancelled"


class LessonRequestStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    SCHEDULED = "scheduled"
    DECLINED = "declined"
