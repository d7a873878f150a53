"""SQLAlchemy mapping metadata for the rostermerge domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import Final

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from rostermerge.domain.model import (
    AttendanceStatus,
    Enrollment,
    InstructorRelationship,
    LessonPackPurchase,
    LessonRequest,
    LessonRequestStatus,
    Note,
    NoteVisibility,
    Payment,
    PaymentMethod,
    PaymentStatus,
    RelationName,
    Student,
    StudentOwned,
    Waiver,
)

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _student_id_column() -> Column[uuid.UUID]:
    # no ondelete: a student with dependents left behind cannot be deleted
    return Column("student_id", UUIDColumnType, ForeignKey("student.id"), nullable=False)


# Identity ------------------------------------------------------------------------

student_table = Table(
    "student",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("profile_id", UUIDColumnType, nullable=True),
    Column("guardian_id", UUIDColumnType, nullable=True),
    Column("full_name", String, nullable=True),
    Column("email", String, nullable=True),
    Column("phone", String, nullable=True),
    Column("age_group", String, nullable=True),
    Column("skill_level", String, nullable=True),
    Column("goals", Text, nullable=True),
    Column("medical_notes", Text, nullable=True),
    Column("emergency_contact_name", String, nullable=True),
    Column("emergency_contact_phone", String, nullable=True),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    Index("ix_student_profile_id", "profile_id"),
)

# Dependent records -----------------------------------------------------------------

enrollment_table = Table(
    "enrollment",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    _student_id_column(),
    Column("class_id", UUIDColumnType, nullable=False),
    Column("enrolled_at", UTCDateTime(), nullable=False),
    Column("attendance_status", Enum(AttendanceStatus, native_enum=False), nullable=True),
    Column("notes", Text, nullable=True),
    UniqueConstraint("student_id", "class_id", name="uq_enrollment_student_class"),
)

note_table = Table(
    "note",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    _student_id_column(),
    Column("author_id", UUIDColumnType, nullable=False),
    Column("class_id", UUIDColumnType, nullable=True),
    Column("title", String, nullable=True),
    Column("content", Text, nullable=False),
    Column("visibility", Enum(NoteVisibility, native_enum=False), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    Index("ix_note_student_id", "student_id"),
)

payment_table = Table(
    "payment",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    _student_id_column(),
    Column("class_id", UUIDColumnType, nullable=True),
    Column("studio_id", UUIDColumnType, nullable=True),
    Column("amount_cents", Integer, nullable=False),
    Column("payment_method", Enum(PaymentMethod, native_enum=False), nullable=False),
    Column("payment_status", Enum(PaymentStatus, native_enum=False), nullable=False),
    Column("transaction_date", UTCDateTime(), nullable=False),
    Index("ix_payment_student_id", "student_id"),
)

lesson_request_table = Table(
    "private_lesson_request",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    _student_id_column(),
    Column("requested_focus", String, nullable=True),
    Column("additional_notes", Text, nullable=True),
    Column("status", Enum(LessonRequestStatus, native_enum=False), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    Index("ix_private_lesson_request_student_id", "student_id"),
)

lesson_pack_purchase_table = Table(
    "lesson_pack_purchase",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    _student_id_column(),
    Column("lesson_pack_id", UUIDColumnType, nullable=False),
    Column("lessons_remaining", Integer, nullable=False),
    Column("purchased_at", UTCDateTime(), nullable=False),
    Index("ix_lesson_pack_purchase_student_id", "student_id"),
)

waiver_table = Table(
    "waiver",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    _student_id_column(),
    Column("template_id", UUIDColumnType, nullable=False),
    Column("status", String, nullable=False),
    Column("signed_at", UTCDateTime(), nullable=True),
    Index("ix_waiver_student_id", "student_id"),
)

instructor_relationship_table = Table(
    "instructor_student_relationship",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    _student_id_column(),
    Column("instructor_id", UUIDColumnType, nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    UniqueConstraint(
        "student_id", "instructor_id", name="uq_instructor_student_relationship_pair"
    ),
)

TABLE_BY_RELATION: Final[dict[RelationName, Table]] = {
    RelationName.ENROLLMENTS: enrollment_table,
    RelationName.NOTES: note_table,
    RelationName.PAYMENTS: payment_table,
    RelationName.LESSON_REQUESTS: lesson_request_table,
    RelationName.LESSON_PACK_PURCHASES: lesson_pack_purchase_table,
    RelationName.WAIVERS: waiver_table,
    RelationName.RELATIONSHIPS: instructor_relationship_table,
}

CLASS_BY_TABLE: Final[dict[str, type[StudentOwned]]] = {
    enrollment_table.name: Enrollment,
    note_table.name: Note,
    payment_table.name: Payment,
    lesson_request_table.name: LessonRequest,
    lesson_pack_purchase_table.name: LessonPackPurchase,
    waiver_table.name: Waiver,
    instructor_relationship_table.name: InstructorRelationship,
}


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    # Dependent records keep a plain ``student_id``; no relationship() is mapped so
    # that reassignment is a column update and never an ORM cascade.
    mapper_registry.map_imperatively(Student, student_table)
    for table in TABLE_BY_RELATION.values():
        mapper_registry.map_imperatively(CLASS_BY_TABLE[table.name], table)

    configure_mappers()
    return mapper_registry

