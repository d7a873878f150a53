"""Initial schema: students and their dependent records.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _id_column() -> sa.Column[object]:
    return sa.Column("id", sa.Uuid(), nullable=False)


def _student_id_column() -> sa.Column[object]:
    return sa.Column("student_id", sa.Uuid(), nullable=False)


def _student_fk(table_name: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        ["student_id"],
        ["student.id"],
        name=f"fk_{table_name}_{table_name}_student_id_student",
    )


def upgrade() -> None:
    op.create_table(
        "student",
        _id_column(),
        sa.Column("profile_id", sa.Uuid(), nullable=True),
        sa.Column("guardian_id", sa.Uuid(), nullable=True),
        sa.Column("full_name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("age_group", sa.String(), nullable=True),
        sa.Column("skill_level", sa.String(), nullable=True),
        sa.Column("goals", sa.Text(), nullable=True),
        sa.Column("medical_notes", sa.Text(), nullable=True),
        sa.Column("emergency_contact_name", sa.String(), nullable=True),
        sa.Column("emergency_contact_phone", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_student"),
    )
    op.create_index("ix_student_profile_id", "student", ["profile_id"])

    op.create_table(
        "enrollment",
        _id_column(),
        _student_id_column(),
        sa.Column("class_id", sa.Uuid(), nullable=False),
        sa.Column("enrolled_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "attendance_status",
            sa.Enum(
                "PRESENT",
                "ABSENT",
                "LATE",
                "EXCUSED",
                name="attendancestatus",
                native_enum=False,
            ),
            nullable=True,
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        _student_fk("enrollment"),
        sa.PrimaryKeyConstraint("id", name="pk_enrollment"),
        sa.UniqueConstraint("student_id", "class_id", name="uq_enrollment_student_class"),
    )

    op.create_table(
        "note",
        _id_column(),
        _student_id_column(),
        sa.Column("author_id", sa.Uuid(), nullable=False),
        sa.Column("class_id", sa.Uuid(), nullable=True),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "visibility",
            sa.Enum(
                "PRIVATE",
                "SHARED_WITH_STUDENT",
                "SHARED_WITH_GUARDIAN",
                "SHARED_WITH_STUDIO",
                name="notevisibility",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        _student_fk("note"),
        sa.PrimaryKeyConstraint("id", name="pk_note"),
    )
    op.create_index("ix_note_student_id", "note", ["student_id"])

    op.create_table(
        "payment",
        _id_column(),
        _student_id_column(),
        sa.Column("class_id", sa.Uuid(), nullable=True),
        sa.Column("studio_id", sa.Uuid(), nullable=True),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column(
            "payment_method",
            sa.Enum("STRIPE", "CASH", "CHECK", "OTHER", name="paymentmethod", native_enum=False),
            nullable=False,
        ),
        sa.Column(
            "payment_status",
            sa.Enum(
                "PENDING",
                "CONFIRMED",
                "DISPUTED",
                "CANCELLED",
                name="paymentstatus",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column("transaction_date", sa.DateTime(timezone=True), nullable=False),
        _student_fk("payment"),
        sa.PrimaryKeyConstraint("id", name="pk_payment"),
    )
    op.create_index("ix_payment_student_id", "payment", ["student_id"])

    op.create_table(
        "private_lesson_request",
        _id_column(),
        _student_id_column(),
        sa.Column("requested_focus", sa.String(), nullable=True),
        sa.Column("additional_notes", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.Enum(
                "PENDING",
                "APPROVED",
                "SCHEDULED",
                "DECLINED",
                name="lessonrequeststatus",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        _student_fk("private_lesson_request"),
        sa.PrimaryKeyConstraint("id", name="pk_private_lesson_request"),
    )
    op.create_index(
        "ix_private_lesson_request_student_id", "private_lesson_request", ["student_id"]
    )

    op.create_table(
        "lesson_pack_purchase",
        _id_column(),
        _student_id_column(),
        sa.Column("lesson_pack_id", sa.Uuid(), nullable=False),
        sa.Column("lessons_remaining", sa.Integer(), nullable=False),
        sa.Column("purchased_at", sa.DateTime(timezone=True), nullable=False),
        _student_fk("lesson_pack_purchase"),
        sa.PrimaryKeyConstraint("id", name="pk_lesson_pack_purchase"),
    )
    op.create_index(
        "ix_lesson_pack_purchase_student_id", "lesson_pack_purchase", ["student_id"]
    )

    op.create_table(
        "waiver",
        _id_column(),
        _student_id_column(),
        sa.Column("template_id", sa.Uuid(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("signed_at", sa.DateTime(timezone=True), nullable=True),
        _student_fk("waiver"),
        sa.PrimaryKeyConstraint("id", name="pk_waiver"),
    )
    op.create_index("ix_waiver_student_id", "waiver", ["student_id"])

    op.create_table(
        "instructor_student_relationship",
        _id_column(),
        _student_id_column(),
        sa.Column("instructor_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        _student_fk("instructor_student_relationship"),
        sa.PrimaryKeyConstraint("id", name="pk_instructor_student_relationship"),
        sa.UniqueConstraint(
            "student_id", "instructor_id", name="uq_instructor_student_relationship_pair"
        ),
    )


def downgrade() -> None:
    op.drop_table("instructor_student_relationship")
    op.drop_index("ix_waiver_student_id", table_name="waiver")
    op.drop_table("waiver")
    op.drop_index("ix_lesson_pack_purchase_student_id", table_name="lesson_pack_purchase")
    op.drop_table("lesson_pack_purchase")
    op.drop_index("ix_private_lesson_request_student_id", table_name="private_lesson_request")
    op.drop_table("private_lesson_request")
    op.drop_index("ix_payment_student_id", table_name="payment")
    op.drop_table("payment")
    op.drop_index("ix_note_student_id", table_name="note")
    op.drop_table("note")
    op.drop_table("enrollment")
    op.drop_index("ix_student_profile_id", table_name="student")
    op.drop_table("student")
