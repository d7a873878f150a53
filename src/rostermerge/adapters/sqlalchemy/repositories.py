"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import delete, select, update

from rostermerge.adapters.sqlalchemy.errors import translated_errors
from rostermerge.adapters.sqlalchemy.mappings import student_table
from rostermerge.domain.model import Student, utcnow
from rostermerge.domain.ports import DependentRecordRef

if TYPE_CHECKING:
    import uuid
    from collections.abc import Collection, Mapping, Sequence

    from sqlalchemy import CursorResult, Table
    from sqlalchemy.orm import Session

# identity, claim link and audit columns are never written by a merge
_UPDATABLE_COLUMNS = frozenset(student_table.c.keys()) - {
    "id",
    "profile_id",
    "created_at",
    "updated_at",
}


class SqlAlchemyStudentRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Student) -> None:
        self.session.add(entity)

    def get(self, student_id: uuid.UUID) -> Student | None:
        with translated_errors():
            return self.session.get(Student, student_id)

    def get_for_update(self, student_id: uuid.UUID) -> Student | None:
        # FOR UPDATE is a no-op on SQLite, where BEGIN IMMEDIATE already holds the write lock
        stmt = select(Student).where(student_table.c.id == student_id).with_for_update()
        with translated_errors():
            return self.session.execute(stmt).scalar_one_or_none()

    def update_fields(self, student_id: uuid.UUID, values: Mapping[str, object]) -> None:
        rejected = sorted(set(values) - _UPDATABLE_COLUMNS)
        if rejected:
            raise ValueError(f"Student fields cannot be updated here: {', '.join(rejected)}")
        stmt = (
            update(Student)
            .where(student_table.c.id == student_id)
            .values({**values, "updated_at": utcnow()})
        )
        with translated_errors():
            self.session.execute(stmt)

    def delete(self, student_id: uuid.UUID) -> None:
        stmt = delete(Student).where(student_table.c.id == student_id)
        with translated_errors():
            self.session.execute(stmt)


class SqlAlchemyDependentRecordRepository:
    """Generic access to one student-owned table via its ``student_id`` column."""

    def __init__(self, session: Session, table: Table, other_key: str | None = None) -> None:
        self.session = session
        self._table = table
        self._other_key = table.c[other_key] if other_key is not None else None

    def list_by_student(self, student_id: uuid.UUID) -> Sequence[DependentRecordRef]:
        id_column = self._table.c.id
        if self._other_key is None:
            stmt = select(id_column).where(self._table.c.student_id == student_id)
            with translated_errors():
                ids = self.session.execute(stmt).scalars().all()
            return [DependentRecordRef(id=record_id) for record_id in ids]

        stmt = select(id_column, self._other_key).where(self._table.c.student_id == student_id)
        with translated_errors():
            rows = self.session.execute(stmt).all()
        return [DependentRecordRef(id=record_id, other_key=key) for record_id, key in rows]

    def list_other_keys_by_student(self, student_id: uuid.UUID) -> set[uuid.UUID]:
        if self._other_key is None:
            raise TypeError(f"{self._table.name} has no uniqueness partner key")
        stmt = select(self._other_key).where(self._table.c.student_id == student_id)
        with translated_errors():
            return set(self.session.execute(stmt).scalars().all())

    def reassign_student(
        self, record_ids: Collection[uuid.UUID], new_student_id: uuid.UUID
    ) -> int:
        if not record_ids:
            return 0
        stmt = (
            update(self._table)
            .where(self._table.c.id.in_(list(record_ids)))
            .values(student_id=new_student_id)
        )
        with translated_errors():
            result = cast("CursorResult[object]", self.session.execute(stmt))
        return result.rowcount

    def delete_records(self, record_ids: Collection[uuid.UUID]) -> int:
        if not record_ids:
            return 0
        stmt = delete(self._table).where(self._table.c.id.in_(list(record_ids)))
        with translated_errors():
            result = cast("CursorResult[object]", self.session.execute(stmt))
        return result.rowcount


if TYPE_CHECKING:
    from rostermerge.domain.ports import DependentRecordRepository, StudentRepository

    _session_stub = cast("Session", object())
    _student_repo: StudentRepository = SqlAlchemyStudentRepository(_session_stub)
    _dependent_repo: DependentRecordRepository = SqlAlchemyDependentRecordRepository(
        _session_stub, student_table
    )
