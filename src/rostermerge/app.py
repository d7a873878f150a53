"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from rostermerge.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyMergeUnitOfWork,
    is_started,
    startup,
)
from rostermerge.domain.merge import MERGE_ROLE, require_role
from rostermerge.domain.merge import merge_students as execute_merge
from rostermerge.domain.ports import MergeUnitOfWork

if TYPE_CHECKING:
    from uuid import UUID

    from rostermerge.domain.merge import Actor, MergeReport
    from rostermerge.domain.merge.executor import ConflictHandler

UnitOfWorkFactory = Callable[[], MergeUnitOfWork]


log = getLogger(__name__)


def merge_students(
    source_id: UUID,
    target_id: UUID,
    *,
    actor: Actor | None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    on_conflict: ConflictHandler | None = None,
) -> MergeReport:
    """Merge an unclaimed student into a claimed one on behalf of ``actor``.

    The role gate runs before any store access. Without an explicit factory the
    SQLAlchemy adapter is started (if needed) and used.
    """

    authorized = require_role(actor, MERGE_ROLE)
    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyMergeUnitOfWork

    log.info(
        "Student merge requested by %s (%s): source=%s, target=%s",
        authorized.id,
        authorized.role,
        source_id,
        target_id,
    )
    return execute_merge(
        source_id,
        target_id,
        unit_of_work_factory=unit_of_work_factory,
        on_conflict=on_conflict,
    )
