"""Error taxonomy for student merges."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID


class MergeSide(StrEnum):
    SOURCE = "source"
    TARGET = "target"


class InvalidMergeReason(StrEnum):
    SELF_MERGE = "self_merge"
    SOURCE_CLAIMED = "source_claimed"
    TARGET_UNCLAIMED = "target_unclaimed"


_REASON_MESSAGES: dict[InvalidMergeReason, str] = {
    InvalidMergeReason.SELF_MERGE: "Cannot merge a student into itself",
    InvalidMergeReason.SOURCE_CLAIMED: (
        "Source student is already linked to a dancer account. "
        "Only unlinked students can be merged."
    ),
    InvalidMergeReason.TARGET_UNCLAIMED: "Target student must be linked to a dancer account",
}


class MergeError(Exception):
    """Base class for every failure surfaced by the merge engine."""


class NotFoundError(MergeError):
    """The source or target student does not exist."""

    def __init__(self, student_id: UUID, side: MergeSide) -> None:
        super().__init__(f"{side.value.capitalize()} student {student_id} not found")
        self.student_id = student_id
        self.side = side


class InvalidOperationError(MergeError):
    """A merge precondition on the identities themselves failed."""

    def __init__(self, reason: InvalidMergeReason) -> None:
        super().__init__(_REASON_MESSAGES[reason])
        self.reason = reason


class ConflictRetryableError(MergeError):
    """The store rejected the transaction because of a concurrent write.

    Retrying the whole merge from scratch is safe.
    """


class TransactionTimeoutError(MergeError):
    """The transaction was cancelled or timed out; nothing was committed."""


class StoreError(MergeError):
    """The store rejected a statement (integrity violation or driver failure)."""


class FatalInconsistencyError(MergeError):
    """The source student could not be deleted after its records were moved.

    The transaction is rolled back, so the store is unchanged, but this points at
    a store-level defect such as a reference not covered by the relation catalog.
    """

    def __init__(self, source_id: UUID, target_id: UUID) -> None:
        super().__init__(
            f"Failed to delete source student {source_id} after merging into {target_id}"
        )
        self.source_id = source_id
        self.target_id = target_id
