"""Outcome of a completed merge."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from rostermerge.domain.model import RelationName


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _counts_payload(counts: Mapping[RelationName, int]) -> dict[str, int]:
    return {_camel(name.value): count for name, count in counts.items()}


@dataclass(frozen=True, slots=True)
class MergeReport:
    """Per-relation counts plus the surviving identity.

    ``transferred_counts`` holds the number of records whose ``student_id`` moved
    from source to target; ``discarded_counts`` the source records deleted because
    the target already covered their partner key.
    """

    merged_into_id: UUID
    source_id: UUID
    transferred_counts: Mapping[RelationName, int] = field(
        default_factory=lambda: MappingProxyType({})
    )
    discarded_counts: Mapping[RelationName, int] = field(
        default_factory=lambda: MappingProxyType({})
    )
    reconciled_fields: tuple[str, ...] = ()

    @property
    def total_transferred(self) -> int:
        return sum(self.transferred_counts.values())

    def to_payload(self) -> dict[str, object]:
        return {
            "mergedIntoId": str(self.merged_into_id),
            "transferredCounts": _counts_payload(self.transferred_counts),
            "discardedCounts": _counts_payload(self.discarded_counts),
            "reconciledFields": list(self.reconciled_fields),
        }
