"""Fill-gap reconciliation of scalar profile attributes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rostermerge.domain.model import PROFILE_FIELDS

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


def is_blank(value: object) -> bool:
    return value is None or value == ""


def reconcile_fields(
    source: Mapping[str, object],
    target: Mapping[str, object],
    fields: Sequence[str] = PROFILE_FIELDS,
) -> dict[str, object]:
    """Return the partial update that fills the target's blank fields from the source.

    A field the target already holds is never overwritten. Keys outside ``fields``
    are ignored on both sides.
    """

    updates: dict[str, object] = {}
    for name in fields:
        source_value = source.get(name)
        if is_blank(target.get(name)) and not is_blank(source_value):
            updates[name] = source_value
    return updates
