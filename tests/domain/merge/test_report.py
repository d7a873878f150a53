from __future__ import annotations

from types import MappingProxyType
from uuid import uuid4

from rostermerge.domain.merge import MergeReport
from rostermerge.domain.model import RelationName


def test_payload_uses_camel_case_keys() -> None:
    target_id = uuid4()
    report = MergeReport(
        merged_into_id=target_id,
        source_id=uuid4(),
        transferred_counts=MappingProxyType(
            {
                RelationName.ENROLLMENTS: 2,
                RelationName.NOTES: 1,
                RelationName.PAYMENTS: 0,
                RelationName.LESSON_REQUESTS: 0,
                RelationName.LESSON_PACK_PURCHASES: 3,
                RelationName.WAIVERS: 1,
                RelationName.RELATIONSHIPS: 0,
            }
        ),
        discarded_counts=MappingProxyType({RelationName.ENROLLMENTS: 1}),
        reconciled_fields=("skill_level", "emergency_contact_name"),
    )

    payload = report.to_payload()

    assert payload == {
        "mergedIntoId": str(target_id),
        "transferredCounts": {
            "enrollments": 2,
            "notes": 1,
            "payments": 0,
            "lessonRequests": 0,
            "lessonPackPurchases": 3,
            "waivers": 1,
            "relationships": 0,
        },
        "discardedCounts": {"enrollments": 1},
        "reconciledFields": ["skill_level", "emergency_contact_name"],
    }
    assert report.total_transferred == 7


def test_empty_report() -> None:
    report = MergeReport(merged_into_id=uuid4(), source_id=uuid4())

    assert report.total_transferred == 0
    assert report.to_payload()["transferredCounts"] == {}
