"""Student identity merge engine."""

from __future__ import annotations

from .authorization import (
    MERGE_ROLE,
    Actor,
    AuthorizationError,
    ForbiddenError,
    UnauthorizedError,
    require_role,
)
from .catalog import RELATION_CATALOG, RelationDescriptor
from .conflicts import ConflictResolution, resolve_conflicts
from .errors import (
    ConflictRetryableError,
    FatalInconsistencyError,
    InvalidMergeReason,
    InvalidOperationError,
    MergeError,
    MergeSide,
    NotFoundError,
    StoreError,
    TransactionTimeoutError,
)
from .executor import merge_students
from .fields import is_blank, reconcile_fields
from .report import MergeReport

__all__ = [
    "MERGE_ROLE",
    "RELATION_CATALOG",
    "Actor",
    "AuthorizationError",
    "ConflictResolution",
    "ConflictRetryableError",
    "FatalInconsistencyError",
    "ForbiddenError",
    "InvalidMergeReason",
    "InvalidOperationError",
    "MergeError",
    "MergeReport",
    "MergeSide",
    "NotFoundError",
    "RelationDescriptor",
    "StoreError",
    "TransactionTimeoutError",
    "UnauthorizedError",
    "is_blank",
    "merge_students",
    "reconcile_fields",
    "require_role",
    "resolve_conflicts",
]
