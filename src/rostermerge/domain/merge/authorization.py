"""Role gate that runs before a merge is attempted."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from rostermerge.domain.model import Role

if TYPE_CHECKING:
    from uuid import UUID

MERGE_ROLE: Final[Role] = Role.INSTRUCTOR


@dataclass(frozen=True, slots=True)
class Actor:
    """The authenticated caller requesting an operation."""

    id: UUID
    role: Role


class AuthorizationError(Exception):
    """Base class for role gate failures."""


class UnauthorizedError(AuthorizationError):
    """No authenticated actor."""


class ForbiddenError(AuthorizationError):
    """The actor is authenticated but holds the wrong role."""


def require_role(actor: Actor | None, role: Role) -> Actor:
    """Return ``actor`` if it may act as ``role``; admins may act as any role."""

    if actor is None:
        raise UnauthorizedError("Unauthorized: No authenticated user")
    if actor.role is Role.ADMIN or actor.role is role:
        return actor
    raise ForbiddenError(f"Forbidden: Requires {role} role, but user has {actor.role} role")
