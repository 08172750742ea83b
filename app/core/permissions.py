# app/core/permissions.py
"""
Role and capability model.

Roles form a closed enumeration; each role is granted a fixed set of
capabilities and services check capabilities explicitly rather than
comparing role names.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional

from app.core.constants import ErrorMessages
from app.core.exceptions import ForbiddenError


class RoleName(str, Enum):
    """User role enumeration."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"

    @classmethod
    def _missing_(cls, value: object) -> Optional["RoleName"]:
        # Role names arrive from tokens and request bodies in any casing
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class Capability(str, Enum):
    """Fine-grained actions a role may perform."""

    REQUEST_LEAVE = "leave.request"
    VIEW_OWN_LEAVE = "leave.view_own"
    CANCEL_OWN_LEAVE = "leave.cancel_own"
    CANCEL_ANY_LEAVE = "leave.cancel_any"
    REVIEW_LEAVE = "leave.review"
    VIEW_TEAM_LEAVE = "leave.view_team"
    VIEW_ALL_LEAVE = "leave.view_all"
    VIEW_TEAM_BALANCE = "balance.view_team"
    VIEW_ANY_BALANCE = "balance.view_any"
    OVERWRITE_BALANCE = "balance.overwrite"
    ASSIGN_MANAGERS = "users.assign_managers"
    VIEW_USERS = "users.view"
    MANAGE_USERS = "users.manage"
    MANAGE_LEAVE_TYPES = "leave_types.manage"


_STAFF_CAPABILITIES: FrozenSet[Capability] = frozenset({
    Capability.REQUEST_LEAVE,
    Capability.VIEW_OWN_LEAVE,
    Capability.CANCEL_OWN_LEAVE,
})

_MANAGER_CAPABILITIES: FrozenSet[Capability] = _STAFF_CAPABILITIES | {
    Capability.REVIEW_LEAVE,
    Capability.VIEW_TEAM_LEAVE,
    Capability.VIEW_TEAM_BALANCE,
    Capability.VIEW_USERS,
}

ROLE_CAPABILITIES: Dict[RoleName, FrozenSet[Capability]] = {
    RoleName.STAFF: _STAFF_CAPABILITIES,
    RoleName.MANAGER: _MANAGER_CAPABILITIES,
    RoleName.ADMIN: frozenset(Capability),
}


@dataclass(frozen=True)
class Principal:
    """
    Authenticated caller as resolved from a bearer token.

    Attributes:
        email: Email claim identifying the user record
        role: Role claim, already parsed into the closed enum
    """
    email: str
    role: RoleName


def has_capability(principal: Principal, capability: Capability) -> bool:
    """Check whether the principal's role grants a capability."""
    return capability in ROLE_CAPABILITIES.get(principal.role, frozenset())


def require_capability(
    principal: Principal,
    capability: Capability,
    *,
    error_message: Optional[str] = None,
) -> None:
    """
    Assert that the principal's role grants a capability.

    Raises:
        ForbiddenError: If the capability is not granted
    """
    if not has_capability(principal, capability):
        raise ForbiddenError(
            error_message or ErrorMessages.ACCESS_DENIED,
            required_capability=capability.value,
        )
