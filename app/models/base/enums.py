"""
Enumerations shared by models and schemas.
"""

from enum import Enum
from typing import List, Optional, Type

from app.core.permissions import RoleName


class LeaveStatus(str, Enum):
    """Leave request lifecycle status."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"

    @classmethod
    def _missing_(cls, value: object) -> Optional["LeaveStatus"]:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value.lower() == normalized:
                    return member
        return None

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING

    @property
    def holds_dates(self) -> bool:
        """Statuses that block overlapping requests for the same user."""
        return self in (LeaveStatus.PENDING, LeaveStatus.APPROVED)


def enum_values(enum_cls: Type[Enum]) -> List[str]:
    """Persist enum values ("Pending") rather than member names ("PENDING")."""
    return [member.value for member in enum_cls]


__all__ = ["LeaveStatus", "RoleName", "enum_values"]
