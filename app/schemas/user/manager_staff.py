"""
Manager-staff assignment schemas.
"""

from datetime import date
from typing import Any, Optional

from app.schemas.common.base import BaseSchema


class AssignManagerRequest(BaseSchema):
    """
    Assignment payload.

    Ids and dates are taken loosely here and validated by the service so
    that missing and malformed values map to their own error kinds.
    """

    staff_id: Optional[Any] = None
    manager_id: Optional[Any] = None
    start_date: Optional[Any] = None
    end_date: Optional[Any] = None


class MappingResponse(BaseSchema):
    id: int
    staff_id: int
    manager_id: int
    start_date: date
    end_date: Optional[date] = None


class StaffMemberResponse(BaseSchema):
    """A staff user currently mapped to a manager."""

    id: int
    email: str
    first_name: str
    last_name: str
    department: Optional[str] = None
    assigned_since: date
    assigned_until: Optional[date] = None
