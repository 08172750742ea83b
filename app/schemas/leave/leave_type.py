"""
Leave type catalog schemas.
"""

from datetime import datetime
from typing import Any, Optional

from app.schemas.common.base import BaseSchema


class LeaveTypeCreate(BaseSchema):
    name: Optional[str] = None
    description: Optional[str] = None
    default_balance: Any = 25
    max_rollover: Any = 5


class LeaveTypeUpdate(BaseSchema):
    name: Optional[str] = None
    description: Optional[str] = None
    default_balance: Optional[Any] = None
    max_rollover: Optional[Any] = None


class LeaveTypeResponse(BaseSchema):
    id: int
    name: str
    description: Optional[str] = None
    default_balance: int
    max_rollover: int
    created_at: datetime
    updated_at: datetime
