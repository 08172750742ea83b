"""
Leave balance schemas.
"""

from typing import Any, Optional

from app.schemas.common.base import BaseSchema


class BalanceResponse(BaseSchema):
    user_id: int
    email: str
    annual_leave_balance: int


class BalanceUpdateRequest(BaseSchema):
    # Left untyped; the service reports non-numeric values as InvalidValue
    annual_leave_balance: Optional[Any] = None
