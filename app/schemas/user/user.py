"""
User directory schemas.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from app.schemas.common.base import BaseSchema
from app.schemas.user.role import RoleResponse


class UserCreate(BaseSchema):
    """Registration payload (admin only)."""

    email: str = Field(..., max_length=255)
    password: str
    first_name: str
    last_name: str
    role: str
    department: Optional[str] = None
    annual_leave_balance: Optional[Any] = None


class UserUpdate(BaseSchema):
    """Partial update; omitted fields are left unchanged."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    department: Optional[str] = None
    role: Optional[str] = None
    password: Optional[str] = None


class UserSummary(BaseSchema):
    """Owner details nested in leave request payloads."""

    id: int
    email: str
    first_name: str
    last_name: str


class UserResponse(BaseSchema):
    id: int
    email: str
    first_name: str
    last_name: str
    department: Optional[str] = None
    role: RoleResponse
    annual_leave_balance: int
    created_at: datetime
    updated_at: datetime
