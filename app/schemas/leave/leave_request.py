"""
Leave request schemas.
"""

from datetime import date, datetime
from typing import Optional

from app.models.base.enums import LeaveStatus
from app.schemas.common.base import BaseSchema
from app.schemas.user.user import UserSummary


class LeaveRequestCreate(BaseSchema):
    """
    Submission payload.

    Dates are accepted as raw strings and validated by the service, so
    an unparseable date surfaces as a field violation rather than a
    framework error.
    """

    start_date: Optional[str] = None
    end_date: Optional[str] = None
    leave_type: Optional[str] = None
    reason: Optional[str] = None


class RejectLeaveRequest(BaseSchema):
    reason: Optional[str] = None


class LeaveRequestResponse(BaseSchema):
    id: int
    user_id: int
    user: UserSummary
    leave_type: str
    start_date: date
    end_date: date
    status: LeaveStatus
    reason: Optional[str] = None
    review_note: Optional[str] = None
    reviewed_by_id: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class LeaveRequestCreatedResponse(BaseSchema):
    """
    Created request plus the would-be remaining balance.

    remaining_balance is informational; nothing is debited until approval.
    """

    leave_request: LeaveRequestResponse
    requested_days: int
    remaining_balance: int


class LeaveDecisionResponse(BaseSchema):
    """Request after a transition plus the owner's balance afterwards."""

    leave_request: LeaveRequestResponse
    requested_days: int
    remaining_balance: int
