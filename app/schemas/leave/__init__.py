from app.schemas.leave.leave_balance import BalanceResponse, BalanceUpdateRequest
from app.schemas.leave.leave_request import (
    LeaveDecisionResponse,
    LeaveRequestCreate,
    LeaveRequestCreatedResponse,
    LeaveRequestResponse,
    RejectLeaveRequest,
)
from app.schemas.leave.leave_type import LeaveTypeCreate, LeaveTypeResponse, LeaveTypeUpdate

__all__ = [
    "LeaveRequestCreate",
    "LeaveRequestResponse",
    "LeaveRequestCreatedResponse",
    "LeaveDecisionResponse",
    "RejectLeaveRequest",
    "BalanceResponse",
    "BalanceUpdateRequest",
    "LeaveTypeCreate",
    "LeaveTypeUpdate",
    "LeaveTypeResponse",
]
