"""
Leave services: request lifecycle, balances and the leave type catalog.
"""

from app.services.leave.leave_balance_service import BalanceView, LeaveBalanceService
from app.services.leave.leave_request_service import (
    LeaveListResult,
    LeaveOutcome,
    LeaveRequestService,
)
from app.services.leave.leave_type_service import LeaveTypeService

__all__ = [
    "LeaveRequestService",
    "LeaveListResult",
    "LeaveOutcome",
    "LeaveBalanceService",
    "BalanceView",
    "LeaveTypeService",
]
