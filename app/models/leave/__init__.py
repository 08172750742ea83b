"""
Leave management models.
"""

from app.models.leave.leave_request import LeaveRequest
from app.models.leave.leave_type import LeaveType

__all__ = ["LeaveRequest", "LeaveType"]
