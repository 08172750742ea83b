# models/__init__.py
from .base import Base, BaseModel, LeaveStatus, RoleName, TimestampModel
from .leave import LeaveRequest, LeaveType
from .user import ManagerStaffMapping, Role, User

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "LeaveStatus",
    "RoleName",
    "Role",
    "User",
    "ManagerStaffMapping",
    "LeaveRequest",
    "LeaveType",
]
