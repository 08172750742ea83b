"""
Repository layer.

Repositories own every query; they flush but never commit.
"""

from app.repositories.base import BaseRepository
from app.repositories.leave import LeaveRequestRepository, LeaveTypeRepository
from app.repositories.user import (
    ManagerStaffRepository,
    RoleRepository,
    UserRepository,
)

__all__ = [
    "BaseRepository",
    "UserRepository",
    "RoleRepository",
    "ManagerStaffRepository",
    "LeaveRequestRepository",
    "LeaveTypeRepository",
]
