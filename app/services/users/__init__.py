"""
User directory and manager-staff assignment services.
"""

from app.services.users.user_management_service import (
    StaffAssignment,
    StaffListResult,
    UserManagementService,
)
from app.services.users.user_service import UserService

__all__ = ["UserService", "UserManagementService", "StaffAssignment", "StaffListResult"]
