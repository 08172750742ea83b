"""
User-related models.
"""

from app.models.user.manager_staff import ManagerStaffMapping
from app.models.user.role import Role
from app.models.user.user import User

__all__ = ["User", "Role", "ManagerStaffMapping"]
