from app.repositories.user.manager_staff_repository import ManagerStaffRepository
from app.repositories.user.role_repository import RoleRepository
from app.repositories.user.user_repository import UserRepository

__all__ = ["UserRepository", "RoleRepository", "ManagerStaffRepository"]
