from app.schemas.user.manager_staff import (
    AssignManagerRequest,
    MappingResponse,
    StaffMemberResponse,
)
from app.schemas.user.role import RoleResponse
from app.schemas.user.user import UserCreate, UserResponse, UserSummary, UserUpdate

__all__ = [
    "RoleResponse",
    "UserCreate",
    "UserUpdate",
    "UserSummary",
    "UserResponse",
    "AssignManagerRequest",
    "MappingResponse",
    "StaffMemberResponse",
]
