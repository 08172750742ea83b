# app/api/deps.py
"""
FastAPI dependencies: per-request session, the authenticated principal
and service factories.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from app.api import deps

    router = APIRouter()

    @router.get("/me")
    def read_me(principal: Principal = Depends(deps.get_current_principal)):
        ...
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.permissions import Principal
from app.core.security import resolve_principal
from app.db.session import get_db
from app.repositories.leave.leave_request_repository import LeaveRequestRepository
from app.repositories.leave.leave_type_repository import LeaveTypeRepository
from app.repositories.user.manager_staff_repository import ManagerStaffRepository
from app.repositories.user.role_repository import RoleRepository
from app.repositories.user.user_repository import UserRepository
from app.services.leave.leave_balance_service import LeaveBalanceService
from app.services.leave.leave_request_service import LeaveRequestService
from app.services.leave.leave_type_service import LeaveTypeService
from app.services.users.user_management_service import UserManagementService
from app.services.users.user_service import UserService

# auto_error=False so a missing header surfaces as our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


# --- Authentication -----------------------------------------------------------

def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    token = credentials.credentials if credentials else None
    return resolve_principal(token)


# --- Services -----------------------------------------------------------------

def get_leave_request_service(db: Session = Depends(get_db)) -> LeaveRequestService:
    return LeaveRequestService(
        db,
        LeaveRequestRepository(db),
        UserRepository(db),
        ManagerStaffRepository(db),
    )


def get_leave_balance_service(db: Session = Depends(get_db)) -> LeaveBalanceService:
    return LeaveBalanceService(db, UserRepository(db), ManagerStaffRepository(db))


def get_leave_type_service(db: Session = Depends(get_db)) -> LeaveTypeService:
    return LeaveTypeService(db, LeaveTypeRepository(db), LeaveRequestRepository(db))


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db, UserRepository(db), RoleRepository(db))


def get_user_management_service(db: Session = Depends(get_db)) -> UserManagementService:
    return UserManagementService(db, UserRepository(db), ManagerStaffRepository(db))
