"""
Manager-staff assignment endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.core.constants import ErrorMessages
from app.core.permissions import Principal
from app.schemas.common.response import SuccessResponse
from app.schemas.user.manager_staff import (
    AssignManagerRequest,
    MappingResponse,
    StaffMemberResponse,
)
from app.services.users.user_management_service import UserManagementService

router = APIRouter(prefix="/user-management", tags=["User Management"])


@router.post(
    "/assign",
    response_model=SuccessResponse[MappingResponse],
    status_code=status.HTTP_201_CREATED,
)
def assign_manager(
    payload: AssignManagerRequest,
    principal: Principal = Depends(deps.get_current_principal),
    service: UserManagementService = Depends(deps.get_user_management_service),
):
    """Map a staff user to a manager (admin only)."""
    mapping = service.assign_manager(principal, payload)
    return SuccessResponse[MappingResponse].create(
        MappingResponse.model_validate(mapping),
        ErrorMessages.ASSIGNMENT_SUCCESS,
    )


@router.get("/staff", response_model=SuccessResponse[List[StaffMemberResponse]])
def list_staff(
    manager_id: Optional[str] = Query(default=None, alias="managerId"),
    principal: Principal = Depends(deps.get_current_principal),
    service: UserManagementService = Depends(deps.get_user_management_service),
):
    result = service.list_staff(principal, manager_id)
    return SuccessResponse[List[StaffMemberResponse]].create(
        [StaffMemberResponse.model_validate(item) for item in result.items],
        result.message,
    )
