"""
Leave type catalog endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.core.permissions import Principal
from app.schemas.common.response import SuccessResponse
from app.schemas.leave.leave_type import LeaveTypeCreate, LeaveTypeResponse, LeaveTypeUpdate
from app.services.leave.leave_type_service import LeaveTypeService

router = APIRouter(prefix="/leave-types", tags=["Leave Types"])


@router.get("", response_model=SuccessResponse[List[LeaveTypeResponse]])
def list_leave_types(
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveTypeService = Depends(deps.get_leave_type_service),
):
    return SuccessResponse[List[LeaveTypeResponse]].create(
        [LeaveTypeResponse.model_validate(t) for t in service.list_types(principal)]
    )


@router.post(
    "",
    response_model=SuccessResponse[LeaveTypeResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_leave_type(
    payload: LeaveTypeCreate,
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveTypeService = Depends(deps.get_leave_type_service),
):
    leave_type = service.create(principal, payload)
    return SuccessResponse[LeaveTypeResponse].create(
        LeaveTypeResponse.model_validate(leave_type), "Leave type created"
    )


@router.patch("/{leave_type_id}", response_model=SuccessResponse[LeaveTypeResponse])
def update_leave_type(
    leave_type_id: str,
    payload: LeaveTypeUpdate,
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveTypeService = Depends(deps.get_leave_type_service),
):
    leave_type = service.update(principal, leave_type_id, payload)
    return SuccessResponse[LeaveTypeResponse].create(
        LeaveTypeResponse.model_validate(leave_type), "Leave type updated"
    )


@router.delete("/{leave_type_id}", response_model=SuccessResponse[None])
def delete_leave_type(
    leave_type_id: str,
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveTypeService = Depends(deps.get_leave_type_service),
):
    service.delete(principal, leave_type_id)
    return SuccessResponse[None].create(None, "Leave type deleted")
