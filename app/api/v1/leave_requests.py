"""
Leave request endpoints: submission, listings, transitions and balances.

Routes only authenticate; every authorization rule lives in the services.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from app.api import deps
from app.core.constants import ErrorMessages
from app.core.permissions import Principal
from app.schemas.common.response import SuccessResponse
from app.schemas.leave.leave_balance import BalanceResponse, BalanceUpdateRequest
from app.schemas.leave.leave_request import (
    LeaveDecisionResponse,
    LeaveRequestCreate,
    LeaveRequestCreatedResponse,
    LeaveRequestResponse,
    RejectLeaveRequest,
)
from app.services.leave.leave_balance_service import LeaveBalanceService
from app.services.leave.leave_request_service import LeaveListResult, LeaveRequestService

router = APIRouter(prefix="/leave-requests", tags=["Leave Requests"])


def _list_response(result: LeaveListResult) -> SuccessResponse[List[LeaveRequestResponse]]:
    return SuccessResponse[List[LeaveRequestResponse]].create(
        [LeaveRequestResponse.model_validate(item) for item in result.items],
        result.message,
    )


# ============================================================================
# Submission & listings
# ============================================================================


@router.post(
    "",
    response_model=SuccessResponse[LeaveRequestCreatedResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_leave_request(
    payload: LeaveRequestCreate,
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveRequestService = Depends(deps.get_leave_request_service),
):
    """Submit a leave request for the authenticated user."""
    outcome = service.request_leave(principal, payload)
    return SuccessResponse[LeaveRequestCreatedResponse].create(
        LeaveRequestCreatedResponse.model_validate(outcome),
        ErrorMessages.LEAVE_SUBMITTED,
    )


@router.get("/my-requests", response_model=SuccessResponse[List[LeaveRequestResponse]])
def list_my_requests(
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveRequestService = Depends(deps.get_leave_request_service),
):
    return _list_response(service.list_my_requests(principal))


@router.get("/all", response_model=SuccessResponse[List[LeaveRequestResponse]])
def list_requests(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    user_id: Optional[str] = Query(default=None, alias="userId"),
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveRequestService = Depends(deps.get_leave_request_service),
):
    """Role-scoped listing, optionally filtered by status and owner."""
    return _list_response(service.list_requests(principal, status_filter, user_id))


@router.get("/pending", response_model=SuccessResponse[List[LeaveRequestResponse]])
def list_pending(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveRequestService = Depends(deps.get_leave_request_service),
):
    return _list_response(service.list_pending(principal, user_id))


@router.get("/user/{user_id}", response_model=SuccessResponse[List[LeaveRequestResponse]])
def list_user_requests(
    user_id: str,
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveRequestService = Depends(deps.get_leave_request_service),
):
    return _list_response(service.list_user_requests(principal, user_id))


# ============================================================================
# Transitions
# ============================================================================


@router.patch("/approve/{request_id}", response_model=SuccessResponse[LeaveDecisionResponse])
def approve_leave_request(
    request_id: str,
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveRequestService = Depends(deps.get_leave_request_service),
):
    outcome = service.approve(principal, request_id)
    return SuccessResponse[LeaveDecisionResponse].create(
        LeaveDecisionResponse.model_validate(outcome),
        ErrorMessages.LEAVE_APPROVED,
    )


@router.patch("/reject/{request_id}", response_model=SuccessResponse[LeaveDecisionResponse])
def reject_leave_request(
    request_id: str,
    payload: Optional[RejectLeaveRequest] = Body(default=None),
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveRequestService = Depends(deps.get_leave_request_service),
):
    reason = payload.reason if payload else None
    outcome = service.reject(principal, request_id, reason)
    return SuccessResponse[LeaveDecisionResponse].create(
        LeaveDecisionResponse.model_validate(outcome),
        ErrorMessages.LEAVE_REJECTED,
    )


@router.patch("/cancel/{request_id}", response_model=SuccessResponse[LeaveDecisionResponse])
def cancel_leave_request(
    request_id: str,
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveRequestService = Depends(deps.get_leave_request_service),
):
    outcome = service.cancel(principal, request_id)
    return SuccessResponse[LeaveDecisionResponse].create(
        LeaveDecisionResponse.model_validate(outcome),
        ErrorMessages.LEAVE_CANCELLED,
    )


# ============================================================================
# Balances
# ============================================================================


@router.get("/remaining/{user_id}", response_model=SuccessResponse[BalanceResponse])
def get_remaining_leave(
    user_id: str,
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveBalanceService = Depends(deps.get_leave_balance_service),
):
    view = service.get_remaining(principal, user_id)
    return SuccessResponse[BalanceResponse].create(BalanceResponse.model_validate(view))


@router.get("/balance/{user_id}", response_model=SuccessResponse[BalanceResponse])
def get_leave_balance(
    user_id: str,
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveBalanceService = Depends(deps.get_leave_balance_service),
):
    view = service.get_balance(principal, user_id)
    return SuccessResponse[BalanceResponse].create(BalanceResponse.model_validate(view))


@router.patch("/balance/{user_id}", response_model=SuccessResponse[BalanceResponse])
def update_leave_balance(
    user_id: str,
    payload: BalanceUpdateRequest,
    principal: Principal = Depends(deps.get_current_principal),
    service: LeaveBalanceService = Depends(deps.get_leave_balance_service),
):
    view = service.update_balance(principal, user_id, payload.annual_leave_balance)
    return SuccessResponse[BalanceResponse].create(
        BalanceResponse.model_validate(view),
        ErrorMessages.BALANCE_UPDATED,
    )
