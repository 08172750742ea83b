"""
User directory endpoints. There is deliberately no delete route.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.core.permissions import Principal
from app.schemas.common.response import SuccessResponse
from app.schemas.user.role import RoleResponse
from app.schemas.user.user import UserCreate, UserResponse, UserUpdate
from app.services.users.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])
roles_router = APIRouter(prefix="/roles", tags=["Roles"])


@router.get("", response_model=SuccessResponse[List[UserResponse]])
def list_users(
    principal: Principal = Depends(deps.get_current_principal),
    service: UserService = Depends(deps.get_user_service),
):
    users = service.list_users(principal)
    return SuccessResponse[List[UserResponse]].create(
        [UserResponse.model_validate(u) for u in users]
    )


@router.post(
    "",
    response_model=SuccessResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    payload: UserCreate,
    principal: Principal = Depends(deps.get_current_principal),
    service: UserService = Depends(deps.get_user_service),
):
    user = service.create(principal, payload)
    return SuccessResponse[UserResponse].create(UserResponse.model_validate(user), "User created")


@router.get("/me", response_model=SuccessResponse[UserResponse])
def read_me(
    principal: Principal = Depends(deps.get_current_principal),
    service: UserService = Depends(deps.get_user_service),
):
    return SuccessResponse[UserResponse].create(UserResponse.model_validate(service.me(principal)))


@router.get("/email/{email}", response_model=SuccessResponse[UserResponse])
def read_user_by_email(
    email: str,
    principal: Principal = Depends(deps.get_current_principal),
    service: UserService = Depends(deps.get_user_service),
):
    user = service.get_by_email(principal, email)
    return SuccessResponse[UserResponse].create(UserResponse.model_validate(user))


@router.get("/{user_id}", response_model=SuccessResponse[UserResponse])
def read_user(
    user_id: str,
    principal: Principal = Depends(deps.get_current_principal),
    service: UserService = Depends(deps.get_user_service),
):
    user = service.get_by_id(principal, user_id)
    return SuccessResponse[UserResponse].create(UserResponse.model_validate(user))


@router.patch("/{user_id}", response_model=SuccessResponse[UserResponse])
def update_user(
    user_id: str,
    payload: UserUpdate,
    principal: Principal = Depends(deps.get_current_principal),
    service: UserService = Depends(deps.get_user_service),
):
    user = service.update(principal, user_id, payload)
    return SuccessResponse[UserResponse].create(UserResponse.model_validate(user), "User updated")


@roles_router.get("", response_model=SuccessResponse[List[RoleResponse]])
def list_roles(
    principal: Principal = Depends(deps.get_current_principal),
    service: UserService = Depends(deps.get_user_service),
):
    roles = service.list_roles(principal)
    return SuccessResponse[List[RoleResponse]].create(
        [RoleResponse.model_validate(r) for r in roles]
    )
