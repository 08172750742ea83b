"""
Leave type catalog service.
"""

from typing import List

from sqlalchemy.orm import Session

from app.core.constants import ErrorMessages
from app.core.exceptions import ConflictError, ResourceNotFoundError, ValidationFailedError
from app.core.permissions import Capability, Principal, require_capability
from app.models.base.validators import validate_leave_type
from app.models.leave.leave_type import LeaveType
from app.repositories.leave.leave_request_repository import LeaveRequestRepository
from app.repositories.leave.leave_type_repository import LeaveTypeRepository
from app.schemas.leave.leave_type import LeaveTypeCreate, LeaveTypeUpdate
from app.services.base.base_service import BaseService
from app.utils.validators import parse_id


class LeaveTypeService(BaseService):

    def __init__(
        self,
        db_session: Session,
        leave_types: LeaveTypeRepository,
        leave_requests: LeaveRequestRepository,
    ):
        super().__init__(db_session)
        self.leave_types = leave_types
        self.leave_requests = leave_requests

    def list_types(self, principal: Principal) -> List[LeaveType]:
        with self.operation_boundary("list leave types", ErrorMessages.FAILED_TO_RETRIEVE_LEAVE_TYPES):
            return list(self.leave_types.list_types())

    def create(self, principal: Principal, payload: LeaveTypeCreate) -> LeaveType:
        with self.operation_boundary("create leave type", ErrorMessages.FAILED_TO_CREATE_LEAVE_TYPE, payload.name):
            require_capability(principal, Capability.MANAGE_LEAVE_TYPES)

            violations = validate_leave_type(
                payload.name, payload.default_balance, payload.max_rollover, payload.description
            )
            if violations:
                raise ValidationFailedError(violations)
            if self.leave_types.get_by_name(payload.name) is not None:
                raise ConflictError(ErrorMessages.LEAVE_TYPE_NAME_IN_USE, details={"name": payload.name})

            with self.transaction():
                leave_type = self.leave_types.create(
                    LeaveType(
                        name=payload.name,
                        description=payload.description,
                        default_balance=payload.default_balance,
                        max_rollover=payload.max_rollover,
                    )
                )

            self._logger.info(f"Leave type '{leave_type.name}' created by {principal.email}")
            return leave_type

    def update(self, principal: Principal, leave_type_id: str, payload: LeaveTypeUpdate) -> LeaveType:
        with self.operation_boundary("update leave type", ErrorMessages.FAILED_TO_UPDATE_LEAVE_TYPE, leave_type_id):
            require_capability(principal, Capability.MANAGE_LEAVE_TYPES)
            leave_type = self._get(leave_type_id)

            changes = payload.model_dump(exclude_unset=True, exclude_none=True)
            candidate = {
                "name": changes.get("name", leave_type.name),
                "default_balance": changes.get("default_balance", leave_type.default_balance),
                "max_rollover": changes.get("max_rollover", leave_type.max_rollover),
                "description": changes.get("description", leave_type.description),
            }
            violations = validate_leave_type(**candidate)
            if violations:
                raise ValidationFailedError(violations)

            if "name" in changes:
                clash = self.leave_types.get_by_name(changes["name"])
                if clash is not None and clash.id != leave_type.id:
                    raise ConflictError(ErrorMessages.LEAVE_TYPE_NAME_IN_USE, details={"name": changes["name"]})
                if (
                    changes["name"] != leave_type.name
                    and self.leave_requests.count_with_leave_type(leave_type.name) > 0
                ):
                    # Requests store the label, so renaming would orphan them
                    raise ConflictError(ErrorMessages.LEAVE_TYPE_IN_USE, details={"name": leave_type.name})

            with self.transaction():
                self.leave_types.update(leave_type, changes)

            self._logger.info(f"Leave type {leave_type.id} updated by {principal.email}")
            return leave_type

    def delete(self, principal: Principal, leave_type_id: str) -> None:
        with self.operation_boundary("delete leave type", ErrorMessages.FAILED_TO_DELETE_LEAVE_TYPE, leave_type_id):
            require_capability(principal, Capability.MANAGE_LEAVE_TYPES)
            leave_type = self._get(leave_type_id)

            if self.leave_requests.count_with_leave_type(leave_type.name) > 0:
                raise ConflictError(ErrorMessages.LEAVE_TYPE_IN_USE, details={"name": leave_type.name})

            with self.transaction():
                self.leave_types.delete(leave_type)

            self._logger.info(f"Leave type '{leave_type.name}' deleted by {principal.email}")

    def _get(self, leave_type_id: str) -> LeaveType:
        parsed_id = parse_id(leave_type_id, ErrorMessages.INVALID_LEAVE_TYPE_ID, "id")
        leave_type = self.leave_types.get(parsed_id)
        if leave_type is None:
            raise ResourceNotFoundError(
                "LeaveType", parsed_id, message=ErrorMessages.leave_type_not_found(parsed_id)
            )
        return leave_type
