"""
Manager-staff assignment service.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.constants import ErrorMessages
from app.core.exceptions import (
    AlreadyAssignedError,
    ForbiddenError,
    InvalidDateError,
    MissingFieldError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from app.core.permissions import Capability, Principal, has_capability, require_capability
from app.models.base.validators import validate_manager_staff_mapping
from app.models.user.manager_staff import ManagerStaffMapping
from app.repositories.user.manager_staff_repository import ManagerStaffRepository
from app.repositories.user.user_repository import UserRepository
from app.schemas.user.manager_staff import AssignManagerRequest
from app.services.base.base_service import BaseService
from app.utils.date_utils import DateUtilsError, parse_date, today_utc
from app.utils.validators import parse_id


@dataclass
class StaffAssignment:
    id: int
    email: str
    first_name: str
    last_name: str
    department: Optional[str]
    assigned_since: date
    assigned_until: Optional[date] = None


@dataclass
class StaffListResult:
    items: List[StaffAssignment] = field(default_factory=list)
    message: Optional[str] = None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class UserManagementService(BaseService):

    def __init__(
        self,
        db_session: Session,
        users: UserRepository,
        mappings: ManagerStaffRepository,
    ):
        super().__init__(db_session)
        self.users = users
        self.mappings = mappings

    def assign_manager(self, principal: Principal, payload: AssignManagerRequest) -> ManagerStaffMapping:
        """
        Map a staff user to a manager.

        Checks run in order: both ids present, dates parse, both users
        exist, pair not already mapped. startDate defaults to today.
        """
        with self.operation_boundary("assign manager", ErrorMessages.ASSIGNMENT_FAILED):
            require_capability(principal, Capability.ASSIGN_MANAGERS)

            if _is_blank(payload.staff_id):
                raise MissingFieldError(ErrorMessages.STAFF_OR_MANAGER_ID_REQUIRED, "staffId")
            if _is_blank(payload.manager_id):
                raise MissingFieldError(ErrorMessages.STAFF_OR_MANAGER_ID_REQUIRED, "managerId")

            start_date = self._optional_date(payload.start_date, ErrorMessages.INVALID_START_DATE, "startDate")
            end_date = self._optional_date(payload.end_date, ErrorMessages.INVALID_END_DATE, "endDate")
            if start_date is None:
                start_date = today_utc()

            staff_id = parse_id(payload.staff_id, ErrorMessages.INVALID_USER_ID, "staffId")
            manager_id = parse_id(payload.manager_id, ErrorMessages.INVALID_USER_ID, "managerId")

            staff = self.users.get(staff_id)
            manager = self.users.get(manager_id)
            if staff is None or manager is None:
                raise ResourceNotFoundError(
                    "User",
                    staff_id if staff is None else manager_id,
                    message=ErrorMessages.STAFF_OR_MANAGER_NOT_FOUND,
                )

            if self.mappings.find_pair(manager_id, staff_id) is not None:
                raise AlreadyAssignedError(
                    ErrorMessages.ASSIGNMENT_ALREADY_EXISTS, manager_id=manager_id, staff_id=staff_id
                )

            violations = validate_manager_staff_mapping(manager_id, staff_id, start_date, end_date)
            if violations:
                raise ValidationFailedError(violations)

            try:
                with self.transaction():
                    mapping = self.mappings.create(
                        ManagerStaffMapping(
                            manager_id=manager_id,
                            staff_id=staff_id,
                            start_date=start_date,
                            end_date=end_date,
                        )
                    )
            except IntegrityError:
                # Lost a race with a concurrent assignment of the same pair
                raise AlreadyAssignedError(
                    ErrorMessages.ASSIGNMENT_ALREADY_EXISTS, manager_id=manager_id, staff_id=staff_id
                )

            self._logger.info(
                f"Staff {staff.full_name} <{staff.email}> assigned to manager {manager.email} from {start_date}"
            )
            return mapping

    def list_staff(self, principal: Principal, manager_id: Optional[str] = None) -> StaffListResult:
        """Users currently mapped to a manager (the caller unless an admin names one)."""
        with self.operation_boundary("list staff", ErrorMessages.FAILED_TO_RETRIEVE_STAFF, manager_id):
            require_capability(principal, Capability.VIEW_TEAM_LEAVE)
            caller = self._resolve_caller(self.users, principal)

            target_id = caller.id
            if not _is_blank(manager_id):
                target_id = parse_id(manager_id, ErrorMessages.INVALID_MANAGER_ID, "managerId")
                if target_id != caller.id and not has_capability(principal, Capability.ASSIGN_MANAGERS):
                    raise ForbiddenError()
                if self.users.get(target_id) is None:
                    raise ResourceNotFoundError(
                        "User", target_id, message=ErrorMessages.user_not_found_with_id(target_id)
                    )

            items = [
                StaffAssignment(
                    id=m.staff.id,
                    email=m.staff.email,
                    first_name=m.staff.first_name,
                    last_name=m.staff.last_name,
                    department=m.staff.department,
                    assigned_since=m.start_date,
                    assigned_until=m.end_date,
                )
                for m in self.mappings.list_active_for_manager(target_id, today_utc())
            ]
            return StaffListResult(items, None if items else ErrorMessages.NO_STAFF_ASSIGNED)

    @staticmethod
    def _optional_date(value: Any, message: str, field_name: str) -> Optional[date]:
        if _is_blank(value):
            return None
        try:
            return parse_date(value)
        except DateUtilsError:
            raise InvalidDateError(message, field_name)
