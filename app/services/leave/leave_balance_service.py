"""
Leave balance reads and the administrative overwrite.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from app.core.constants import ErrorMessages
from app.core.exceptions import ForbiddenError, ResourceNotFoundError
from app.core.permissions import Capability, Principal, has_capability, require_capability
from app.models.user.user import User
from app.repositories.user.manager_staff_repository import ManagerStaffRepository
from app.repositories.user.user_repository import UserRepository
from app.services.base.base_service import BaseService
from app.services.leave import balance_accounting
from app.utils.date_utils import today_utc
from app.utils.validators import parse_id


@dataclass
class BalanceView:
    user_id: int
    email: str
    annual_leave_balance: int

    @classmethod
    def of(cls, user: User) -> "BalanceView":
        return cls(user.id, user.email, user.annual_leave_balance)


class LeaveBalanceService(BaseService):

    def __init__(
        self,
        db_session: Session,
        users: UserRepository,
        mappings: ManagerStaffRepository,
    ):
        super().__init__(db_session)
        self.users = users
        self.mappings = mappings

    def get_remaining(self, principal: Principal, user_id: str) -> BalanceView:
        """Remaining balance of the caller themself; admins may read anyone's."""
        with self.operation_boundary("get remaining leave", ErrorMessages.FAILED_TO_GET_REMAINING, user_id):
            target_id = parse_id(user_id, ErrorMessages.INVALID_USER_ID, "userId")
            caller = self._resolve_caller(self.users, principal)
            if caller.id != target_id and not has_capability(principal, Capability.VIEW_ANY_BALANCE):
                raise ForbiddenError(ErrorMessages.NOT_AUTHORISED_TO_VIEW_USER)
            return BalanceView.of(self._get_user(target_id))

    def get_balance(self, principal: Principal, user_id: str) -> BalanceView:
        """Balance of a team member (manager) or of any user (admin)."""
        with self.operation_boundary("get leave balance", ErrorMessages.FAILED_TO_GET_REMAINING, user_id):
            require_capability(principal, Capability.VIEW_TEAM_BALANCE)
            target_id = parse_id(user_id, ErrorMessages.INVALID_USER_ID, "userId")
            caller = self._resolve_caller(self.users, principal)
            target = self._get_user(target_id)

            if not has_capability(principal, Capability.VIEW_ANY_BALANCE):
                if not self.mappings.is_active_manager_of(caller.id, target.id, today_utc()):
                    raise ForbiddenError(ErrorMessages.NOT_AUTHORISED_TO_VIEW_USER)
            return BalanceView.of(target)

    def update_balance(self, principal: Principal, user_id: str, value: Any) -> BalanceView:
        """Unconditional overwrite; independent of the request lifecycle."""
        with self.operation_boundary("update leave balance", ErrorMessages.FAILED_TO_UPDATE_BALANCE, user_id):
            require_capability(principal, Capability.OVERWRITE_BALANCE)
            target_id = parse_id(user_id, ErrorMessages.INVALID_USER_ID, "userId")
            new_balance = balance_accounting.parse_balance_value(value)

            with self.transaction():
                target = self.users.get_for_update(target_id)
                if target is None:
                    raise ResourceNotFoundError(
                        "User", target_id, message=ErrorMessages.user_not_found_with_id(target_id)
                    )
                previous = target.annual_leave_balance
                target.annual_leave_balance = new_balance
                self.db.flush()

            self._logger.info(
                f"Balance of {target.email} overwritten by {principal.email}: {previous} -> {new_balance}"
            )
            return BalanceView.of(target)

    def _get_user(self, user_id: int) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise ResourceNotFoundError(
                "User", user_id, message=ErrorMessages.user_not_found_with_id(user_id)
            )
        return user
