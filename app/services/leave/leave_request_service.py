"""
Leave request lifecycle service.

Submission, role-scoped listing and the Pending -> Approved | Rejected |
Cancelled transitions. Balance changes are delegated to
balance_accounting and written in the same transaction as the status
change.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.constants import ErrorMessages
from app.core.exceptions import (
    ForbiddenError,
    InvalidDateRangeError,
    InvalidInputError,
    InvalidStateTransitionError,
    OverlappingRequestError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from app.core.permissions import Capability, Principal, has_capability, require_capability
from app.models.base.enums import LeaveStatus
from app.models.base.validators import validate_leave_request
from app.models.leave.leave_request import LeaveRequest
from app.models.user.user import User
from app.repositories.leave.leave_request_repository import LeaveRequestRepository
from app.repositories.user.manager_staff_repository import ManagerStaffRepository
from app.repositories.user.user_repository import UserRepository
from app.schemas.leave.leave_request import LeaveRequestCreate
from app.services.base.base_service import BaseService
from app.services.leave import balance_accounting
from app.utils.date_utils import parse_date, today_utc
from app.utils.validators import parse_id


@dataclass
class LeaveListResult:
    """Listing payload; message explains an empty result where useful."""

    items: List[LeaveRequest] = field(default_factory=list)
    message: Optional[str] = None


@dataclass
class LeaveOutcome:
    """A request after submission or a transition, plus balance figures."""

    leave_request: LeaveRequest
    requested_days: int
    remaining_balance: int


class LeaveRequestService(BaseService):
    """
    Leave request use-cases.

    Authorization is checked here, not in the routes: capabilities come
    from the caller's role and managers are further limited to users
    currently mapped to them as staff.
    """

    def __init__(
        self,
        db_session: Session,
        leave_requests: LeaveRequestRepository,
        users: UserRepository,
        mappings: ManagerStaffRepository,
    ):
        super().__init__(db_session)
        self.leave_requests = leave_requests
        self.users = users
        self.mappings = mappings

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def request_leave(self, principal: Principal, payload: LeaveRequestCreate) -> LeaveOutcome:
        with self.operation_boundary("submit leave request", ErrorMessages.FAILED_TO_SUBMIT, principal.email):
            require_capability(principal, Capability.REQUEST_LEAVE)
            requester = self._resolve_caller(self.users, principal)

            violations = validate_leave_request(
                payload.start_date,
                payload.end_date,
                LeaveStatus.PENDING,
                payload.leave_type,
                payload.reason,
            )
            if violations:
                raise ValidationFailedError(violations)

            start_date = parse_date(payload.start_date)
            end_date = parse_date(payload.end_date)
            if end_date <= start_date:
                raise InvalidDateRangeError(payload.start_date, payload.end_date)

            overlapping = self.leave_requests.find_overlapping(requester.id, start_date, end_date)
            if overlapping:
                raise OverlappingRequestError(
                    ErrorMessages.OVERLAPPING_LEAVE,
                    conflicting_ids=[r.id for r in overlapping],
                )

            days = balance_accounting.requested_days(start_date, end_date)
            balance_accounting.ensure_sufficient_balance(
                requester, days, ErrorMessages.LEAVE_EXCEEDS_BALANCE
            )

            with self.transaction():
                leave_request = self.leave_requests.create(
                    LeaveRequest(
                        user=requester,
                        leave_type=payload.leave_type or settings.DEFAULT_LEAVE_TYPE,
                        start_date=start_date,
                        end_date=end_date,
                        status=LeaveStatus.PENDING,
                        reason=payload.reason,
                    )
                )

            self._logger.info(
                f"Leave request {leave_request.id} submitted by {requester.email} "
                f"({start_date} to {end_date}, {days} days)"
            )
            # Informational only; nothing is debited until approval
            return LeaveOutcome(leave_request, days, requester.annual_leave_balance - days)

    # -------------------------------------------------------------------------
    # Listing
    # -------------------------------------------------------------------------

    def list_my_requests(self, principal: Principal) -> LeaveListResult:
        with self.operation_boundary("list own leave requests", ErrorMessages.FAILED_TO_RETRIEVE_LEAVE, principal.email):
            require_capability(principal, Capability.VIEW_OWN_LEAVE)
            caller = self._resolve_caller(self.users, principal)
            return LeaveListResult(list(self.leave_requests.list_for_user(caller.id)))

    def list_requests(
        self,
        principal: Principal,
        status: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> LeaveListResult:
        """
        Role-scoped listing.

        Admins see everything, managers see their current staff, anyone
        else sees their own requests. Optional filters by status and owner.
        """
        with self.operation_boundary("list leave requests", ErrorMessages.FAILED_TO_RETRIEVE_LEAVE, principal.email):
            status_filter = self._parse_status(status)
            return self._scoped_listing(principal, status_filter, user_id, ErrorMessages.NO_STAFF_ASSIGNED)

    def list_pending(self, principal: Principal, user_id: Optional[str] = None) -> LeaveListResult:
        with self.operation_boundary("list pending leave requests", ErrorMessages.FAILED_TO_RETRIEVE_LEAVE, principal.email):
            return self._scoped_listing(
                principal, LeaveStatus.PENDING, user_id, ErrorMessages.NO_PENDING_FOR_MANAGER
            )

    def list_user_requests(self, principal: Principal, user_id: str) -> LeaveListResult:
        with self.operation_boundary("list user leave requests", ErrorMessages.FAILED_TO_RETRIEVE_LEAVE, user_id):
            require_capability(principal, Capability.VIEW_TEAM_LEAVE)
            target_id = parse_id(user_id, ErrorMessages.INVALID_USER_ID, "userId")
            caller = self._resolve_caller(self.users, principal)

            target = self.users.get(target_id)
            if target is None:
                raise ResourceNotFoundError(
                    "User", target_id, message=ErrorMessages.user_not_found_with_id(target_id)
                )
            self._ensure_team_access(principal, caller, target.id, ErrorMessages.NOT_AUTHORISED_TO_VIEW_USER)

            items = list(self.leave_requests.list_for_user(target.id))
            message = None if items else ErrorMessages.no_leave_requests_found(target.email)
            return LeaveListResult(items, message)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def approve(self, principal: Principal, request_id: str) -> LeaveOutcome:
        with self.operation_boundary("approve leave request", ErrorMessages.FAILED_TO_APPROVE, request_id):
            require_capability(principal, Capability.REVIEW_LEAVE)
            reviewer = self._resolve_caller(self.users, principal)
            leave_request = self._get_request(request_id)
            self._ensure_team_access(principal, reviewer, leave_request.user_id, ErrorMessages.NOT_AUTHORISED_TO_REVIEW)

            current = LeaveStatus(leave_request.status)
            if current.is_terminal:
                raise InvalidStateTransitionError(ErrorMessages.cannot_approve(current.value), current.value)

            # Debit and status change commit together or not at all
            with self.transaction():
                owner = self._lock_owner(leave_request)
                days = balance_accounting.debit_for_approval(owner, leave_request)
                self._mark_reviewed(leave_request, LeaveStatus.APPROVED, reviewer)
                self.db.flush()

            self._logger.info(
                f"Leave request {leave_request.id} approved by {reviewer.email}; "
                f"{days} days debited from {owner.email}, balance now {owner.annual_leave_balance}"
            )
            return LeaveOutcome(leave_request, days, owner.annual_leave_balance)

    def reject(self, principal: Principal, request_id: str, reason: Optional[str] = None) -> LeaveOutcome:
        with self.operation_boundary("reject leave request", ErrorMessages.FAILED_TO_REJECT, request_id):
            require_capability(principal, Capability.REVIEW_LEAVE)
            reviewer = self._resolve_caller(self.users, principal)
            leave_request = self._get_request(request_id)
            self._ensure_team_access(principal, reviewer, leave_request.user_id, ErrorMessages.NOT_AUTHORISED_TO_REVIEW)

            current = LeaveStatus(leave_request.status)
            if current.is_terminal:
                raise InvalidStateTransitionError(ErrorMessages.cannot_reject(current.value), current.value)

            with self.transaction():
                self._mark_reviewed(leave_request, LeaveStatus.REJECTED, reviewer)
                leave_request.review_note = (reason or "").strip() or settings.DEFAULT_REJECTION_REASON
                self.db.flush()

            self._logger.info(f"Leave request {leave_request.id} rejected by {reviewer.email}")
            owner = leave_request.user
            return LeaveOutcome(leave_request, leave_request.day_count, owner.annual_leave_balance)

    def cancel(self, principal: Principal, request_id: str) -> LeaveOutcome:
        with self.operation_boundary("cancel leave request", ErrorMessages.FAILED_TO_CANCEL, request_id):
            require_capability(principal, Capability.CANCEL_OWN_LEAVE)
            caller = self._resolve_caller(self.users, principal)
            leave_request = self._get_request(request_id)

            if leave_request.user_id != caller.id and not has_capability(principal, Capability.CANCEL_ANY_LEAVE):
                raise ForbiddenError(ErrorMessages.UNAUTHORISED_CANCEL)

            current = LeaveStatus(leave_request.status)
            if current in (LeaveStatus.CANCELLED, LeaveStatus.REJECTED):
                raise InvalidStateTransitionError(ErrorMessages.cannot_cancel(current.value), current.value)

            with self.transaction():
                owner = self._lock_owner(leave_request)
                # Credit is decided from the status before it changes
                credited = balance_accounting.credit_for_cancellation(owner, leave_request)
                self._mark_reviewed(leave_request, LeaveStatus.CANCELLED, caller)
                self.db.flush()

            self._logger.info(
                f"Leave request {leave_request.id} cancelled by {caller.email}; "
                f"{credited} days credited to {owner.email}"
            )
            return LeaveOutcome(leave_request, leave_request.day_count, owner.annual_leave_balance)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _parse_status(status: Optional[str]) -> Optional[LeaveStatus]:
        if status is None or not status.strip():
            return None
        try:
            return LeaveStatus(status)
        except ValueError:
            raise InvalidInputError(ErrorMessages.INVALID_STATUS_FILTER, "status")

    def _scoped_listing(
        self,
        principal: Principal,
        status: Optional[LeaveStatus],
        user_id: Optional[str],
        empty_team_message: str,
    ) -> LeaveListResult:
        target_id = None
        if user_id is not None and str(user_id).strip():
            target_id = parse_id(user_id, ErrorMessages.INVALID_USER_ID, "userId")
        caller = self._resolve_caller(self.users, principal)

        if has_capability(principal, Capability.VIEW_ALL_LEAVE):
            return LeaveListResult(list(self.leave_requests.list_all(status, target_id)))

        if has_capability(principal, Capability.VIEW_TEAM_LEAVE):
            staff_ids = self.mappings.active_staff_ids(caller.id, today_utc())
            if not staff_ids:
                return LeaveListResult([], empty_team_message)
            if target_id is not None:
                if target_id not in staff_ids:
                    raise ForbiddenError(ErrorMessages.NOT_AUTHORISED_TO_VIEW_USER)
                staff_ids = [target_id]
            return LeaveListResult(list(self.leave_requests.list_for_users(staff_ids, status)))

        require_capability(principal, Capability.VIEW_OWN_LEAVE)
        if target_id is not None and target_id != caller.id:
            raise ForbiddenError(ErrorMessages.NOT_AUTHORISED_TO_VIEW_USER)
        return LeaveListResult(list(self.leave_requests.list_for_user(caller.id, status)))

    def _get_request(self, request_id: str) -> LeaveRequest:
        parsed_id = parse_id(request_id, ErrorMessages.INVALID_LEAVE_ID, "id")
        leave_request = self.leave_requests.get_with_owner(parsed_id)
        if leave_request is None:
            raise ResourceNotFoundError(
                "LeaveRequest", parsed_id, message=ErrorMessages.LEAVE_REQUEST_NOT_FOUND
            )
        return leave_request

    def _ensure_team_access(
        self,
        principal: Principal,
        caller: User,
        owner_id: int,
        message: str,
    ) -> None:
        """Admins pass; managers only for users currently mapped to them."""
        if has_capability(principal, Capability.VIEW_ALL_LEAVE):
            return
        if not self.mappings.is_active_manager_of(caller.id, owner_id, today_utc()):
            raise ForbiddenError(message)

    def _lock_owner(self, leave_request: LeaveRequest) -> User:
        owner = self.users.get_for_update(leave_request.user_id)
        if owner is None:
            raise ResourceNotFoundError(
                "User",
                leave_request.user_id,
                message=ErrorMessages.user_not_found_with_id(leave_request.user_id),
            )
        return owner

    @staticmethod
    def _mark_reviewed(leave_request: LeaveRequest, status: LeaveStatus, reviewer: User) -> None:
        leave_request.status = status
        leave_request.reviewed_by_id = reviewer.id
        leave_request.reviewed_at = datetime.now(timezone.utc)
