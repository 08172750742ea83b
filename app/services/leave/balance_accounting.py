"""
Balance accounting rules.

A user's annual_leave_balance changes only here:
- approval debits the request's inclusive day count,
- cancelling an approved request credits the same count back,
- an administrator may overwrite it outright.

Day counts are always recomputed from the stored date range, so the
credit on cancellation equals the debit taken at approval.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from app.core.constants import ErrorMessages
from app.core.exceptions import InsufficientBalanceError, InvalidValueError
from app.models.base.enums import LeaveStatus
from app.models.leave.leave_request import LeaveRequest
from app.models.user.user import User
from app.utils.date_utils import inclusive_day_count


def requested_days(start_date: date, end_date: date) -> int:
    return inclusive_day_count(start_date, end_date)


def ensure_sufficient_balance(user: User, days: int, message: str) -> None:
    """
    Raises:
        InsufficientBalanceError: If the user's balance is below `days`
    """
    if days > user.annual_leave_balance:
        raise InsufficientBalanceError(
            message,
            requested_days=days,
            available_days=user.annual_leave_balance,
        )


def debit_for_approval(user: User, leave_request: LeaveRequest) -> int:
    """Debit the request's day count from its owner; returns the days debited."""
    days = leave_request.day_count
    ensure_sufficient_balance(user, days, ErrorMessages.INSUFFICIENT_BALANCE)
    user.annual_leave_balance -= days
    return days


def credit_for_cancellation(user: User, leave_request: LeaveRequest) -> int:
    """
    Credit back the day count of a request being cancelled.

    Only approved requests were ever debited; pending ones credit nothing.
    """
    if LeaveStatus(leave_request.status) is not LeaveStatus.APPROVED:
        return 0
    days = leave_request.day_count
    user.annual_leave_balance += days
    return days


def parse_balance_value(value: Any) -> int:
    """
    Validate an administrative balance overwrite.

    Accepts whole non-negative numbers, including numeric strings such
    as "12" or 12.0. Booleans are rejected.

    Raises:
        InvalidValueError: If the value is not a whole, non-negative number
    """
    field = "annualLeaveBalance"
    if value is None or isinstance(value, bool):
        raise InvalidValueError(ErrorMessages.BALANCE_MUST_BE_NUMBER, field)

    if isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except ArithmeticError:
            raise InvalidValueError(ErrorMessages.BALANCE_MUST_BE_NUMBER, field)
    elif isinstance(value, (int, float, Decimal)):
        try:
            number = Decimal(str(value))
        except ArithmeticError:
            raise InvalidValueError(ErrorMessages.BALANCE_MUST_BE_NUMBER, field)
    else:
        raise InvalidValueError(ErrorMessages.BALANCE_MUST_BE_NUMBER, field)

    if not number.is_finite() or number != number.to_integral_value():
        raise InvalidValueError(ErrorMessages.BALANCE_MUST_BE_NUMBER, field)
    if number < 0:
        raise InvalidValueError(ErrorMessages.BALANCE_CANNOT_BE_NEGATIVE, field)
    return int(number)
