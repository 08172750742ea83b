"""
Entity-level validators.

Each function inspects a candidate record and returns the list of
(field, violation) pairs it breaks, in field order. An empty list means
the candidate may be persisted. Services raise ValidationFailedError
from a non-empty result before any write.
"""

from datetime import date
from typing import Any, List, Optional, Tuple

from app.config.settings import settings
from app.models.base.enums import LeaveStatus
from app.utils.date_utils import is_valid_date
from app.utils.validators import is_valid_email

Violation = Tuple[str, str]

LEAVE_TYPE_MAX_LENGTH = 100
REASON_MAX_LENGTH = 500
NAME_MAX_LENGTH = 100
BCRYPT_MAX_BYTES = 72


def _is_whole_non_negative(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def validate_leave_request(
    start_date: Any,
    end_date: Any,
    status: Any = LeaveStatus.PENDING,
    leave_type: Optional[str] = None,
    reason: Optional[str] = None,
) -> List[Violation]:
    """
    Structural checks for a leave request candidate.

    Dates may be `date` objects or ISO 'YYYY-MM-DD' strings.
    """
    violations: List[Violation] = []

    if not is_valid_date(start_date):
        violations.append(("startDate", "Start date must be valid"))
    if not is_valid_date(end_date):
        violations.append(("endDate", "End date must be valid"))

    try:
        LeaveStatus(status)
    except ValueError:
        violations.append(("status", "Status must be Pending, Approved, Rejected or Cancelled"))

    if leave_type is not None:
        if not str(leave_type).strip():
            violations.append(("leaveType", "Leave type cannot be empty"))
        elif len(leave_type) > LEAVE_TYPE_MAX_LENGTH:
            violations.append(
                ("leaveType", f"Leave type must be at most {LEAVE_TYPE_MAX_LENGTH} characters")
            )

    if reason is not None and len(reason) > REASON_MAX_LENGTH:
        violations.append(("reason", f"Reason must be at most {REASON_MAX_LENGTH} characters"))

    return violations


def validate_user(
    email: Optional[str],
    role: Any,
    password: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    annual_leave_balance: Any = None,
    *,
    require_password: bool = False,
) -> List[Violation]:
    """Checks for a user candidate on registration or update."""
    violations: List[Violation] = []

    if not is_valid_email(email):
        violations.append(("email", "Must be a valid email address"))

    if password is None:
        if require_password:
            violations.append(("password", "Password is required"))
    else:
        min_length = settings.PASSWORD_MIN_LENGTH
        if len(password) < min_length:
            violations.append(("password", f"Password must be at least {min_length} characters long"))
        elif len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            violations.append(("password", f"Password must be at most {BCRYPT_MAX_BYTES} bytes long"))

    for field, value, label in (
        ("firstName", first_name, "First name"),
        ("lastName", last_name, "Last name"),
    ):
        if value is None:
            continue
        if not value.strip():
            violations.append((field, f"{label} cannot be empty"))
        elif len(value) > NAME_MAX_LENGTH:
            violations.append((field, f"{label} must be at most {NAME_MAX_LENGTH} characters"))

    if role is None:
        violations.append(("role", "Role is required"))

    if annual_leave_balance is not None and not _is_whole_non_negative(annual_leave_balance):
        violations.append(("annualLeaveBalance", "Annual leave balance must be a non-negative whole number"))

    return violations


def validate_manager_staff_mapping(
    manager_id: Optional[int],
    staff_id: Optional[int],
    start_date: Optional[date],
    end_date: Optional[date] = None,
) -> List[Violation]:
    violations: List[Violation] = []

    if manager_id is not None and manager_id == staff_id:
        violations.append(("managerId", "A user cannot be assigned as their own manager"))
    if start_date is None:
        violations.append(("startDate", "Start date is required"))
    elif end_date is not None and end_date < start_date:
        violations.append(("endDate", "End date cannot be before the start date"))

    return violations


def validate_leave_type(
    name: Optional[str],
    default_balance: Any,
    max_rollover: Any,
    description: Optional[str] = None,
) -> List[Violation]:
    violations: List[Violation] = []

    if name is None or not name.strip():
        violations.append(("name", "Leave type name is required"))
    elif len(name) > LEAVE_TYPE_MAX_LENGTH:
        violations.append(("name", f"Leave type name must be at most {LEAVE_TYPE_MAX_LENGTH} characters"))

    if not _is_whole_non_negative(default_balance):
        violations.append(("defaultBalance", "Default balance must be a non-negative whole number"))
    if not _is_whole_non_negative(max_rollover):
        violations.append(("maxRollover", "Max rollover must be a non-negative whole number"))

    if description is not None and len(description) > REASON_MAX_LENGTH:
        violations.append(("description", f"Description must be at most {REASON_MAX_LENGTH} characters"))

    return violations
