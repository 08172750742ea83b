from datetime import date

import pytest

from app.core.exceptions import ErrorCode, InvalidInputError, ValidationFailedError
from app.core.permissions import RoleName
from app.models.base.enums import LeaveStatus
from app.models.base.validators import (
    validate_leave_request,
    validate_leave_type,
    validate_manager_staff_mapping,
    validate_user,
)
from app.utils.validators import is_valid_email, parse_id


@pytest.mark.parametrize("value, expected", [("5", 5), (" 12 ", 12), (7, 7), ("9223372036854775807", 2**63 - 1)])
def test_parse_id_accepts_positive_integers(value, expected):
    assert parse_id(value, "Invalid user ID") == expected


@pytest.mark.parametrize(
    "value",
    ["abc", "0", "-1", "1.5", "", None, True, 0, -3, "²", "١٢", "99999999999999999999", 2**63],
)
def test_parse_id_rejects_everything_else(value):
    with pytest.raises(InvalidInputError) as exc_info:
        parse_id(value, "Invalid user ID", "id")
    assert exc_info.value.message == "Invalid user ID"
    assert exc_info.value.status_code == 400


def test_is_valid_email():
    assert is_valid_email("jane.doe@company.com")
    assert not is_valid_email("jane.doe")
    assert not is_valid_email("")
    assert not is_valid_email(None)


def test_valid_leave_request_has_no_violations():
    assert validate_leave_request("2025-08-01", "2025-08-03", LeaveStatus.PENDING, "Annual Leave", "Holiday") == []


def test_leave_request_violations_are_reported_in_field_order():
    violations = validate_leave_request(None, "03/08/2025", "Archived")
    assert violations == [
        ("startDate", "Start date must be valid"),
        ("endDate", "End date must be valid"),
        ("status", "Status must be Pending, Approved, Rejected or Cancelled"),
    ]


def test_leave_request_text_limits():
    violations = validate_leave_request("2025-08-01", "2025-08-03", "Pending", "x" * 101, "y" * 501)
    assert [field for field, _ in violations] == ["leaveType", "reason"]


def test_validation_failed_error_uses_first_violation_as_message():
    error = ValidationFailedError(validate_leave_request("nope", "nope"))
    assert error.message == "Start date must be valid"
    assert error.error_code is ErrorCode.VALIDATION_FAILED
    assert error.details["field_errors"]["endDate"] == ["End date must be valid"]


def test_user_validation():
    assert validate_user("a@company.com", RoleName.STAFF, password="long-enough-pw", require_password=True) == []

    violations = validate_user("bad-email", None, password="short", first_name=" ", annual_leave_balance=-1)
    assert violations == [
        ("email", "Must be a valid email address"),
        ("password", "Password must be at least 10 characters long"),
        ("firstName", "First name cannot be empty"),
        ("role", "Role is required"),
        ("annualLeaveBalance", "Annual leave balance must be a non-negative whole number"),
    ]


def test_user_password_longer_than_bcrypt_limit_is_rejected():
    violations = validate_user("a@company.com", RoleName.STAFF, password="p" * 73)
    assert violations == [("password", "Password must be at most 72 bytes long")]


def test_manager_staff_mapping_validation():
    assert validate_manager_staff_mapping(1, 2, date(2025, 1, 1)) == []
    assert validate_manager_staff_mapping(1, 1, date(2025, 1, 1))[0][0] == "managerId"
    assert validate_manager_staff_mapping(1, 2, date(2025, 1, 2), date(2025, 1, 1)) == [
        ("endDate", "End date cannot be before the start date")
    ]


def test_leave_type_validation():
    assert validate_leave_type("Sick Leave", 10, 0) == []
    violations = validate_leave_type("", -1, "five")
    assert violations == [
        ("name", "Leave type name is required"),
        ("defaultBalance", "Default balance must be a non-negative whole number"),
        ("maxRollover", "Max rollover must be a non-negative whole number"),
    ]
