import pytest

from app.core.constants import ErrorMessages
from app.core.exceptions import (
    ErrorCode,
    ForbiddenError,
    InvalidInputError,
    InvalidValueError,
    ResourceNotFoundError,
)
from app.core.permissions import RoleName
from app.services.leave.balance_accounting import parse_balance_value


@pytest.mark.parametrize("value, expected", [(0, 0), (12, 12), ("12", 12), (" 7 ", 7), (12.0, 12), ("30.0", 30)])
def test_parse_balance_value_accepts_whole_non_negative_numbers(value, expected):
    assert parse_balance_value(value) == expected


@pytest.mark.parametrize("value", ["abc", "", None, True, 1.5, "2.5", "nan", [], {"days": 3}])
def test_parse_balance_value_rejects_non_numbers(value):
    with pytest.raises(InvalidValueError) as exc_info:
        parse_balance_value(value)
    assert exc_info.value.message == ErrorMessages.BALANCE_MUST_BE_NUMBER
    assert exc_info.value.error_code is ErrorCode.INVALID_VALUE


@pytest.mark.parametrize("value", [-1, "-3", -0.0 - 2])
def test_parse_balance_value_rejects_negative_numbers(value):
    with pytest.raises(InvalidValueError) as exc_info:
        parse_balance_value(value)
    assert exc_info.value.message == ErrorMessages.BALANCE_CANNOT_BE_NEGATIVE


def test_remaining_leave_for_self_and_admin(balance_service, make_user, as_principal):
    staff = make_user(RoleName.STAFF, balance=14)
    admin = make_user(RoleName.ADMIN)

    view = balance_service.get_remaining(as_principal(staff), str(staff.id))
    assert (view.user_id, view.email, view.annual_leave_balance) == (staff.id, staff.email, 14)
    assert balance_service.get_remaining(as_principal(admin), str(staff.id)).annual_leave_balance == 14


def test_remaining_leave_of_someone_else_is_forbidden(balance_service, make_user, assign, as_principal):
    staff = make_user(RoleName.STAFF)
    manager = make_user(RoleName.MANAGER)
    assign(manager, staff)

    with pytest.raises(ForbiddenError):
        balance_service.get_remaining(as_principal(make_user(RoleName.STAFF)), str(staff.id))
    with pytest.raises(ForbiddenError):
        balance_service.get_remaining(as_principal(manager), str(staff.id))


def test_team_balance_visibility(balance_service, make_user, assign, as_principal):
    staff = make_user(RoleName.STAFF, balance=9)
    outsider = make_user(RoleName.STAFF)
    manager = make_user(RoleName.MANAGER)
    assign(manager, staff)

    assert balance_service.get_balance(as_principal(manager), str(staff.id)).annual_leave_balance == 9
    with pytest.raises(ForbiddenError):
        balance_service.get_balance(as_principal(manager), str(outsider.id))
    with pytest.raises(ForbiddenError):
        balance_service.get_balance(as_principal(staff), str(staff.id))


def test_update_balance_is_admin_only_and_overwrites(balance_service, make_user, as_principal):
    staff = make_user(RoleName.STAFF, balance=3)
    manager = make_user(RoleName.MANAGER)
    admin = make_user(RoleName.ADMIN)

    with pytest.raises(ForbiddenError):
        balance_service.update_balance(as_principal(manager), str(staff.id), 40)

    view = balance_service.update_balance(as_principal(admin), str(staff.id), "40")
    assert view.annual_leave_balance == 40
    assert balance_service.get_remaining(as_principal(staff), str(staff.id)).annual_leave_balance == 40


def test_update_balance_reports_invalid_values_and_ids(balance_service, make_user, as_principal):
    admin = make_user(RoleName.ADMIN)
    staff = make_user(RoleName.STAFF)

    with pytest.raises(InvalidValueError) as exc_info:
        balance_service.update_balance(as_principal(admin), str(staff.id), -5)
    assert exc_info.value.message == ErrorMessages.BALANCE_CANNOT_BE_NEGATIVE

    with pytest.raises(InvalidInputError) as exc_info:
        balance_service.update_balance(as_principal(admin), "x1", 5)
    assert exc_info.value.message == ErrorMessages.INVALID_USER_ID

    with pytest.raises(ResourceNotFoundError):
        balance_service.update_balance(as_principal(admin), "999", 5)
