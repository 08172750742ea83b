import pytest

from app.core.constants import ErrorMessages
from app.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    InvalidValueError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from app.core.permissions import RoleName
from app.core.security import verify_password
from app.schemas.user.user import UserCreate, UserUpdate

PASSWORD = "a-long-enough-password"



@pytest.fixture
def admin(make_user):
    return make_user(RoleName.ADMIN)


def _registration(**overrides):
    data = {
        "email": "New.Hire@Company.com",
        "password": PASSWORD,
        "first_name": "Nia",
        "last_name": "Hale",
        "role": "manager",
        "department": "Finance",
    }
    data.update(overrides)
    return UserCreate(**data)


def test_create_user_normalizes_email_and_applies_default_balance(user_service, admin, as_principal):
    user = user_service.create(as_principal(admin), _registration())

    assert user.id is not None
    assert user.email == "new.hire@company.com"
    assert user.role.name is RoleName.MANAGER
    assert user.annual_leave_balance == 25
    assert user.department == "Finance"
    assert verify_password(PASSWORD, user.password_hash)


def test_create_user_with_explicit_balance(user_service, admin, as_principal):
    user = user_service.create(as_principal(admin), _registration(role="Staff", annual_leave_balance=12))
    assert user.role.name is RoleName.STAFF
    assert user.annual_leave_balance == 12


def test_email_must_be_unique_ignoring_case(user_service, admin, as_principal):
    user_service.create(as_principal(admin), _registration())
    with pytest.raises(ConflictError) as exc_info:
        user_service.create(as_principal(admin), _registration(email="new.hire@company.com"))
    assert exc_info.value.message == ErrorMessages.EMAIL_ALREADY_IN_USE


def test_unknown_role_is_rejected(user_service, admin, as_principal):
    with pytest.raises(InvalidValueError) as exc_info:
        user_service.create(as_principal(admin), _registration(role="supervisor"))
    assert exc_info.value.message == ErrorMessages.ROLE_NOT_FOUND


def test_registration_field_violations(user_service, admin, as_principal):
    with pytest.raises(ValidationFailedError) as exc_info:
        user_service.create(
            as_principal(admin),
            _registration(email="not-an-email", password="short", role=""),
        )
    field_errors = exc_info.value.details["field_errors"]
    assert set(field_errors) == {"email", "password", "role"}
    assert exc_info.value.message == "Must be a valid email address"


def test_only_admins_register_users(user_service, make_user, as_principal):
    manager = make_user(RoleName.MANAGER)
    with pytest.raises(ForbiddenError):
        user_service.create(as_principal(manager), _registration())


def test_lookup_by_id_and_email(user_service, make_user, admin, as_principal):
    staff = make_user(RoleName.STAFF, email="pat@company.com")

    assert user_service.get_by_id(as_principal(admin), str(staff.id)).email == "pat@company.com"
    assert user_service.get_by_email(as_principal(admin), "PAT@company.com").id == staff.id

    with pytest.raises(ResourceNotFoundError) as exc_info:
        user_service.get_by_id(as_principal(admin), "999")
    assert exc_info.value.message == "User not found with ID: 999"

    with pytest.raises(ResourceNotFoundError) as exc_info:
        user_service.get_by_email(as_principal(admin), "ghost@company.com")
    assert exc_info.value.message == "ghost@company.com not found"

    with pytest.raises(InvalidInputError):
        user_service.get_by_id(as_principal(admin), "0")


def test_staff_cannot_browse_the_directory(user_service, make_user, as_principal):
    staff = make_user(RoleName.STAFF)
    with pytest.raises(ForbiddenError):
        user_service.list_users(as_principal(staff))
    assert user_service.me(as_principal(staff)).id == staff.id


def test_list_users_for_managers(user_service, make_user, as_principal):
    manager = make_user(RoleName.MANAGER)
    staff = make_user(RoleName.STAFF)
    ids = {u.id for u in user_service.list_users(as_principal(manager))}
    assert ids == {manager.id, staff.id}


def test_update_user_profile_and_role(user_service, make_user, admin, as_principal):
    staff = make_user(RoleName.STAFF)

    updated = user_service.update(
        as_principal(admin), str(staff.id), UserUpdate(first_name="Robin", role="manager")
    )
    assert updated.first_name == "Robin"
    assert updated.last_name == "User"
    assert updated.role.name is RoleName.MANAGER

    with pytest.raises(ValidationFailedError):
        user_service.update(as_principal(admin), str(staff.id), UserUpdate(password="tiny"))


def test_roles_are_seeded(user_service, make_user, as_principal):
    staff = make_user(RoleName.STAFF)
    names = {role.name for role in user_service.list_roles(as_principal(staff))}
    assert names == {RoleName.ADMIN, RoleName.MANAGER, RoleName.STAFF}
