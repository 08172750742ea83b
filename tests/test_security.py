from datetime import timedelta

import pytest

from app.core.constants import ErrorMessages
from app.core.exceptions import AuthenticationError, ForbiddenError
from app.core.permissions import (
    Capability,
    Principal,
    RoleName,
    has_capability,
    require_capability,
)
from app.core.security import (
    TokenManager,
    create_access_token,
    hash_password,
    resolve_principal,
    verify_password,
)


def test_password_hash_round_trip():
    password_hash, salt = hash_password("a-long-password")
    assert password_hash.startswith(salt[:29])
    assert verify_password("a-long-password", password_hash)
    assert not verify_password("another-password", password_hash)


def test_resolve_principal_from_access_token():
    token = create_access_token("Jane.Doe@Company.com", RoleName.MANAGER)
    principal = resolve_principal(token)
    assert principal == Principal(email="jane.doe@company.com", role=RoleName.MANAGER)


def test_role_claim_is_case_insensitive():
    token = TokenManager.create_token({"sub": "a@company.com", "email": "a@company.com", "role": "ADMIN"})
    assert resolve_principal(token).role is RoleName.ADMIN


def test_missing_token_is_not_authenticated():
    with pytest.raises(AuthenticationError) as exc_info:
        resolve_principal(None)
    assert exc_info.value.message == ErrorMessages.TOKEN_NOT_FOUND
    assert exc_info.value.status_code == 401


@pytest.mark.parametrize(
    "token",
    [
        "not-a-jwt",
        create_access_token("a@company.com", "staff", expires_delta=timedelta(minutes=-5)),
        TokenManager.create_token({"sub": "a@company.com"}),
        TokenManager.create_token({"email": "a@company.com", "role": "intern"}),
    ],
)
def test_unusable_tokens_are_not_authenticated(token):
    with pytest.raises(AuthenticationError) as exc_info:
        resolve_principal(token)
    assert exc_info.value.message == ErrorMessages.TOKEN_INVALID


def test_tampered_token_is_rejected():
    token = create_access_token("a@company.com", RoleName.STAFF)
    header, payload, signature = token.split(".")
    forged = ".".join([header, payload, signature[::-1]])
    with pytest.raises(AuthenticationError):
        resolve_principal(forged)


def test_role_capabilities():
    staff = Principal("s@company.com", RoleName.STAFF)
    manager = Principal("m@company.com", RoleName.MANAGER)
    admin = Principal("a@company.com", RoleName.ADMIN)

    assert has_capability(staff, Capability.REQUEST_LEAVE)
    assert not has_capability(staff, Capability.REVIEW_LEAVE)
    assert has_capability(manager, Capability.REVIEW_LEAVE)
    assert has_capability(manager, Capability.VIEW_TEAM_BALANCE)
    assert not has_capability(manager, Capability.OVERWRITE_BALANCE)
    assert not has_capability(manager, Capability.CANCEL_ANY_LEAVE)
    assert all(has_capability(admin, capability) for capability in Capability)


def test_require_capability_raises_forbidden():
    staff = Principal("s@company.com", RoleName.STAFF)
    with pytest.raises(ForbiddenError) as exc_info:
        require_capability(staff, Capability.ASSIGN_MANAGERS)
    assert exc_info.value.status_code == 403
    assert exc_info.value.details == {"required_capability": "users.assign_managers"}
