"""
User directory service.

Registration and profile updates are administrative; reads are open
to managers and admins, and every authenticated user can read their
own record. Users are never deleted here.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.constants import ErrorMessages
from app.core.exceptions import (
    ConflictError,
    InvalidValueError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from app.core.permissions import Capability, Principal, RoleName, require_capability
from app.core.security import hash_password
from app.models.base.validators import validate_user
from app.models.user.role import Role
from app.models.user.user import User
from app.repositories.user.role_repository import RoleRepository
from app.repositories.user.user_repository import UserRepository
from app.schemas.user.user import UserCreate, UserUpdate
from app.services.base.base_service import BaseService
from app.utils.validators import normalize_email, parse_id


class UserService(BaseService):

    def __init__(self, db_session: Session, users: UserRepository, roles: RoleRepository):
        super().__init__(db_session)
        self.users = users
        self.roles = roles

    def me(self, principal: Principal) -> User:
        with self.operation_boundary("get current user", ErrorMessages.FAILED_TO_RETRIEVE_USER, principal.email):
            return self._resolve_caller(self.users, principal)

    def list_users(self, principal: Principal) -> List[User]:
        with self.operation_boundary("list users", ErrorMessages.FAILED_TO_RETRIEVE_USERS):
            require_capability(principal, Capability.VIEW_USERS)
            return list(self.users.list_users())

    def get_by_id(self, principal: Principal, user_id: str) -> User:
        with self.operation_boundary("get user", ErrorMessages.FAILED_TO_RETRIEVE_USER, user_id):
            require_capability(principal, Capability.VIEW_USERS)
            parsed_id = parse_id(user_id, ErrorMessages.INVALID_USER_ID, "id")
            user = self.users.get(parsed_id)
            if user is None:
                raise ResourceNotFoundError(
                    "User", parsed_id, message=ErrorMessages.user_not_found_with_id(parsed_id)
                )
            return user

    def get_by_email(self, principal: Principal, email: str) -> User:
        with self.operation_boundary("get user by email", ErrorMessages.FAILED_TO_RETRIEVE_USER, email):
            require_capability(principal, Capability.VIEW_USERS)
            user = self.users.get_by_email(email)
            if user is None:
                raise ResourceNotFoundError("User", email, message=ErrorMessages.email_not_found(email))
            return user

    def create(self, principal: Principal, payload: UserCreate) -> User:
        """Register a new user; the email must not be in use."""
        with self.operation_boundary("create user", ErrorMessages.FAILED_TO_CREATE_USER, payload.email):
            require_capability(principal, Capability.MANAGE_USERS)

            balance = payload.annual_leave_balance
            if balance is None:
                balance = settings.DEFAULT_ANNUAL_LEAVE_BALANCE
            role = self._find_role(payload.role)

            violations = validate_user(
                payload.email,
                role,
                password=payload.password,
                first_name=payload.first_name,
                last_name=payload.last_name,
                annual_leave_balance=balance,
                require_password=True,
            )
            if violations:
                raise ValidationFailedError(violations)

            email = normalize_email(payload.email)
            if self.users.email_exists(email):
                raise ConflictError(ErrorMessages.EMAIL_ALREADY_IN_USE, details={"email": email})

            password_hash, salt = hash_password(payload.password)
            with self.transaction():
                user = self.users.create(
                    User(
                        email=email,
                        password_hash=password_hash,
                        salt=salt,
                        role=role,
                        first_name=payload.first_name,
                        last_name=payload.last_name,
                        department=payload.department,
                        annual_leave_balance=balance,
                    )
                )

            self._logger.info(f"User {user.email} created with role '{role.name.value}'")
            return user

    def update(self, principal: Principal, user_id: str, payload: UserUpdate) -> User:
        with self.operation_boundary("update user", ErrorMessages.FAILED_TO_UPDATE_USER, user_id):
            require_capability(principal, Capability.MANAGE_USERS)
            parsed_id = parse_id(user_id, ErrorMessages.INVALID_USER_ID, "id")
            user = self.users.get(parsed_id)
            if user is None:
                raise ResourceNotFoundError(
                    "User", parsed_id, message=ErrorMessages.user_not_found_with_id(parsed_id)
                )

            changes = payload.model_dump(exclude_unset=True, exclude_none=True)
            role = self._find_role(changes["role"]) if "role" in changes else user.role

            violations = validate_user(
                user.email,
                role,
                password=changes.get("password"),
                first_name=changes.get("first_name"),
                last_name=changes.get("last_name"),
            )
            if violations:
                raise ValidationFailedError(violations)

            with self.transaction():
                for attr in ("first_name", "last_name", "department"):
                    if attr in changes:
                        setattr(user, attr, changes[attr])
                if "role" in changes:
                    user.role = role
                if "password" in changes:
                    user.password_hash, user.salt = hash_password(changes["password"])
                self.db.flush()

            self._logger.info(f"User {user.email} updated by {principal.email}")
            return user

    def list_roles(self, principal: Principal) -> List[Role]:
        with self.operation_boundary("list roles", ErrorMessages.FAILED_TO_RETRIEVE_USERS):
            return list(self.roles.list_roles())

    def _find_role(self, name: str) -> Optional[Role]:
        """Seeded role for a name; None when no name was given."""
        if not name or not name.strip():
            return None
        try:
            role_name = RoleName(name)
        except ValueError:
            raise InvalidValueError(ErrorMessages.ROLE_NOT_FOUND, "role")
        role = self.roles.get_by_name(role_name)
        if role is None:
            raise ResourceNotFoundError("Role", role_name.value, message=ErrorMessages.ROLE_NOT_FOUND)
        return role
