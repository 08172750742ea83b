import os
from datetime import timedelta

# Settings are read at import time, so the test environment must be in
# place before anything under ``app`` is imported.
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-the-leave-service")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.core.permissions import Principal, RoleName
from app.core.security import create_access_token, hash_password
from app.db.base import Base
from app.db.init_db import drop_db, seed_reference_data
from app.models.user.manager_staff import ManagerStaffMapping
from app.models.user.role import Role
from app.models.user.user import User
from app.repositories.leave.leave_request_repository import LeaveRequestRepository
from app.repositories.leave.leave_type_repository import LeaveTypeRepository
from app.repositories.user.manager_staff_repository import ManagerStaffRepository
from app.repositories.user.role_repository import RoleRepository
from app.repositories.user.user_repository import UserRepository
from app.services.leave.leave_balance_service import LeaveBalanceService
from app.services.leave.leave_request_service import LeaveRequestService
from app.services.leave.leave_type_service import LeaveTypeService
from app.services.users.user_management_service import UserManagementService
from app.services.users.user_service import UserService
from app.utils.date_utils import today_utc

TEST_PASSWORD = "correct-horse-battery"

# Hashing once keeps user fixtures fast
_PASSWORD_HASH, _SALT = hash_password(TEST_PASSWORD)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    drop_db(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )
    session = TestingSessionLocal()
    seed_reference_data(session)
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role=RoleName.STAFF, email=None, balance=25, first_name="Test", last_name="User"):
        counter["n"] += 1
        role_name = RoleName(role)
        role_obj = db.scalar(select(Role).where(Role.name == role_name))
        user = User(
            email=email or f"{role_name.value}{counter['n']}@company.com",
            password_hash=_PASSWORD_HASH,
            salt=_SALT,
            role=role_obj,
            first_name=first_name,
            last_name=last_name,
            annual_leave_balance=balance,
        )
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def assign(db):
    """Map staff to manager directly, active since yesterday by default."""

    def _assign(manager, staff, start_date=None, end_date=None):
        mapping = ManagerStaffMapping(
            manager_id=manager.id,
            staff_id=staff.id,
            start_date=start_date or today_utc() - timedelta(days=1),
            end_date=end_date,
        )
        db.add(mapping)
        db.commit()
        return mapping

    return _assign


def principal_for(user):
    return Principal(email=user.email, role=user.role.name)


def auth_headers(user):
    token = create_access_token(user.email, user.role.name)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def as_principal():
    return principal_for


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def leave_service(db):
    return LeaveRequestService(
        db,
        LeaveRequestRepository(db),
        UserRepository(db),
        ManagerStaffRepository(db),
    )


@pytest.fixture
def balance_service(db):
    return LeaveBalanceService(db, UserRepository(db), ManagerStaffRepository(db))


@pytest.fixture
def leave_type_service(db):
    return LeaveTypeService(db, LeaveTypeRepository(db), LeaveRequestRepository(db))


@pytest.fixture
def user_service(db):
    return UserService(db, UserRepository(db), RoleRepository(db))


@pytest.fixture
def management_service(db):
    return UserManagementService(db, UserRepository(db), ManagerStaffRepository(db))


@pytest.fixture
def client(db):
    from app.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
