# app/db/init_db.py
"""Database initialization utilities."""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app.config.logging import get_logger
from app.config.settings import settings
from app.core.permissions import RoleName
from app.core.security import hash_password
from app.db.base import Base
from app.db.session import SessionLocal, engine as default_engine
from app.models.leave.leave_type import LeaveType
from app.models.user.role import Role
from app.models.user.user import User

logger = get_logger(__name__)

ROLE_DESCRIPTIONS = {
    RoleName.ADMIN: "Full administrative access",
    RoleName.MANAGER: "Reviews leave for assigned staff",
    RoleName.STAFF: "Requests and manages own leave",
}


def create_tables(engine: Optional[Engine] = None) -> None:
    """
    Create all tables that do not exist yet.

    Note: This is suitable for development/testing only.
    For production, manage the schema with migrations instead.
    """
    Base.metadata.create_all(bind=engine or default_engine)
    logger.info("Database tables created successfully")


def seed_reference_data(db: Session) -> None:
    """Insert the fixed roles and the default leave type when missing."""
    existing = set(db.scalars(select(Role.name)).all())
    for role_name in RoleName:
        if role_name not in existing:
            db.add(Role(name=role_name, description=ROLE_DESCRIPTIONS[role_name]))
            logger.info(f"Seeded role '{role_name.value}'")

    default_type = db.scalar(select(LeaveType).where(LeaveType.name == settings.DEFAULT_LEAVE_TYPE))
    if default_type is None:
        db.add(
            LeaveType(
                name=settings.DEFAULT_LEAVE_TYPE,
                description="Standard paid annual leave",
                default_balance=settings.DEFAULT_ANNUAL_LEAVE_BALANCE,
                max_rollover=5,
            )
        )
        logger.info(f"Seeded leave type '{settings.DEFAULT_LEAVE_TYPE}'")

    db.commit()


def create_bootstrap_admin(db: Session) -> Optional[User]:
    """Create the configured bootstrap admin if both email and password are set."""
    email = settings.BOOTSTRAP_ADMIN_EMAIL
    password = settings.BOOTSTRAP_ADMIN_PASSWORD
    if not email or not password:
        return None

    email = email.strip().lower()
    existing = db.scalar(select(User).where(User.email == email))
    if existing is not None:
        return existing

    admin_role = db.scalar(select(Role).where(Role.name == RoleName.ADMIN))
    password_hash, salt = hash_password(password)
    admin = User(
        email=email,
        password_hash=password_hash,
        salt=salt,
        role_id=admin_role.id,
        first_name="System",
        last_name="Administrator",
        annual_leave_balance=settings.DEFAULT_ANNUAL_LEAVE_BALANCE,
    )
    db.add(admin)
    db.commit()
    logger.info(f"Created bootstrap admin '{email}'")
    return admin


def init_db(engine: Optional[Engine] = None) -> None:
    """Create tables, seed reference data and the optional bootstrap admin."""
    try:
        create_tables(engine)
        db = SessionLocal(bind=engine) if engine is not None else SessionLocal()
        try:
            seed_reference_data(db)
            create_bootstrap_admin(db)
        finally:
            db.close()
    except Exception as e:
        logger.error(f"Error initializing database: {e}", exc_info=True)
        raise


def drop_db(engine: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing purposes.
    """
    Base.metadata.drop_all(bind=engine or default_engine)
    logger.warning("All database tables dropped")
