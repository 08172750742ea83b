"""
User model.

Holds identity, role reference, credentials and the annual leave
balance counter mutated by the leave lifecycle.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.models.base.base_model import TimestampModel

if TYPE_CHECKING:
    from app.models.user.role import Role

DEFAULT_ANNUAL_LEAVE_BALANCE = 25


class User(TimestampModel):
    """
    Application user.

    The role is joined on every load; other relations are loaded by the
    repositories explicitly.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "annual_leave_balance >= 0",
            name="ck_user_annual_leave_balance_non_negative"
        ),
    )

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    salt: Mapped[str] = mapped_column(String(64), nullable=False)

    role_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("roles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    department: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    annual_leave_balance: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=DEFAULT_ANNUAL_LEAVE_BALANCE,
    )

    # Relationships
    role: Mapped["Role"] = relationship("Role", lazy="joined")

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        return value.strip().lower() if value else value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
