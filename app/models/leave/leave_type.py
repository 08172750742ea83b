"""
Leave type catalog model.
"""

from typing import Optional

from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import TimestampModel


class LeaveType(TimestampModel):
    """Named category of leave with its allowance policy."""

    __tablename__ = "leave_types"
    __table_args__ = (
        CheckConstraint("default_balance >= 0", name="ck_leave_type_default_balance"),
        CheckConstraint("max_rollover >= 0", name="ck_leave_type_max_rollover"),
    )

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    default_balance: Mapped[int] = mapped_column(Integer, nullable=False, default=25)
    max_rollover: Mapped[int] = mapped_column(Integer, nullable=False, default=5)

    def __repr__(self) -> str:
        return f"<LeaveType(id={self.id}, name={self.name})>"
