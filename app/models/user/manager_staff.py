"""
Manager-staff mapping model.
"""

from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel

if TYPE_CHECKING:
    from app.models.user.user import User


class ManagerStaffMapping(TimestampModel):
    """
    Assignment of a staff user to a manager for a date range.

    A mapping is active on a day when start_date <= day and end_date is
    absent or on/after that day. Each (manager, staff) pair exists once.
    """

    __tablename__ = "manager_staff_mappings"
    __table_args__ = (
        UniqueConstraint("manager_id", "staff_id", name="uq_manager_staff_pair"),
        CheckConstraint(
            "end_date IS NULL OR end_date >= start_date",
            name="ck_manager_staff_date_order"
        ),
    )

    manager_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    staff_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    manager: Mapped["User"] = relationship("User", foreign_keys=[manager_id], lazy="select")
    staff: Mapped["User"] = relationship("User", foreign_keys=[staff_id], lazy="select")

    def is_active_on(self, day: date) -> bool:
        return self.start_date <= day and (self.end_date is None or self.end_date >= day)

    def __repr__(self) -> str:
        return (
            f"<ManagerStaffMapping(id={self.id}, manager_id={self.manager_id}, "
            f"staff_id={self.staff_id})>"
        )
