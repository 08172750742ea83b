"""
Leave request database model.

A request covers an inclusive calendar-date range and moves through
Pending -> Approved | Rejected | Cancelled. Terminal statuses have no
outgoing transitions.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.enums import LeaveStatus, enum_values
from app.utils.date_utils import inclusive_day_count

if TYPE_CHECKING:
    from app.models.user.user import User

DEFAULT_LEAVE_TYPE = "Annual Leave"


class LeaveRequest(TimestampModel):
    """
    Core leave request entity.

    reason is the requester's own text; review_note carries the
    reviewer's text (e.g. the rejection reason) so neither overwrites
    the other.
    """

    __tablename__ = "leave_requests"
    __table_args__ = (
        CheckConstraint(
            "end_date > start_date",
            name="ck_leave_request_date_order"
        ),
        Index("ix_leave_request_user_status", "user_id", "status"),
        Index("ix_leave_request_user_dates", "user_id", "start_date", "end_date"),
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    leave_type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default=DEFAULT_LEAVE_TYPE,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[LeaveStatus] = mapped_column(
        Enum(LeaveStatus, name="leave_status", values_callable=enum_values, validate_strings=True),
        nullable=False,
        default=LeaveStatus.PENDING,
        index=True,
    )
    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Review metadata
    review_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reviewed_by_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped["User"] = relationship(
        "User",
        foreign_keys=[user_id],
        lazy="select",
    )

    @property
    def day_count(self) -> int:
        """Inclusive number of days covered, recomputed from the stored dates."""
        return inclusive_day_count(self.start_date, self.end_date)

    def __repr__(self) -> str:
        return (
            f"<LeaveRequest(id={self.id}, user_id={self.user_id}, "
            f"{self.start_date}..{self.end_date}, status={self.status})>"
        )
