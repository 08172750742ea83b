"""
Leave Request Repository

Queries for the leave lifecycle: overlap detection and the
self / team / unrestricted listings. Every returned request has its
owning user loaded.
"""

from datetime import date
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.interfaces import LoaderOption

from app.models.base.enums import LeaveStatus
from app.models.leave.leave_request import LeaveRequest
from app.repositories.base import BaseRepository

# Statuses that hold their dates against new requests
DATE_HOLDING_STATUSES = tuple(status for status in LeaveStatus if status.holds_dates)


class LeaveRequestRepository(BaseRepository[LeaveRequest]):

    def __init__(self, session: Session):
        super().__init__(session, LeaveRequest)

    def _load_options(self) -> List[LoaderOption]:
        return [joinedload(LeaveRequest.user)]

    @staticmethod
    def _newest_first() -> list:
        return [LeaveRequest.created_at.desc(), LeaveRequest.id.desc()]

    def find_overlapping(
        self,
        user_id: int,
        start_date: date,
        end_date: date,
    ) -> Sequence[LeaveRequest]:
        """
        Pending or approved requests of a user whose inclusive range
        intersects [start_date, end_date].
        """
        stmt = select(LeaveRequest).where(
            LeaveRequest.user_id == user_id,
            LeaveRequest.status.in_(DATE_HOLDING_STATUSES),
            LeaveRequest.start_date <= end_date,
            LeaveRequest.end_date >= start_date,
        )
        return self.session.execute(stmt).scalars().all()

    def get_with_owner(self, request_id: int) -> Optional[LeaveRequest]:
        return self.get(request_id)

    def list_for_user(
        self,
        user_id: int,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        return self.get_multi(
            filters={"user_id": user_id, "status": status},
            order_by=self._newest_first(),
        )

    def list_for_users(
        self,
        user_ids: Iterable[int],
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        user_ids = list(user_ids)
        if not user_ids:
            return []
        return self.get_multi(
            filters={"user_id": user_ids, "status": status},
            order_by=self._newest_first(),
        )

    def list_all(
        self,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        return self.get_multi(
            filters={"user_id": user_id, "status": status},
            order_by=self._newest_first(),
        )

    def count_with_leave_type(self, leave_type: str) -> int:
        stmt = select(func.count(LeaveRequest.id)).where(LeaveRequest.leave_type == leave_type)
        return self.session.execute(stmt).scalar_one()
