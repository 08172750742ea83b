"""
Leave type repository.
"""

from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.leave.leave_type import LeaveType
from app.repositories.base import BaseRepository


class LeaveTypeRepository(BaseRepository[LeaveType]):

    def __init__(self, session: Session):
        super().__init__(session, LeaveType)

    def get_by_name(self, name: str) -> Optional[LeaveType]:
        stmt = select(LeaveType).where(func.lower(LeaveType.name) == name.strip().lower())
        return self.session.execute(stmt).scalar_one_or_none()

    def list_types(self) -> Sequence[LeaveType]:
        return self.get_multi(order_by=[LeaveType.name.asc()])
