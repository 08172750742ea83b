"""
Manager-staff mapping repository.

"Active" means start_date <= day and (end_date IS NULL or end_date >= day).
"""

from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.interfaces import LoaderOption
from sqlalchemy.sql.elements import ColumnElement

from app.models.user.manager_staff import ManagerStaffMapping
from app.repositories.base import BaseRepository


class ManagerStaffRepository(BaseRepository[ManagerStaffMapping]):

    def __init__(self, session: Session):
        super().__init__(session, ManagerStaffMapping)

    def _load_options(self) -> List[LoaderOption]:
        return [
            joinedload(ManagerStaffMapping.manager),
            joinedload(ManagerStaffMapping.staff),
        ]

    @staticmethod
    def _active_on(day: date) -> ColumnElement[bool]:
        return and_(
            ManagerStaffMapping.start_date <= day,
            or_(
                ManagerStaffMapping.end_date.is_(None),
                ManagerStaffMapping.end_date >= day,
            ),
        )

    def find_pair(self, manager_id: int, staff_id: int) -> Optional[ManagerStaffMapping]:
        stmt = select(ManagerStaffMapping).where(
            ManagerStaffMapping.manager_id == manager_id,
            ManagerStaffMapping.staff_id == staff_id,
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def active_staff_ids(self, manager_id: int, on: date) -> List[int]:
        stmt = (
            select(ManagerStaffMapping.staff_id)
            .where(ManagerStaffMapping.manager_id == manager_id, self._active_on(on))
            .distinct()
        )
        return list(self.session.execute(stmt).scalars().all())

    def is_active_manager_of(self, manager_id: int, staff_id: int, on: date) -> bool:
        stmt = select(ManagerStaffMapping.id).where(
            ManagerStaffMapping.manager_id == manager_id,
            ManagerStaffMapping.staff_id == staff_id,
            self._active_on(on),
        )
        return self.session.execute(stmt).first() is not None

    def list_active_for_manager(self, manager_id: int, on: date) -> Sequence[ManagerStaffMapping]:
        """Active mappings with the staff user loaded, ordered by staff id."""
        stmt = (
            self._base_select()
            .where(ManagerStaffMapping.manager_id == manager_id, self._active_on(on))
            .order_by(ManagerStaffMapping.staff_id.asc())
        )
        return self.session.execute(stmt).unique().scalars().all()
