"""
Role repository.
"""

from typing import Optional, Sequence

from sqlalchemy.orm import Session

from app.core.permissions import RoleName
from app.models.user.role import Role
from app.repositories.base import BaseRepository


class RoleRepository(BaseRepository[Role]):

    def __init__(self, session: Session):
        super().__init__(session, Role)

    def get_by_name(self, name: RoleName) -> Optional[Role]:
        stmt = self._base_select().where(Role.name == name)
        return self.session.execute(stmt).scalar_one_or_none()

    def list_roles(self) -> Sequence[Role]:
        return self.get_multi(order_by=[Role.id.asc()])
