"""
User repository.
"""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.interfaces import LoaderOption

from app.models.user.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User lookups; every returned user has its role loaded."""

    def __init__(self, session: Session):
        super().__init__(session, User)

    def _load_options(self) -> List[LoaderOption]:
        return [joinedload(User.role)]

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = self._base_select().where(User.email == email.strip().lower())
        return self.session.execute(stmt).unique().scalar_one_or_none()

    def email_exists(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email.strip().lower())
        return self.session.execute(stmt).first() is not None

    def get_for_update(self, user_id: int) -> Optional[User]:
        """
        Load a user row locked for the rest of the transaction.

        The lock is taken on the users table only; SQLite ignores it.
        """
        stmt = (
            self._base_select()
            .where(User.id == user_id)
            .with_for_update(of=User)
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).unique().scalar_one_or_none()

    def list_users(self) -> Sequence[User]:
        return self.get_multi(order_by=[User.id.asc()])
