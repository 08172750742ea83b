"""
Role model.
"""

from typing import Optional

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel
from app.models.base.enums import RoleName, enum_values


class Role(BaseModel):
    """Seeded role record; one row per RoleName member."""

    __tablename__ = "roles"

    name: Mapped[RoleName] = mapped_column(
        Enum(RoleName, name="role_name", values_callable=enum_values, validate_strings=True),
        unique=True,
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name.value})>"
