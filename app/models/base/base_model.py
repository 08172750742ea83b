"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and the abstract base model with an
integer primary key and simple serialization helpers.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from app.models.base.mixins import TimestampMixin

# Create declarative base
Base = declarative_base()


class BaseModel(Base):
    """
    Abstract base model with common fields and methods.

    Provides foundation for all database models with
    standard functionality and utilities.
    """

    __abstract__ = True

    # Primary key column - present in all models
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    def to_dict(self, exclude: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Convert model instance to dictionary.

        Args:
            exclude: List of field names to exclude

        Returns:
            Dictionary representation of the model
        """
        exclude = exclude or []
        result = {}

        for column in self.__table__.columns:
            if column.name in exclude:
                continue
            value = getattr(self, column.name)
            if isinstance(value, (datetime, date)):
                result[column.name] = value.isoformat()
            elif hasattr(value, "value"):
                result[column.name] = value.value
            else:
                result[column.name] = value

        return result

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


class TimestampModel(BaseModel, TimestampMixin):
    """Base model with created_at / updated_at tracking."""

    __abstract__ = True
