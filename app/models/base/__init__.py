"""
Base models package.

Provides the declarative base, mixins, enums and entity validators
for all database models.
"""

from app.models.base.base_model import Base, BaseModel, TimestampModel
from app.models.base.enums import LeaveStatus, RoleName, enum_values
from app.models.base.mixins import TimestampMixin

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "TimestampMixin",
    "LeaveStatus",
    "RoleName",
    "enum_values",
]
