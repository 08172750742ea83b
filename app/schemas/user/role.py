"""
Role schemas.
"""

from typing import Optional

from app.core.permissions import RoleName
from app.schemas.common.base import BaseSchema


class RoleResponse(BaseSchema):
    id: int
    name: RoleName
    description: Optional[str] = None
