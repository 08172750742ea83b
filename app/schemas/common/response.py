# --- File: app/schemas/common/response.py ---
"""
Standard API response wrappers for success and error envelopes.
"""

from typing import Any, Dict, Generic, Optional, TypeVar, Union

from pydantic import Field

from app.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "SuccessResponse",
    "ErrorBody",
    "ErrorResponse",
]


class SuccessResponse(BaseSchema, Generic[T]):
    """Standard success response."""

    success: bool = Field(default=True, description="Success flag")
    message: Optional[str] = Field(default=None, description="Informational message")
    data: Union[T, None] = Field(default=None, description="Response data")

    @classmethod
    def create(
        cls,
        data: Union[T, None] = None,
        message: Optional[str] = None,
    ):
        """Create success response."""
        return cls(success=True, message=message, data=data)


class ErrorBody(BaseSchema):
    """Error payload inside the error envelope."""

    code: str = Field(..., description="Application error code")
    message: str = Field(..., description="Human-readable message")
    status: int = Field(..., description="HTTP status class")
    details: Dict[str, Any] = Field(default_factory=dict)
    timestamp: str = Field(..., description="Error timestamp (ISO 8601)")


class ErrorResponse(BaseSchema):
    """Standard error response."""

    success: bool = Field(default=False, description="Success flag")
    error: ErrorBody
