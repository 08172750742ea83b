"""
Custom Exceptions for the Leave Management Application

Every failure a lifecycle operation can report is one subclass of
BaseAppException carrying an error code, an HTTP status class and a
human-readable message.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # Authentication & Authorization
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"

    # Lookup
    NOT_FOUND = "NOT_FOUND"

    # Input errors
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_DATE = "INVALID_DATE"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    INVALID_VALUE = "INVALID_VALUE"
    VALIDATION_FAILED = "VALIDATION_FAILED"

    # Business logic errors
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"
    OVERLAPPING_REQUEST = "OVERLAPPING_REQUEST"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    ALREADY_ASSIGNED = "ALREADY_ASSIGNED"
    CONFLICT = "CONFLICT"

    # Catch-all
    INTERNAL_ERROR = "INTERNAL_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the error envelope"""
        return {
            "success": False,
            "error": {
                "code": self.error_code.value,
                "message": self.message,
                "status": self.status_code,
                "details": self.details,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Authentication & Authorization
# ========================================

class AuthenticationError(BaseAppException):
    """Raised when the caller's identity cannot be resolved"""

    def __init__(self, message: str = "User not authorised"):
        super().__init__(message, ErrorCode.NOT_AUTHENTICATED, None, 401)


class ForbiddenError(BaseAppException):
    """Raised when the caller lacks permission for an action"""

    def __init__(
        self,
        message: str = "Access denied - You do not have the required permission to make this request",
        required_capability: Optional[str] = None,
    ):
        details = {"required_capability": required_capability} if required_capability else None
        super().__init__(message, ErrorCode.FORBIDDEN, details, 403)


# ========================================
# Lookup
# ========================================

class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id is not None:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": str(resource_id) if resource_id is not None else None,
        }
        super().__init__(message, ErrorCode.NOT_FOUND, details, 404)


# ========================================
# Input errors
# ========================================

class InvalidInputError(BaseAppException):
    """Malformed id, date, enum or other scalar input"""

    def __init__(
        self,
        message: str = "Invalid input",
        field: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.INVALID_INPUT,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if field:
            details["field"] = field
        super().__init__(message, error_code, details, 400)
        self.field = field


class MissingFieldError(InvalidInputError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, field, ErrorCode.MISSING_REQUIRED_FIELD)


class InvalidDateError(InvalidInputError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, field, ErrorCode.INVALID_DATE)


class InvalidDateRangeError(InvalidInputError):
    """End date not strictly after start date"""

    def __init__(self, start: str, end: str):
        super().__init__(
            f"End date of {end} is before the start date of {start}",
            "endDate",
            ErrorCode.INVALID_DATE_RANGE,
            {"start_date": start, "end_date": end},
        )


class InvalidValueError(InvalidInputError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, field, ErrorCode.INVALID_VALUE)


class ValidationFailedError(BaseAppException):
    """
    Field-level constraint violations.

    The message is the first violation found; every violation is
    listed under details.field_errors.
    """

    def __init__(self, violations: List[Tuple[str, str]]):
        message = violations[0][1] if violations else "Validation failed"
        field_errors: Dict[str, List[str]] = {}
        for field, violation in violations:
            field_errors.setdefault(field, []).append(violation)
        super().__init__(message, ErrorCode.VALIDATION_FAILED, {"field_errors": field_errors}, 400)
        self.violations = list(violations)


# ========================================
# Business logic errors
# ========================================

class InvalidStateTransitionError(BaseAppException):
    """Requested transition is not allowed from the current status"""

    def __init__(self, message: str, current_status: str):
        super().__init__(
            message,
            ErrorCode.INVALID_STATE_TRANSITION,
            {"current_status": current_status},
            400,
        )
        self.current_status = current_status


class OverlappingRequestError(BaseAppException):
    def __init__(
        self,
        message: str = "Leave dates overlap with an existing request",
        conflicting_ids: Optional[List[int]] = None,
    ):
        super().__init__(
            message,
            ErrorCode.OVERLAPPING_REQUEST,
            {"conflicting_request_ids": conflicting_ids or []},
            400,
        )


class InsufficientBalanceError(BaseAppException):
    def __init__(self, message: str, requested_days: int, available_days: int):
        super().__init__(
            message,
            ErrorCode.INSUFFICIENT_BALANCE,
            {"requested_days": requested_days, "available_days": available_days},
            400,
        )


class ConflictError(BaseAppException):
    """Operation conflicts with existing state"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFLICT,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details, 409)


class AlreadyAssignedError(ConflictError):
    def __init__(
        self,
        message: str = "This staff is already assigned to the given manager",
        manager_id: Optional[int] = None,
        staff_id: Optional[int] = None,
    ):
        super().__init__(
            message,
            ErrorCode.ALREADY_ASSIGNED,
            {"manager_id": manager_id, "staff_id": staff_id},
        )


# ========================================
# Catch-all
# ========================================

class InternalError(BaseAppException):
    """Unexpected failure converted at an operation boundary"""

    def __init__(self, message: str = "An error occurred while processing the request"):
        super().__init__(message, ErrorCode.INTERNAL_ERROR, None, 500)
