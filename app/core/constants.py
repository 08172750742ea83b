# app/core/constants.py
from __future__ import annotations

"""
Core application constants.

User-facing messages live here so services, routes and tests
refer to one spelling of each message.
"""

# Common HTTP header names
HEADER_CORRELATION_ID: str = "X-Correlation-ID"
HEADER_PROCESS_TIME: str = "X-Process-Time"

# Inclusive day counts are measured in whole calendar days
ISO_DATE_FORMAT: str = "%Y-%m-%d"


class ErrorMessages:
    """Messages returned to API callers."""

    # Generic
    INTERNAL_ERROR = "An error occurred while processing the request"
    ACCESS_DENIED = "Access denied - You do not have the required permission to make this request"

    # Authentication
    UNAUTHORISED_USER = "User not authorised"
    TOKEN_NOT_FOUND = "Not authorised - Token not found"
    TOKEN_INVALID = "Not authorised - Token is invalid"

    # Users
    INVALID_USER_ID = "Invalid user ID"
    USER_NOT_FOUND = "User not found"
    EMAIL_ALREADY_IN_USE = "Email is already in use"
    ROLE_NOT_FOUND = "Role not found"
    FAILED_TO_RETRIEVE_USERS = "Failed to retrieve users"
    FAILED_TO_RETRIEVE_USER = "Failed to retrieve user"
    FAILED_TO_CREATE_USER = "Failed to create user"
    FAILED_TO_UPDATE_USER = "Failed to update user"

    @staticmethod
    def user_not_found_with_id(user_id: int) -> str:
        return f"User not found with ID: {user_id}"

    @staticmethod
    def email_not_found(email: str) -> str:
        return f"{email} not found"

    # Manager-staff mapping
    STAFF_OR_MANAGER_ID_REQUIRED = "Both staffId and managerId are required"
    STAFF_OR_MANAGER_NOT_FOUND = "Staff or manager user not found"
    ASSIGNMENT_ALREADY_EXISTS = "This staff is already assigned to the given manager"
    ASSIGNMENT_FAILED = "Failed to assign manager"
    ASSIGNMENT_SUCCESS = "Manager assigned to staff successfully"
    INVALID_START_DATE = "Start date must be a valid date"
    INVALID_END_DATE = "End date must be a valid date"
    INVALID_MANAGER_ID = "Invalid manager ID"
    FAILED_TO_RETRIEVE_STAFF = "Failed to retrieve staff"
    NO_STAFF_ASSIGNED = "No staff are currently assigned to you"

    # Leave requests
    INVALID_LEAVE_ID = "Invalid leave request ID"
    LEAVE_REQUEST_NOT_FOUND = "Leave request not found"
    OVERLAPPING_LEAVE = "Leave dates overlap with an existing request"
    LEAVE_EXCEEDS_BALANCE = "Days requested exceed remaining balance"
    INSUFFICIENT_BALANCE = "Insufficient leave balance to approve"
    UNAUTHORISED_CANCEL = "Not authorised to cancel this request"
    NOT_AUTHORISED_TO_REVIEW = "Not authorised to review leave requests for this user"
    NOT_AUTHORISED_TO_VIEW_USER = "Not authorised to view leave information for this user"
    INVALID_STATUS_FILTER = "Invalid status filter"
    LEAVE_SUBMITTED = "Leave request submitted"
    LEAVE_APPROVED = "Leave request approved"
    LEAVE_REJECTED = "Leave request rejected"
    LEAVE_CANCELLED = "Leave request cancelled"
    NO_PENDING_FOR_MANAGER = "No pending requests for your staff"
    FAILED_TO_SUBMIT = "Failed to submit leave request"
    FAILED_TO_APPROVE = "Failed to approve leave request"
    FAILED_TO_REJECT = "Failed to reject the leave request"
    FAILED_TO_CANCEL = "Failed to cancel leave request"
    FAILED_TO_RETRIEVE_LEAVE = "Failed to retrieve leave requests"

    @staticmethod
    def cannot_approve(status: str) -> str:
        return f"Cannot approve request with status: {status}"

    @staticmethod
    def cannot_reject(status: str) -> str:
        return f"Cannot reject leave request with status: {status}"

    @staticmethod
    def cannot_cancel(status: str) -> str:
        return f"Cannot cancel request with status: {status}"

    @staticmethod
    def no_leave_requests_found(name: str) -> str:
        return f"No leave requests found for {name}"

    # Balances
    FAILED_TO_GET_REMAINING = "Failed to get remaining leave"
    FAILED_TO_UPDATE_BALANCE = "Failed to update leave balance"
    BALANCE_MUST_BE_NUMBER = "Annual leave balance must be a valid number"
    BALANCE_CANNOT_BE_NEGATIVE = "Annual leave balance cannot be negative"
    BALANCE_UPDATED = "Leave balance successfully updated"

    # Leave types
    INVALID_LEAVE_TYPE_ID = "Invalid leave type ID"
    LEAVE_TYPE_NAME_IN_USE = "A leave type with this name already exists"
    LEAVE_TYPE_IN_USE = "Leave type is in use by existing leave requests"
    FAILED_TO_RETRIEVE_LEAVE_TYPES = "Failed to retrieve leave types"
    FAILED_TO_CREATE_LEAVE_TYPE = "Failed to create leave type"
    FAILED_TO_UPDATE_LEAVE_TYPE = "Failed to update leave type"
    FAILED_TO_DELETE_LEAVE_TYPE = "Failed to delete leave type"

    @staticmethod
    def leave_type_not_found(leave_type_id: int) -> str:
        return f"Leave type not found with ID: {leave_type_id}"
