"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the leave management service
"""
from fastapi import APIRouter

from app.api.v1 import leave_requests, leave_types, user_management, users
from app.schemas.common.response import ErrorResponse

# Create main API v1 router with proper configuration
router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request"},
        401: {"model": ErrorResponse, "description": "Unauthorized"},
        403: {"model": ErrorResponse, "description": "Forbidden"},
        404: {"model": ErrorResponse, "description": "Not Found"},
        409: {"model": ErrorResponse, "description": "Conflict"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    }
)

router.include_router(leave_requests.router)
router.include_router(user_management.router)
router.include_router(users.router)
router.include_router(users.roles_router)
router.include_router(leave_types.router)
