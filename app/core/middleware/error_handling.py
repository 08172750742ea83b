"""
Exception handlers rendering every failure as the error envelope:

    {"success": false, "error": {"code", "message", "status", "details", "timestamp"}}
"""

from typing import List, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config.logging import get_logger
from app.core.constants import HEADER_CORRELATION_ID
from app.core.exceptions import (
    BaseAppException,
    ErrorCode,
    InternalError,
    ValidationFailedError,
)

logger = get_logger(__name__)

_HTTP_STATUS_CODES = {
    401: ErrorCode.NOT_AUTHENTICATED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
}


def _error_response(exception: BaseAppException, request: Request) -> JSONResponse:
    headers = {}
    correlation_id = getattr(request.state, "correlation_id", None)
    if correlation_id:
        headers[HEADER_CORRELATION_ID] = correlation_id
    return JSONResponse(
        status_code=exception.status_code,
        content=exception.to_dict(),
        headers=headers,
    )


async def handle_application_exception(request: Request, exc: BaseAppException) -> JSONResponse:
    """Handle custom application exceptions"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error_code.value} - {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code.value}: {exc.message}")
    return _error_response(exc, request)


def _violations_from(exc: RequestValidationError) -> List[Tuple[str, str]]:
    violations = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        violations.append((".".join(location) or "body", error.get("msg", "Invalid value")))
    return violations


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Framework-level body/query validation failures are ValidationFailed (400)."""
    error = ValidationFailedError(_violations_from(exc))
    logger.info(f"{request.method} {request.url.path} -> 400 request validation failed: {error.message}")
    return _error_response(error, request)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (unknown path, wrong method) in the same envelope"""
    if exc.status_code >= 500:
        code = ErrorCode.INTERNAL_ERROR
    else:
        code = _HTTP_STATUS_CODES.get(exc.status_code, ErrorCode.INVALID_INPUT)
    error = BaseAppException(str(exc.detail), code, None, exc.status_code)
    return _error_response(error, request)


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Anything that escaped the service boundaries"""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return _error_response(InternalError(), request)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, handle_application_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)
