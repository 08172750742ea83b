from app.core.middleware.error_handling import register_exception_handlers
from app.core.middleware.request_logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware", "register_exception_handlers"]
