import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.config.logging import correlation_id as correlation_id_var, get_logger
from app.core.constants import HEADER_CORRELATION_ID, HEADER_PROCESS_TIME

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """HTTP request/response logging middleware"""

    def __init__(self, app):
        super().__init__(app)

        # Excluded paths from detailed logging
        self.excluded_paths = {
            '/health',
            '/docs',
            '/redoc',
            '/openapi.json'
        }

    async def dispatch(self, request: Request, call_next):
        # Reuse an inbound correlation ID or generate one
        correlation_id = request.headers.get(HEADER_CORRELATION_ID) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        token = correlation_id_var.set(correlation_id)

        try:
            start_time = time.perf_counter()
            response = await call_next(request)
            process_time = time.perf_counter() - start_time

            if request.url.path not in self.excluded_paths:
                logger.info(
                    f"{request.method} {request.url.path} -> {response.status_code} ({process_time:.4f}s)",
                    extra={
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": response.status_code,
                        "duration": round(process_time, 4),
                        "client_ip": request.client.host if request.client else None,
                    },
                )

            response.headers[HEADER_CORRELATION_ID] = correlation_id
            response.headers[HEADER_PROCESS_TIME] = f"{process_time:.4f}"
            return response
        finally:
            correlation_id_var.reset(token)
