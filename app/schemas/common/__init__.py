from app.schemas.common.base import BaseSchema
from app.schemas.common.response import ErrorBody, ErrorResponse, SuccessResponse

__all__ = ["BaseSchema", "SuccessResponse", "ErrorBody", "ErrorResponse"]
