"""Shared error models and exceptions for consistent error handling across handlers"""

from enum import Enum
from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Standard error codes for API responses"""

    # Client errors (4xx)
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"


class ErrorDetail(BaseModel):
    """Structured error detail for API responses"""

    code: ErrorCode
    message: str

    class Config:
        use_enum_values = True


class ClientInputError(Exception):
    """Request rejected before any side effect; surfaced as a 4xx response."""

    status_code = 400
    code = ErrorCode.BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(code=self.code, message=self.message)


class UnauthorizedError(ClientInputError):
    status_code = 401
    code = ErrorCode.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class PayloadTooLargeError(ClientInputError):
    status_code = 413
    code = ErrorCode.PAYLOAD_TOO_LARGE


class UnsupportedFileTypeError(ClientInputError):
    code = ErrorCode.UNSUPPORTED_MEDIA_TYPE


class UpstreamServiceError(Exception):
    """Search or generation service call failed."""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}")
        self.service = service


class PersistenceError(Exception):
    """Blob store, record store or work queue operation failed."""
