"""Service error taxonomy.

Every failure the order service reports is one of the variants below.
Each variant carries the wire ``code``, the HTTP status and a
human-readable ``message``.  The Service Layer raises them; the API
layer renders them through ``modules.core.responses``.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_STATUS = "INVALID_STATUS"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ServiceError(Exception):
    """Base class for every expected failure of a request."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    http_status: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code.value, "message": self.message}


class Unauthorized(ServiceError):
    """No caller identity was established upstream."""

    code = ErrorCode.UNAUTHORIZED
    http_status = 401
    default_message = "User ID not found"


class Forbidden(ServiceError):
    """The caller is known but lacks the rights for the operation."""

    code = ErrorCode.FORBIDDEN
    http_status = 403
    default_message = "Access denied"


class InvalidPayload(ServiceError):
    """The request payload failed validation."""

    code = ErrorCode.VALIDATION_ERROR
    http_status = 400
    default_message = "Invalid request payload"
