"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer renders them through the envelope exception handler.
"""

from __future__ import annotations

from modules.core.exceptions import ErrorCode, ServiceError


class OrderNotFound(ServiceError):
    """The requested order does not exist."""

    code = ErrorCode.ORDER_NOT_FOUND
    http_status = 404
    default_message = "Order not found"


class InvalidOrderStatus(ServiceError):
    """A transition was attempted that the state machine forbids."""

    code = ErrorCode.INVALID_STATUS
    http_status = 400
    default_message = "Invalid status transition"


class UserNotFound(ServiceError):
    """The identity service did not confirm the ordering user."""

    code = ErrorCode.USER_NOT_FOUND
    http_status = 404
    default_message = "User not found"


class IdentityServiceUnavailable(UserNotFound):
    """The identity service could not be reached or answered unexpectedly.

    Reported to callers as ``USER_NOT_FOUND``; kept as its own type so
    logs and callers in-process can tell the two apart.
    """
