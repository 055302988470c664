"""Response envelope shared by every endpoint.

All responses carry ``{"success", "data", "error"}``; ``error`` is
``{"code", "message"}`` or ``None``.  ``envelope_exception_handler`` is
installed as DRF's ``EXCEPTION_HANDLER`` so that views only raise.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response

from modules.core.exceptions import ErrorCode, ServiceError

logger = structlog.get_logger(__name__)


def envelope(
    success: bool, data: Any = None, error: Optional[dict[str, str]] = None
) -> dict[str, Any]:
    return {"success": success, "data": data, "error": error}


def success_response(data: Any, status_code: int = status.HTTP_200_OK) -> Response:
    return Response(envelope(True, data), status=status_code)


def error_response(code: ErrorCode, message: str, status_code: int) -> Response:
    return Response(
        envelope(False, None, {"code": code.value, "message": message}),
        status=status_code,
    )


def first_error_message(detail: Any) -> str:
    """Return the first message found in a DRF error ``detail`` structure."""
    if isinstance(detail, dict):
        for value in detail.values():
            return first_error_message(value)
    if isinstance(detail, (list, tuple)):
        for value in detail:
            return first_error_message(value)
    return str(detail) if detail else "Invalid request payload"


def envelope_exception_handler(exc: Exception, context: dict) -> Response:
    """Translate any exception raised by a view into an envelope response."""
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else None

    if isinstance(exc, ServiceError):
        logger.info(
            "request.rejected",
            code=exc.code.value,
            message=exc.message,
            view=view_name,
        )
        return Response(envelope(False, None, exc.as_dict()), status=exc.http_status)

    if isinstance(exc, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)):
        response = error_response(
            ErrorCode.UNAUTHORIZED, "User ID not found", status.HTTP_401_UNAUTHORIZED
        )
        auth_header = getattr(exc, "auth_header", None)
        if auth_header:
            response["WWW-Authenticate"] = auth_header
        return response

    if isinstance(exc, drf_exceptions.PermissionDenied):
        return error_response(ErrorCode.FORBIDDEN, "Access denied", status.HTTP_403_FORBIDDEN)

    if isinstance(exc, (drf_exceptions.ValidationError, drf_exceptions.ParseError)):
        return error_response(
            ErrorCode.VALIDATION_ERROR,
            first_error_message(exc.detail),
            status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, (Http404, drf_exceptions.NotFound)):
        return error_response(ErrorCode.NOT_FOUND, "Route not found", status.HTTP_404_NOT_FOUND)

    if isinstance(exc, drf_exceptions.MethodNotAllowed):
        return error_response(ErrorCode.NOT_FOUND, "Route not found", exc.status_code)

    if isinstance(exc, drf_exceptions.APIException):
        return error_response(
            ErrorCode.INTERNAL_ERROR
            if exc.status_code >= 500
            else ErrorCode.VALIDATION_ERROR,
            first_error_message(exc.detail),
            exc.status_code,
        )

    logger.exception("request.unhandled_error", view=view_name)
    return error_response(
        ErrorCode.INTERNAL_ERROR,
        "Internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
