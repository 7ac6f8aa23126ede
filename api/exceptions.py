"""
API exception handlers.

This module provides custom exception handling for REST API responses.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, PermissionDenied
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    AuthenticationError,
    DomainException,
    NotFoundError,
    PermissionDeniedError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)


def error_response(
    code: str, message: str, status_code: int, details: Optional[Any] = None
) -> Response:
    """Build the ``{"error": {...}}`` body every failure shares."""
    body: Dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        body["details"] = details
    return Response({"error": body}, status=status_code)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)
    response = _build_response(exc, context, trace_id)
    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _build_response(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    if isinstance(exc, DomainException):
        return _handle_domain_exception(exc, trace_id)

    if isinstance(exc, DRFValidationError):
        return error_response(
            "VALIDATION_ERROR", "Validation failed", status.HTTP_400_BAD_REQUEST, exc.detail
        )

    if isinstance(exc, (PermissionDenied, NotAuthenticated)):
        # Unauthenticated callers are stopped by the middleware, so any
        # permission failure here is a role check.
        return error_response(
            "PERMISSION_DENIED", "Insufficient permissions", status.HTTP_403_FORBIDDEN
        )

    if isinstance(exc, APIException):
        response = exception_handler(exc, context)
        if response:
            code = (
                exc.default_code.upper().replace("-", "_")
                if hasattr(exc, "default_code")
                else "API_ERROR"
            )
            response.data = {
                "error": {"code": code, "message": response.data.get("detail", exc.default_detail)}
            }
            return response

    if isinstance(exc, Http404):
        return error_response("NOT_FOUND", "Resource not found", status.HTTP_404_NOT_FOUND)

    return _handle_unexpected_exception(exc, context, trace_id)


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, AuthenticationError):
        status_code = status.HTTP_401_UNAUTHORIZED
    elif isinstance(exc, PermissionDeniedError):
        status_code = status.HTTP_403_FORBIDDEN

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return error_response(exc.code, exc.message, status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    request = context.get("request")
    errors_total.labels(
        error_type=type(exc).__name__,
        endpoint=request.path if request is not None else "unknown",
    ).inc()
    return error_response(
        "INTERNAL_ERROR", "An internal error occurred", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
