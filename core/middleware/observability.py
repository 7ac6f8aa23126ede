"""
Observability middleware.

This middleware adds correlation ids, structured request logs and
Prometheus HTTP metrics.
"""

import logging
import re
import time
import uuid
from typing import Callable

from django.http import HttpRequest, HttpResponse

from core.instrumentation import current_trace_id
from core.metrics import http_request_duration_seconds, http_requests_total

logger = logging.getLogger(__name__)

UUID_SEGMENT = re.compile(r"/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")
NUMBER_SEGMENT = re.compile(r"/\d+")


def normalize_endpoint(path: str) -> str:
    """Replace ids in a path so metrics aggregate per route."""
    return NUMBER_SEGMENT.sub("/{id}", UUID_SEGMENT.sub("/{id}", path))


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    This middleware:
    1. Generates (or accepts) correlation IDs for request tracing
    2. Logs request/response information with the caller's ids
    3. Records request count and duration metrics
    4. Adds correlation ID to response headers
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and add observability.

        Args:
            request: HTTP request

        Returns:
            HTTP response with observability headers
        """
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore
        endpoint = normalize_endpoint(request.path)

        start_time = time.time()
        try:
            response = self.get_response(request)
        except Exception as e:
            duration = time.time() - start_time
            self._record_metrics(request.method, endpoint, 500, duration)
            logger.error(
                "Request failed",
                extra={
                    "correlation_id": correlation_id,
                    "method": request.method,
                    "path": request.path,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "duration_ms": round(duration * 1000, 2),
                },
                exc_info=True,
            )
            raise

        duration = time.time() - start_time
        self._record_metrics(request.method, endpoint, response.status_code, duration)
        self._log_response(request, response, correlation_id, duration)
        response["X-Correlation-ID"] = correlation_id
        return response

    @staticmethod
    def _record_metrics(method: str, endpoint: str, status_code: int, duration: float) -> None:
        http_requests_total.labels(
            method=method, endpoint=endpoint, status_code=status_code
        ).inc()
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

    def _log_response(self, request, response, correlation_id, duration):
        """Log structured response information."""
        log_extra = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
        }
        trace_id = current_trace_id()
        if trace_id:
            log_extra["trace_id"] = trace_id

        principal = getattr(request, "principal", None)
        if principal:
            log_extra["organization_id"] = str(principal.organization_id)
            log_extra["user_id"] = str(principal.user_id)

        # Log based on status code
        if response.status_code >= 500:
            logger.error("Request completed with server error", extra=log_extra)
        elif response.status_code >= 400:
            logger.warning("Request completed with client error", extra=log_extra)
        else:
            logger.info("Request completed successfully", extra=log_extra)
