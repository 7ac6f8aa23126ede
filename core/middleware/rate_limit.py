"""
Rate limiting middleware.

Limits the unauthenticated auth endpoints per client IP.
"""

import hashlib
import time
from typing import Callable, Tuple

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.metrics import errors_total

RATE_LIMITED_PATHS = (
    "/api/v1/auth/login",
    "/api/v1/auth/register",
    "/api/v1/auth/refresh",
)


class RateLimitMiddleware:
    """
    Rate limiting middleware per client IP.

    Counters live in the Django cache in fixed windows. Defaults: 20
    requests per minute (``RATE_LIMIT_REQUESTS`` per
    ``RATE_LIMIT_WINDOW_SECONDS``).
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    @property
    def limit(self) -> int:
        return getattr(settings, "RATE_LIMIT_REQUESTS", 20)

    @property
    def window(self) -> int:
        return getattr(settings, "RATE_LIMIT_WINDOW_SECONDS", 60)

    def _get_client_ip(self, request: HttpRequest) -> str:
        """First address of X-Forwarded-For, else REMOTE_ADDR."""
        forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.META.get("REMOTE_ADDR", "unknown")

    def _get_rate_limit_key(self, client_ip: str, window_start: int) -> str:
        """
        Generate cache key for rate limiting.

        Args:
            client_ip: Client address
            window_start: Index of the current window

        Returns:
            Cache key string
        """
        ip_hash = hashlib.sha256(client_ip.encode()).hexdigest()[:16]
        return f"rate_limit:{ip_hash}:{window_start}"

    def _check_rate_limit(self, client_ip: str) -> Tuple[bool, int, int]:
        """
        Check if request is within rate limit.

        Args:
            client_ip: Client address

        Returns:
            Tuple of (is_allowed, remaining, reset_time)
        """
        window_start = int(time.time() / self.window)
        reset_time = (window_start + 1) * self.window
        key = self._get_rate_limit_key(client_ip, window_start)

        if cache.get(key, 0) >= self.limit:
            return False, 0, reset_time

        try:
            new_count = cache.incr(key, 1)
        except ValueError:
            # Key doesn't exist, create it with initial value of 1
            cache.set(key, 1, timeout=self.window)
            new_count = 1

        return True, max(0, self.limit - new_count), reset_time

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request with rate limiting.

        Args:
            request: HTTP request

        Returns:
            HTTP response with rate limit headers
        """
        if not getattr(settings, "RATE_LIMIT_ENABLED", True) or not request.path.startswith(
            RATE_LIMITED_PATHS
        ):
            return self.get_response(request)

        is_allowed, remaining, reset_time = self._check_rate_limit(self._get_client_ip(request))

        if not is_allowed:
            errors_total.labels(error_type="rate_limit_exceeded", endpoint=request.path).inc()
            response = JsonResponse(
                {
                    "error": {
                        "code": "RATE_LIMIT_EXCEEDED",
                        "message": "Too many requests. Please try again later.",
                    }
                },
                status=429,
            )
            response["Retry-After"] = str(max(0, reset_time - int(time.time())))
        else:
            response = self.get_response(request)

        response["X-RateLimit-Limit"] = str(self.limit)
        response["X-RateLimit-Remaining"] = str(remaining)
        response["X-RateLimit-Reset"] = str(reset_time)
        return response
