"""
JWT bearer authentication middleware.

Validates the access token on every ``/api/v1/`` request except the
public auth endpoints, and attaches the caller to the request.
"""

import logging
import uuid
from typing import Optional

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from core.domain.exceptions import InvalidTokenError
from core.domain.value_objects import Principal, Role
from organizations.application.services.token_service import TokenService
from organizations.infrastructure.models import User as UserModel

logger = logging.getLogger(__name__)

PUBLIC_PATHS = (
    "/api/v1/auth/register",
    "/api/v1/auth/login",
    "/api/v1/auth/refresh",
)


def _error(code: str, message: str, status: int = 401) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)


class JWTAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for bearer token authentication.

    This middleware:
    1. Reads ``Authorization: Bearer <token>`` on API paths
    2. Validates the token and checks the user still exists
    3. Sets ``request.principal`` for views and permissions
    4. Returns 401 if authentication fails
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        request.principal = None  # type: ignore
        if self._should_skip_auth(request.path):
            return None

        header = request.headers.get("Authorization", "")
        if not header.startswith("Bearer ") or not header[7:].strip():
            return _error("AUTHENTICATION_REQUIRED", "Authentication required")

        try:
            claims = TokenService.decode_access_token(header[7:].strip())
            user_id = uuid.UUID(claims["user_id"])
        except (InvalidTokenError, ValueError):
            return _error("INVALID_TOKEN", "Invalid or expired token")

        user = UserModel.objects.filter(id=user_id).only("id", "email", "organization_id", "role").first()
        if user is None:
            logger.warning("Token presented for missing user %s", user_id)
            return _error("USER_NOT_FOUND", "User not found")

        # Role and organization come from the database so changes apply immediately
        request.principal = Principal(  # type: ignore
            user_id=user.id,
            email=user.email,
            organization_id=user.organization_id,
            role=Role(user.role),
        )
        return None

    def _should_skip_auth(self, path: str) -> bool:
        """
        Check if authentication should be skipped for this path.

        Args:
            path: Request path

        Returns:
            True if auth should be skipped
        """
        if not path.startswith("/api/v1/"):
            return True
        return any(path.startswith(public) for public in PUBLIC_PATHS)
