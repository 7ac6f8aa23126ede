"""
Multi-tenancy middleware.

This middleware exposes the authenticated caller's organization as the
tenant for the rest of the request.
"""

import contextvars
import logging
import uuid
from typing import Callable, Optional

from django.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

# Context variable for tenant (organization) ID
tenant_context: contextvars.ContextVar[Optional[uuid.UUID]] = contextvars.ContextVar(
    "tenant_id", default=None
)


def get_current_tenant_id() -> Optional[uuid.UUID]:
    """
    Get the current tenant (organization) ID from context.

    Returns:
        Organization ID (UUID) or None if not set
    """
    return tenant_context.get(None)


class TenantMiddleware:
    """
    Middleware to set tenant context from the authenticated principal.

    Must run after JWTAuthenticationMiddleware.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and set tenant context.

        Args:
            request: HTTP request

        Returns:
            HTTP response
        """
        principal = getattr(request, "principal", None)
        tenant_id = principal.organization_id if principal else None

        token = tenant_context.set(tenant_id)
        request.tenant_id = tenant_id  # type: ignore
        if tenant_id:
            logger.debug("Tenant context set to organization_id=%s", tenant_id)

        try:
            return self.get_response(request)
        finally:
            tenant_context.reset(token)
