"""
Role-based permissions for the REST API.

The authentication middleware attaches ``request.principal``; these
classes only check the caller's role.
"""

from rest_framework.permissions import BasePermission


def get_principal(request):
    """The authenticated caller, or None."""
    return getattr(request, "principal", None)


class IsAuthenticatedPrincipal(BasePermission):
    """Any authenticated user of an organization."""

    def has_permission(self, request, view):
        return get_principal(request) is not None


class CanApprove(BasePermission):
    """ADMIN or MANAGER."""

    def has_permission(self, request, view):
        principal = get_principal(request)
        return principal is not None and principal.can_approve


class IsAdmin(BasePermission):
    """ADMIN only."""

    def has_permission(self, request, view):
        principal = get_principal(request)
        return principal is not None and principal.is_admin
