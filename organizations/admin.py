"""
Django admin configuration for organizations app.
"""
from django.contrib import admin

from organizations.infrastructure.models import Organization, User


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    """Admin interface for Organization model."""

    list_display = ["name", "domain", "user_count", "created_at"]
    search_fields = ["name", "domain"]
    readonly_fields = ["id", "created_at", "updated_at"]

    def user_count(self, obj):
        """Display number of users in the organization."""
        return obj.users.count()

    user_count.short_description = "Users"


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """Admin interface for the portal's User model."""

    list_display = ["email", "first_name", "last_name", "role", "organization", "manager"]
    list_filter = ["role", "organization"]
    search_fields = ["email", "first_name", "last_name"]
    readonly_fields = ["id", "created_at", "updated_at"]
    # Passwords are set through the API so they are hashed
    exclude = ["password_hash"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("organization", "manager")
