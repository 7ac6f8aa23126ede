"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import License


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "user",
        "software",
        "status_display",
        "organization",
        "assigned_at",
        "expires_at",
    ]
    list_filter = ["status", "assigned_at", "expires_at", "organization"]
    search_fields = ["user__email", "software__name", "notes"]
    readonly_fields = ["id", "assigned_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "organization", "user", "software", "status"),
            },
        ),
        (
            "Lifecycle",
            {
                "fields": ("expires_at", "last_used_at", "notes"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("assigned_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "ACTIVE": "green",
            "SUSPENDED": "orange",
            "REVOKED": "red",
            "EXPIRED": "gray",
        }
        color = colors.get(obj.status, "black")
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            obj.status,
        )

    status_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("organization", "user", "software")
