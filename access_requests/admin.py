"""
Django admin configuration for access_requests app.
"""
from django.contrib import admin

from access_requests.infrastructure.models import AccessRequest, Approval


class ApprovalInline(admin.TabularInline):
    """Decisions shown on the request page."""

    model = Approval
    extra = 0
    readonly_fields = ["id", "approver", "status", "comments", "created_at"]
    can_delete = False


@admin.register(AccessRequest)
class AccessRequestAdmin(admin.ModelAdmin):
    """Admin interface for AccessRequest model."""

    list_display = ["user", "software", "priority", "status", "organization", "created_at"]
    list_filter = ["status", "priority", "organization"]
    search_fields = ["user__email", "software__name", "justification"]
    readonly_fields = ["id", "created_at", "updated_at"]
    inlines = [ApprovalInline]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("organization", "user", "software")


@admin.register(Approval)
class ApprovalAdmin(admin.ModelAdmin):
    """Admin interface for Approval model."""

    list_display = ["request", "approver", "status", "created_at"]
    list_filter = ["status"]
    readonly_fields = ["id", "created_at"]
