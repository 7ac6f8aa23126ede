"""
Django admin configuration for catalog app.
"""
from django.contrib import admin

from catalog.infrastructure.models import Software


@admin.register(Software)
class SoftwareAdmin(admin.ModelAdmin):
    """Admin interface for Software model."""

    list_display = [
        "name",
        "category",
        "vendor",
        "cost_per_license",
        "billing_cycle",
        "requires_approval",
        "organization",
    ]
    list_filter = ["category", "billing_cycle", "requires_approval", "organization"]
    search_fields = ["name", "vendor", "description"]
    readonly_fields = ["id", "created_at", "updated_at"]
