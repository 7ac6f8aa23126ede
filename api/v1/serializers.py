"""
Serializers for DTOs embedded by several API areas.
"""

from rest_framework import serializers

from core.domain.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Page, PageRequest


class OrganizationSerializer(serializers.Serializer):
    """Serializer for OrganizationDTO."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    domain = serializers.CharField(allow_null=True)


class UserSummarySerializer(serializers.Serializer):
    """Serializer for UserSummaryDTO."""

    id = serializers.UUIDField()
    email = serializers.EmailField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()


class UserSerializer(serializers.Serializer):
    """Serializer for UserDTO."""

    id = serializers.UUIDField()
    email = serializers.EmailField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    role = serializers.CharField()
    organization_id = serializers.UUIDField()
    manager_id = serializers.UUIDField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    organization = OrganizationSerializer(allow_null=True, required=False)


class SoftwareSerializer(serializers.Serializer):
    """Serializer for SoftwareDTO."""

    id = serializers.UUIDField()
    organization_id = serializers.UUIDField()
    name = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    category = serializers.CharField()
    vendor = serializers.CharField(allow_null=True)
    cost_per_license = serializers.DecimalField(
        max_digits=10, decimal_places=2, allow_null=True, coerce_to_string=False
    )
    billing_cycle = serializers.CharField()
    logo_url = serializers.CharField(allow_null=True)
    website_url = serializers.CharField(allow_null=True)
    requires_approval = serializers.BooleanField()
    auto_provision = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO (shared by the users, requests and licenses APIs)."""

    id = serializers.UUIDField()
    user_id = serializers.UUIDField()
    software_id = serializers.UUIDField()
    status = serializers.CharField()
    assigned_at = serializers.DateTimeField()
    expires_at = serializers.DateTimeField(allow_null=True)
    last_used_at = serializers.DateTimeField(allow_null=True)
    notes = serializers.CharField(allow_null=True)
    updated_at = serializers.DateTimeField()
    software = SoftwareSerializer(allow_null=True, required=False)
    user = UserSummarySerializer(allow_null=True, required=False)


class MessageSerializer(serializers.Serializer):
    """Serializer for plain ``{message}`` responses."""

    message = serializers.CharField()


class PageQuerySerializer(serializers.Serializer):
    """Serializer for ``page`` and ``limit`` query parameters."""

    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(
        required=False, min_value=1, max_value=MAX_PAGE_SIZE, default=DEFAULT_PAGE_SIZE
    )

    def to_page_request(self) -> PageRequest:
        return PageRequest(page=self.validated_data["page"], limit=self.validated_data["limit"])


def paginated(page: Page, item_serializer_class) -> dict:
    """Render a Page as ``{items, total, page, limit, total_pages}``."""
    return {
        "items": item_serializer_class(page.items, many=True).data,
        "total": page.total,
        "page": page.page,
        "limit": page.limit,
        "total_pages": page.total_pages,
    }
