"""
Serializers for software catalog endpoints.
"""

from rest_framework import serializers

from api.v1.serializers import LicenseSerializer, PageQuerySerializer, SoftwareSerializer
from core.domain.value_objects import BillingCycle

BILLING_CYCLE_CHOICES = [cycle.value for cycle in BillingCycle]


class SoftwareListQuerySerializer(PageQuerySerializer):
    """Serializer for catalog list filters."""

    search = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)


class SoftwareWriteSerializer(serializers.Serializer):
    """Serializer for creating software."""

    name = serializers.CharField(required=True, max_length=200)
    category = serializers.CharField(required=True, max_length=100)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    vendor = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=200)
    cost_per_license = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    billing_cycle = serializers.ChoiceField(choices=BILLING_CYCLE_CHOICES, required=False)
    logo_url = serializers.URLField(required=False, allow_null=True, allow_blank=True, max_length=500)
    website_url = serializers.URLField(
        required=False, allow_null=True, allow_blank=True, max_length=500
    )
    requires_approval = serializers.BooleanField(required=False)
    auto_provision = serializers.BooleanField(required=False)

    def to_fields(self) -> dict:
        """Validated data with enum values converted; omitted fields are left out."""
        fields = dict(self.validated_data)
        if "billing_cycle" in fields:
            fields["billing_cycle"] = BillingCycle(fields["billing_cycle"])
        return fields


class SoftwareUpdateSerializer(SoftwareWriteSerializer):
    """Serializer for a partial software update."""

    name = serializers.CharField(required=False, max_length=200)
    category = serializers.CharField(required=False, max_length=100)


class CatalogItemSerializer(SoftwareSerializer):
    """Serializer for CatalogItemDTO."""

    user_license = LicenseSerializer(allow_null=True)
    has_pending_request = serializers.BooleanField()
    counts = serializers.DictField(child=serializers.IntegerField())
