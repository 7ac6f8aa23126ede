"""
Serializers for license endpoints.
"""

from rest_framework import serializers

from api.v1.serializers import LicenseSerializer, PageQuerySerializer, UserSummarySerializer
from core.domain.value_objects import LicenseStatus

LICENSE_STATUS_CHOICES = [license_status.value for license_status in LicenseStatus]


class MyLicensesQuerySerializer(PageQuerySerializer):
    """Serializer for the caller's license list filters."""

    status = serializers.ChoiceField(choices=LICENSE_STATUS_CHOICES, required=False)


class AllLicensesQuerySerializer(MyLicensesQuerySerializer):
    """Serializer for the organization-wide license list filters."""

    user_id = serializers.UUIDField(required=False)
    software_id = serializers.UUIDField(required=False)


class LicenseActionResultSerializer(serializers.Serializer):
    """Serializer for LicenseActionResultDTO."""

    message = serializers.CharField()
    license = LicenseSerializer()


class SoftwareLicenseCountSerializer(serializers.Serializer):
    """Serializer for SoftwareLicenseCountDTO."""

    software_id = serializers.UUIDField()
    software_name = serializers.CharField()
    count = serializers.IntegerField()


class RecentLicenseSerializer(serializers.Serializer):
    """Serializer for RecentLicenseDTO."""

    id = serializers.UUIDField()
    status = serializers.CharField()
    assigned_at = serializers.DateTimeField()
    user = UserSummarySerializer(allow_null=True)
    software_name = serializers.CharField()


class LicenseStatsSerializer(serializers.Serializer):
    """Serializer for LicenseStatsDTO."""

    total_licenses = serializers.IntegerField()
    active_licenses = serializers.IntegerField()
    monthly_total_cost = serializers.DecimalField(
        max_digits=14, decimal_places=2, coerce_to_string=False
    )
    licenses_by_software = SoftwareLicenseCountSerializer(many=True)
    recent_activity = RecentLicenseSerializer(many=True)
