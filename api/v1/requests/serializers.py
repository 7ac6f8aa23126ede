"""
Serializers for access request endpoints.
"""

from rest_framework import serializers

from api.v1.serializers import (
    LicenseSerializer,
    PageQuerySerializer,
    SoftwareSerializer,
    UserSummarySerializer,
)
from core.domain.value_objects import Priority, RequestStatus

PRIORITY_CHOICES = [priority.value for priority in Priority]
REQUEST_STATUS_CHOICES = [request_status.value for request_status in RequestStatus]


class SubmitRequestSerializer(serializers.Serializer):
    """Serializer for submitting a request."""

    software_id = serializers.UUIDField(required=True)
    justification = serializers.CharField(required=True, min_length=10, max_length=2000)
    priority = serializers.ChoiceField(
        choices=PRIORITY_CHOICES, required=False, default=Priority.MEDIUM.value
    )


class MyRequestsQuerySerializer(PageQuerySerializer):
    """Serializer for the caller's request list filters."""

    status = serializers.ChoiceField(choices=REQUEST_STATUS_CHOICES, required=False)


class ApproveRequestSerializer(serializers.Serializer):
    """Serializer for approving a request."""

    comments = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RejectRequestSerializer(serializers.Serializer):
    """Serializer for rejecting a request; comments are mandatory."""

    comments = serializers.CharField(required=True, max_length=2000)


class ApprovalSerializer(serializers.Serializer):
    """Serializer for ApprovalDTO."""

    id = serializers.UUIDField()
    status = serializers.CharField()
    comments = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    approver = UserSummarySerializer(allow_null=True)


class RequesterSerializer(UserSummarySerializer):
    """Serializer for RequesterDTO."""

    manager = UserSummarySerializer(allow_null=True)


class AccessRequestSerializer(serializers.Serializer):
    """Serializer for AccessRequestDTO."""

    id = serializers.UUIDField()
    user_id = serializers.UUIDField()
    software_id = serializers.UUIDField()
    justification = serializers.CharField()
    priority = serializers.CharField()
    status = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    software = SoftwareSerializer(allow_null=True)
    user = RequesterSerializer(allow_null=True)
    approvals = ApprovalSerializer(many=True)


class RequestResultSerializer(serializers.Serializer):
    """Serializer for RequestResultDTO."""

    message = serializers.CharField()
    request = AccessRequestSerializer()
    license = LicenseSerializer(allow_null=True)
