"""
Serializers for user administration endpoints.
"""

from rest_framework import serializers

from api.v1.serializers import LicenseSerializer, UserSerializer, UserSummarySerializer
from core.domain.value_objects import Role

ROLE_CHOICES = [role.value for role in Role]


class UserListQuerySerializer(serializers.Serializer):
    """Serializer for user list filters."""

    search = serializers.CharField(required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=ROLE_CHOICES, required=False)


class CreateUserRequestSerializer(serializers.Serializer):
    """Serializer for creating a user."""

    email = serializers.EmailField(required=True, max_length=254)
    password = serializers.CharField(required=True, min_length=8, max_length=128)
    first_name = serializers.CharField(required=True, max_length=100)
    last_name = serializers.CharField(required=True, max_length=100)
    role = serializers.ChoiceField(choices=ROLE_CHOICES, required=False, default=Role.USER.value)
    manager_id = serializers.UUIDField(required=False, allow_null=True)


class UpdateUserRequestSerializer(serializers.Serializer):
    """Serializer for a partial user update; omitted fields stay unchanged."""

    email = serializers.EmailField(required=False, max_length=254)
    password = serializers.CharField(required=False, min_length=8, max_length=128)
    first_name = serializers.CharField(required=False, max_length=100)
    last_name = serializers.CharField(required=False, max_length=100)
    role = serializers.ChoiceField(choices=ROLE_CHOICES, required=False)
    manager_id = serializers.UUIDField(required=False, allow_null=True)


class AssignLicenseRequestSerializer(serializers.Serializer):
    """Serializer for assigning a license to a user."""

    software_id = serializers.UUIDField(required=True)
    expires_at = serializers.DateTimeField(required=False, allow_null=True)


class UserDetailSerializer(UserSerializer):
    """Serializer for UserDetailDTO."""

    manager = UserSummarySerializer(allow_null=True)
    licenses = LicenseSerializer(many=True)
    counts = serializers.DictField(child=serializers.IntegerField())
