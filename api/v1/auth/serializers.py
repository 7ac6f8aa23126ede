"""
Serializers for authentication endpoints.
"""

from rest_framework import serializers

from api.v1.serializers import LicenseSerializer, OrganizationSerializer, UserSerializer


class RegisterRequestSerializer(serializers.Serializer):
    """Serializer for organization sign-up."""

    email = serializers.EmailField(required=True, max_length=254)
    password = serializers.CharField(required=True, min_length=8, max_length=128)
    first_name = serializers.CharField(required=True, max_length=100)
    last_name = serializers.CharField(required=True, max_length=100)
    organization_name = serializers.CharField(required=True, max_length=200)


class LoginRequestSerializer(serializers.Serializer):
    """Serializer for login request."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, trim_whitespace=False)


class RefreshTokenRequestSerializer(serializers.Serializer):
    """Serializer for refresh request."""

    refresh_token = serializers.CharField(required=True)


class LoginResponseSerializer(serializers.Serializer):
    """Serializer for login response."""

    message = serializers.CharField()
    token = serializers.CharField()
    refresh_token = serializers.CharField()
    user = UserSerializer()


class RegisterResponseSerializer(LoginResponseSerializer):
    """Serializer for registration response."""

    organization = OrganizationSerializer()


class RefreshTokenResponseSerializer(serializers.Serializer):
    """Serializer for refresh response."""

    token = serializers.CharField()


class CurrentUserSerializer(UserSerializer):
    """Serializer for CurrentUserDTO."""

    licenses = LicenseSerializer(many=True)
