"""
Unit tests for TokenService.
"""

import uuid
from datetime import timedelta

import jwt
import pytest
from django.conf import settings
from django.test import override_settings

from core.domain.exceptions import InvalidTokenError
from core.domain.value_objects import Role
from organizations.application.services.token_service import TokenService
from organizations.domain.user import User


@pytest.fixture
def user():
    return User.create(
        organization_id=uuid.uuid4(),
        email="admin@acme.com",
        password_hash="hashed",
        first_name="Ada",
        last_name="Admin",
        role=Role.ADMIN,
    )


class TestTokenService:
    """Tests for access and refresh tokens."""

    def test_access_token_claims(self, user):
        claims = TokenService.decode_access_token(TokenService.generate_access_token(user))

        assert claims["user_id"] == str(user.id)
        assert claims["email"] == "admin@acme.com"
        assert claims["organization_id"] == str(user.organization_id)
        assert claims["role"] == "ADMIN"

    def test_refresh_token_round_trip(self, user):
        token = TokenService.generate_refresh_token(user)
        assert TokenService.decode_refresh_token(token) == user.id

    def test_refresh_token_is_not_an_access_token(self, user):
        with pytest.raises(InvalidTokenError):
            TokenService.decode_access_token(TokenService.generate_refresh_token(user))

    def test_access_token_is_not_a_refresh_token(self, user):
        with pytest.raises(InvalidTokenError):
            TokenService.decode_refresh_token(TokenService.generate_access_token(user))

    def test_tampered_token(self, user):
        token = TokenService.generate_access_token(user)
        with pytest.raises(InvalidTokenError):
            TokenService.decode(token.rsplit(".", 1)[0] + ".bm90LWEtc2lnbmF0dXJl")

    def test_wrong_secret(self, user):
        token = jwt.encode(
            {"user_id": str(user.id)}, "some-other-secret-of-sufficient-length", algorithm="HS256"
        )
        with pytest.raises(InvalidTokenError):
            TokenService.decode(token)

    def test_expired_token(self, user):
        with override_settings(JWT_EXPIRATION_HOURS=-1):
            token = TokenService.generate_access_token(user)
        with pytest.raises(InvalidTokenError):
            TokenService.decode_access_token(token)

    def test_algorithm_setting_is_used(self, user):
        token = TokenService.generate_access_token(user)
        header = jwt.get_unverified_header(token)
        assert header["alg"] == settings.JWT_ALGORITHM

    def test_refresh_lifetime(self, user):
        claims = TokenService.decode(TokenService.generate_refresh_token(user))
        lifetime = timedelta(seconds=claims["exp"] - claims["iat"])
        assert lifetime == timedelta(days=settings.JWT_REFRESH_EXPIRATION_DAYS)
