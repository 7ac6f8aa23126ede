"""
JWT token service.

Issues and validates the HS256 access and refresh tokens used by the
portal's bearer authentication.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from django.conf import settings

from core.domain.exceptions import InvalidTokenError
from organizations.domain.user import User

logger = logging.getLogger(__name__)

REFRESH_TOKEN_TYPE = "refresh"


class TokenService:
    """Encode and decode JWTs with the configured secret and algorithm."""

    @staticmethod
    def _encode(payload: Dict[str, Any], lifetime: timedelta) -> str:
        now = datetime.now(timezone.utc)
        claims = dict(payload, iat=now, exp=now + lifetime)
        return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    @classmethod
    def generate_access_token(cls, user: User) -> str:
        """
        Generate an access token for a user.

        Args:
            user: Authenticated user

        Returns:
            Encoded JWT
        """
        return cls._encode(
            {
                "user_id": str(user.id),
                "email": str(user.email),
                "organization_id": str(user.organization_id),
                "role": user.role.value,
            },
            timedelta(hours=settings.JWT_EXPIRATION_HOURS),
        )

    @classmethod
    def generate_refresh_token(cls, user: User) -> str:
        """Generate a long-lived refresh token carrying only the user id."""
        return cls._encode(
            {"user_id": str(user.id), "type": REFRESH_TOKEN_TYPE},
            timedelta(days=settings.JWT_REFRESH_EXPIRATION_DAYS),
        )

    @staticmethod
    def decode(token: str) -> Dict[str, Any]:
        """
        Validate a token's signature and expiry.

        Args:
            token: Encoded JWT

        Returns:
            Token claims

        Raises:
            InvalidTokenError: If the token is malformed, tampered with or expired
        """
        try:
            return jwt.decode(
                token,
                settings.JWT_SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM],
            )
        except jwt.ExpiredSignatureError as e:
            logger.debug("Expired token presented")
            raise InvalidTokenError() from e
        except jwt.InvalidTokenError as e:
            logger.debug("Invalid token presented: %s", e)
            raise InvalidTokenError() from e

    @classmethod
    def decode_access_token(cls, token: str) -> Dict[str, Any]:
        """Decode an access token and check it carries the caller claims."""
        claims = cls.decode(token)
        if claims.get("type") == REFRESH_TOKEN_TYPE:
            raise InvalidTokenError()
        for claim in ("user_id", "organization_id", "role"):
            if claim not in claims:
                raise InvalidTokenError()
        return claims

    @classmethod
    def decode_refresh_token(cls, token: str) -> uuid.UUID:
        """
        Decode a refresh token.

        Returns:
            The user id it was issued for

        Raises:
            InvalidTokenError: If the token is not a valid refresh token
        """
        claims = cls.decode(token)
        if claims.get("type") != REFRESH_TOKEN_TYPE:
            raise InvalidTokenError()
        try:
            return uuid.UUID(claims["user_id"])
        except (KeyError, ValueError) as e:
            raise InvalidTokenError() from e
