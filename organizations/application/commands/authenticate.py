"""
Authentication commands.
"""
from dataclasses import dataclass


@dataclass
class LoginCommand:
    """Command to exchange credentials for tokens."""

    email: str
    password: str


@dataclass
class RefreshTokenCommand:
    """Command to exchange a refresh token for a new access token."""

    refresh_token: str
