"""
Password hashing backed by Django's configured PASSWORD_HASHERS.
"""
from django.contrib.auth.hashers import check_password, make_password


class PasswordHasher:
    """Hash and verify raw passwords."""

    @staticmethod
    def hash(raw_password: str) -> str:
        return make_password(raw_password)

    @staticmethod
    def verify(raw_password: str, password_hash: str) -> bool:
        return check_password(raw_password, password_hash)
