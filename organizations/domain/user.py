"""
User domain entity.

A user belongs to one organization, has a role, and may report to a
manager in the same organization.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import Email, Role

MIN_PASSWORD_LENGTH = 8


def validate_password(raw_password: str) -> None:
    """Raise ValueError when a raw password is too short."""
    if not raw_password or len(raw_password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


@dataclass(frozen=True)
class User:
    """
    User domain entity.

    ``password_hash`` is produced by the password hasher service and is
    never exposed through DTOs.
    """

    id: uuid.UUID
    organization_id: uuid.UUID
    email: Email
    password_hash: str
    first_name: str
    last_name: str
    role: Role
    manager_id: Optional[uuid.UUID]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate user entity."""
        if not self.organization_id:
            raise ValueError("Organization ID is required")
        if not self.first_name or not self.first_name.strip():
            raise ValueError("First name is required")
        if not self.last_name or not self.last_name.strip():
            raise ValueError("Last name is required")
        if not self.password_hash:
            raise ValueError("Password hash is required")
        if self.manager_id is not None and self.manager_id == self.id:
            raise ValueError("User cannot be their own manager")

    @classmethod
    def create(
        cls,
        organization_id: uuid.UUID,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: Role = Role.USER,
        manager_id: Optional[uuid.UUID] = None,
        user_id: Optional[uuid.UUID] = None,
    ) -> "User":
        """
        Create a new User entity.

        Args:
            organization_id: Owning organization
            email: Raw e-mail address (normalized to lower case)
            password_hash: Hashed password
            first_name: Given name
            last_name: Family name
            role: Role within the organization
            manager_id: Optional manager (same organization)
            user_id: Optional UUID (generated if not provided)

        Returns:
            User entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=user_id or uuid.uuid4(),
            organization_id=organization_id,
            email=Email.normalize(email),
            password_hash=password_hash,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            role=role,
            manager_id=manager_id,
            created_at=now,
            updated_at=now,
        )

    @property
    def full_name(self) -> str:
        """First and last name."""
        return f"{self.first_name} {self.last_name}"

    def update_profile(
        self,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> "User":
        """Return a copy with the given profile fields changed."""
        return replace(
            self,
            first_name=first_name.strip() if first_name is not None else self.first_name,
            last_name=last_name.strip() if last_name is not None else self.last_name,
            email=Email.normalize(email) if email is not None else self.email,
            updated_at=datetime.now(timezone.utc),
        )

    def change_role(self, role: Role) -> "User":
        """Return a copy with a new role."""
        return replace(self, role=role, updated_at=datetime.now(timezone.utc))

    def assign_manager(self, manager_id: Optional[uuid.UUID]) -> "User":
        """Return a copy reporting to ``manager_id`` (None clears it)."""
        return replace(self, manager_id=manager_id, updated_at=datetime.now(timezone.utc))

    def change_password_hash(self, password_hash: str) -> "User":
        """Return a copy with a new password hash."""
        return replace(self, password_hash=password_hash, updated_at=datetime.now(timezone.utc))
