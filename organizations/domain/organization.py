"""
Organization domain entity.

The organization is the tenant boundary: every other entity belongs to
exactly one organization.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class Organization:
    """Organization domain entity."""

    id: uuid.UUID
    name: str
    domain: Optional[str]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate organization entity."""
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Organization name cannot be empty")
        if len(self.name) > 255:
            raise ValueError("Organization name too long")

    @classmethod
    def create(
        cls,
        name: str,
        domain: Optional[str] = None,
        organization_id: Optional[uuid.UUID] = None,
    ) -> "Organization":
        """
        Create a new Organization entity.

        Args:
            name: Display name
            domain: E-mail domain the organization was registered from
            organization_id: Optional UUID (generated if not provided)

        Returns:
            Organization entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=organization_id or uuid.uuid4(),
            name=name.strip(),
            domain=domain,
            created_at=now,
            updated_at=now,
        )
