"""
Organization repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple
import uuid

from organizations.domain.organization import Organization
from organizations.domain.user import User


class OrganizationRepository(ABC):
    """Abstract repository for Organization entities."""

    @abstractmethod
    async def find_by_id(self, organization_id: uuid.UUID) -> Optional[Organization]:
        """
        Find an organization by ID.

        Args:
            organization_id: Organization UUID

        Returns:
            Organization entity or None if not found
        """

    @abstractmethod
    async def create_with_admin(
        self, organization: Organization, admin: User
    ) -> Tuple[Organization, User]:
        """
        Persist a new organization and its first admin in one transaction.

        Args:
            organization: New Organization entity
            admin: New User entity belonging to it

        Returns:
            Tuple of the saved organization and user

        Raises:
            UserAlreadyExistsError: If the admin's e-mail is already taken
        """
