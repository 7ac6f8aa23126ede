"""
User repository port (interface).

This defines the contract for user persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional
import uuid

from core.domain.value_objects import Role
from organizations.domain.user import User


class UserRepository(ABC):
    """
    Abstract repository for User entities.

    Lookups that take an ``organization_id`` never return users of
    another organization.
    """

    @abstractmethod
    async def save(self, user: User) -> User:
        """
        Save a user entity.

        Args:
            user: User entity to save

        Returns:
            Saved user entity

        Raises:
            EmailInUseError: If another user already has the e-mail
        """

    @abstractmethod
    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Find a user by ID in any organization."""

    @abstractmethod
    async def find_in_organization(
        self, organization_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[User]:
        """
        Find a user by ID within an organization.

        Args:
            organization_id: Caller's organization
            user_id: User UUID

        Returns:
            User entity or None if not found in that organization
        """

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by normalized e-mail."""

    @abstractmethod
    async def email_exists(self, email: str, exclude_user_id: Optional[uuid.UUID] = None) -> bool:
        """Check whether an e-mail is taken, optionally ignoring one user."""

    @abstractmethod
    async def list(
        self,
        organization_id: uuid.UUID,
        search: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> List[User]:
        """
        List users of an organization ordered by first name.

        Args:
            organization_id: Organization UUID
            search: Case-insensitive match on first name, last name or e-mail
            role: Only users with this role

        Returns:
            List of User entities
        """

    @abstractmethod
    async def find_by_ids(self, user_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, User]:
        """Batch lookup keyed by user ID."""

    @abstractmethod
    async def count_managed(self, user_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, int]:
        """Number of users reporting to each of the given users."""

    @abstractmethod
    async def delete(self, user_id: uuid.UUID) -> None:
        """Delete a user."""
