"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple
import uuid

from core.domain.pagination import PageRequest
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity

        Raises:
            LicenseAlreadyActiveError: If saving would give the user a second
                ACTIVE license for the same product
            InvalidLicenseStatusError: If the stored status changed since the
                license was read
        """

    @abstractmethod
    async def find_in_organization(
        self, organization_id: uuid.UUID, license_id: uuid.UUID
    ) -> Optional[License]:
        """Find a license by ID within an organization."""

    @abstractmethod
    async def find_active(self, user_id: uuid.UUID, software_id: uuid.UUID) -> Optional[License]:
        """The user's ACTIVE license for a product, if any."""

    @abstractmethod
    async def current_for_user(
        self, user_id: uuid.UUID, software_ids: Iterable[uuid.UUID]
    ) -> Dict[uuid.UUID, License]:
        """
        The license to show a user for each product.

        Args:
            user_id: License holder
            software_ids: Products to look up

        Returns:
            Mapping of software ID to the user's ACTIVE license, or their most
            recently assigned license when none is active
        """

    @abstractmethod
    async def list_for_user(
        self,
        user_id: uuid.UUID,
        page: Optional[PageRequest] = None,
        status: Optional[LicenseStatus] = None,
    ) -> Tuple[List[License], int]:
        """
        A user's licenses, newest assignment first.

        Args:
            user_id: License holder
            page: Page to return (all licenses when None)
            status: Only licenses in this status

        Returns:
            Tuple of (licenses, total matching)
        """

    @abstractmethod
    async def list_active_for_users(
        self, user_ids: Iterable[uuid.UUID]
    ) -> Dict[uuid.UUID, List[License]]:
        """ACTIVE licenses of each user, newest first."""

    @abstractmethod
    async def list_for_organization(
        self,
        organization_id: uuid.UUID,
        page: PageRequest,
        user_id: Optional[uuid.UUID] = None,
        software_id: Optional[uuid.UUID] = None,
        status: Optional[LicenseStatus] = None,
    ) -> Tuple[List[License], int]:
        """Every license of an organization, newest assignment first, with filters."""

    @abstractmethod
    async def list_active_in_organization(self, organization_id: uuid.UUID) -> List[License]:
        """All ACTIVE licenses of an organization."""

    @abstractmethod
    async def recent_in_organization(
        self, organization_id: uuid.UUID, limit: int = 10
    ) -> List[License]:
        """Most recently assigned licenses of an organization."""

    @abstractmethod
    async def count_in_organization(self, organization_id: uuid.UUID) -> Tuple[int, int]:
        """Tuple of (all licenses, ACTIVE licenses) of an organization."""

    @abstractmethod
    async def count_by_software(
        self, software_ids: Iterable[uuid.UUID], active_only: bool = False
    ) -> Dict[uuid.UUID, int]:
        """Number of licenses per product."""

    @abstractmethod
    async def count_active_by_user(self, user_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, int]:
        """Number of ACTIVE licenses per user."""

    @abstractmethod
    async def find_active_past_expiry(self, current_time: datetime) -> List[License]:
        """ACTIVE licenses whose ``expires_at`` is before ``current_time``."""
