"""
Software repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple
import uuid

from catalog.domain.software import Software
from core.domain.pagination import PageRequest


class SoftwareRepository(ABC):
    """Abstract repository for Software entities."""

    @abstractmethod
    async def save(self, software: Software) -> Software:
        """
        Save a software entity.

        Args:
            software: Software entity to save

        Returns:
            Saved software entity
        """

    @abstractmethod
    async def find_in_organization(
        self, organization_id: uuid.UUID, software_id: uuid.UUID
    ) -> Optional[Software]:
        """Find a product by ID within an organization."""

    @abstractmethod
    async def find_by_ids(self, software_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, Software]:
        """Batch lookup keyed by software ID."""

    @abstractmethod
    async def list(
        self,
        organization_id: uuid.UUID,
        page: PageRequest,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Tuple[List[Software], int]:
        """
        List an organization's catalog ordered by name.

        Args:
            organization_id: Organization UUID
            page: Page to return
            search: Case-insensitive match on name, description or vendor
            category: Exact category

        Returns:
            Tuple of (software on the page, total matching)
        """

    @abstractmethod
    async def categories(self, organization_id: uuid.UUID) -> List[str]:
        """Distinct categories of an organization, sorted ascending."""

    @abstractmethod
    async def is_referenced(self, software_id: uuid.UUID) -> bool:
        """Whether any license or request points at the product."""

    @abstractmethod
    async def delete(self, software_id: uuid.UUID) -> None:
        """Delete a product."""
