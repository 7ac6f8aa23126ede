"""
Catalog query handlers.

Catalog items are decorated per caller: their own license for the
product, whether they have a pending request, and usage counts.
"""
from typing import List

from access_requests.ports.access_request_repository import AccessRequestRepository
from catalog.application.dto.software_dto import CatalogItemDTO, SoftwareDTO
from catalog.application.queries.catalog_queries import (
    GetSoftwareQuery,
    ListCategoriesQuery,
    ListSoftwareQuery,
)
from catalog.domain.software import Software
from catalog.ports.software_repository import SoftwareRepository
from core.domain.exceptions import SoftwareNotFoundError
from core.domain.pagination import Page
from core.domain.value_objects import Principal
from licenses.application.dto.license_dto import LicenseDTO
from licenses.ports.license_repository import LicenseRepository


class CatalogDecorator:
    """Adds the caller-specific fields to catalog items."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        request_repository: AccessRequestRepository,
    ):
        self.license_repository = license_repository
        self.request_repository = request_repository

    async def decorate(
        self,
        principal: Principal,
        products: List[Software],
        active_licenses_only: bool = False,
    ) -> List[CatalogItemDTO]:
        """
        Build catalog items for a caller.

        Args:
            principal: The caller
            products: Products to decorate
            active_licenses_only: Count only ACTIVE licenses in ``counts.licenses``

        Returns:
            CatalogItemDTOs in the order given
        """
        ids = [software.id for software in products]
        current = await self.license_repository.current_for_user(principal.user_id, ids)
        pending = await self.request_repository.pending_software_ids(principal.user_id, ids)
        license_counts = await self.license_repository.count_by_software(
            ids, active_only=active_licenses_only
        )
        pending_counts = await self.request_repository.count_pending_by_software(ids)

        items = []
        for software in products:
            license = current.get(software.id)
            items.append(
                CatalogItemDTO(
                    **vars(SoftwareDTO.from_entity(software)),
                    user_license=LicenseDTO.from_entity(license) if license else None,
                    has_pending_request=software.id in pending,
                    counts={
                        "licenses": license_counts.get(software.id, 0),
                        "pending_requests": pending_counts.get(software.id, 0),
                    },
                )
            )
        return items


class ListSoftwareHandler:
    """Handler for ListSoftwareQuery."""

    def __init__(self, software_repository: SoftwareRepository, decorator: CatalogDecorator):
        self.software_repository = software_repository
        self.decorator = decorator

    async def handle(self, query: ListSoftwareQuery) -> Page[CatalogItemDTO]:
        """
        Handle list software query.

        Returns:
            Page of CatalogItemDTOs ordered by name
        """
        products, total = await self.software_repository.list(
            query.principal.organization_id,
            query.page,
            search=(query.search or "").strip() or None,
            category=query.category or None,
        )
        items = await self.decorator.decorate(query.principal, products)
        return Page.of(items, total, query.page)


class GetSoftwareHandler:
    """Handler for GetSoftwareQuery."""

    def __init__(self, software_repository: SoftwareRepository, decorator: CatalogDecorator):
        self.software_repository = software_repository
        self.decorator = decorator

    async def handle(self, query: GetSoftwareQuery) -> CatalogItemDTO:
        """
        Handle get software query.

        Raises:
            SoftwareNotFoundError: If the product is not in the caller's organization
        """
        software = await self.software_repository.find_in_organization(
            query.principal.organization_id, query.software_id
        )
        if software is None:
            raise SoftwareNotFoundError()
        items = await self.decorator.decorate(
            query.principal, [software], active_licenses_only=True
        )
        return items[0]


class ListCategoriesHandler:
    """Handler for ListCategoriesQuery."""

    def __init__(self, software_repository: SoftwareRepository):
        self.software_repository = software_repository

    async def handle(self, query: ListCategoriesQuery) -> List[str]:
        return await self.software_repository.categories(query.organization_id)
