"""
License query handlers.
"""
from core.domain.pagination import Page
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.queries.list_licenses import ListAllLicensesQuery, ListMyLicensesQuery
from licenses.application.services.license_assembler import LicenseAssembler
from licenses.ports.license_repository import LicenseRepository


class ListMyLicensesHandler:
    """Handler for ListMyLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository, license_assembler: LicenseAssembler):
        self.license_repository = license_repository
        self.license_assembler = license_assembler

    async def handle(self, query: ListMyLicensesQuery) -> Page[LicenseDTO]:
        """The caller's licenses, newest assignment first, with software."""
        licenses, total = await self.license_repository.list_for_user(
            query.principal.user_id, page=query.page, status=query.status
        )
        items = await self.license_assembler.assemble(licenses)
        return Page.of(items, total, query.page)


class ListAllLicensesHandler:
    """Handler for ListAllLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository, license_assembler: LicenseAssembler):
        self.license_repository = license_repository
        self.license_assembler = license_assembler

    async def handle(self, query: ListAllLicensesQuery) -> Page[LicenseDTO]:
        """Every license of the organization with holder and software."""
        licenses, total = await self.license_repository.list_for_organization(
            query.principal.organization_id,
            query.page,
            user_id=query.user_id,
            software_id=query.software_id,
            status=query.status,
        )
        items = await self.license_assembler.assemble(licenses, include_user=True)
        return Page.of(items, total, query.page)
