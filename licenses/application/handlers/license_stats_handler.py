"""
GetLicenseStatsHandler.

Aggregates an organization's licenses into the admin dashboard figures.
Results are served from cache for five minutes.
"""
import logging

from catalog.ports.software_repository import SoftwareRepository
from licenses.application.dto.license_dto import (
    LicenseStatsDTO,
    RecentLicenseDTO,
    SoftwareLicenseCountDTO,
)
from licenses.application.queries.get_license_stats import GetLicenseStatsQuery
from licenses.application.services.license_cache_service import LicenseStatsCacheService
from licenses.domain.services import LicenseCostCalculator
from licenses.ports.license_repository import LicenseRepository
from organizations.application.dto.user_dto import UserSummaryDTO
from organizations.ports.user_repository import UserRepository

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 10


class GetLicenseStatsHandler:
    """Handler for GetLicenseStatsQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        software_repository: SoftwareRepository,
        user_repository: UserRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.software_repository = software_repository
        self.user_repository = user_repository

    async def handle(self, query: GetLicenseStatsQuery) -> LicenseStatsDTO:
        """
        Handle license stats query.

        Args:
            query: GetLicenseStatsQuery

        Returns:
            LicenseStatsDTO
        """
        cached = await LicenseStatsCacheService.get_stats(query.organization_id)
        if cached is not None:
            logger.debug("License stats served from cache")
            return cached

        total, active_total = await self.license_repository.count_in_organization(
            query.organization_id
        )
        active = await self.license_repository.list_active_in_organization(query.organization_id)
        recent = await self.license_repository.recent_in_organization(
            query.organization_id, limit=RECENT_ACTIVITY_LIMIT
        )

        software = await self.software_repository.find_by_ids(
            {license.software_id for license in active} | {license.software_id for license in recent}
        )
        users = await self.user_repository.find_by_ids({license.user_id for license in recent})

        per_software = {}
        for license in active:
            per_software[license.software_id] = per_software.get(license.software_id, 0) + 1
        by_software = sorted(
            (
                SoftwareLicenseCountDTO(
                    software_id=software_id,
                    software_name=software[software_id].name if software_id in software else "",
                    count=count,
                )
                for software_id, count in per_software.items()
            ),
            key=lambda item: (-item.count, item.software_name),
        )

        stats = LicenseStatsDTO(
            total_licenses=total,
            active_licenses=active_total,
            monthly_total_cost=LicenseCostCalculator.monthly_total(active, software),
            licenses_by_software=by_software,
            recent_activity=[
                RecentLicenseDTO(
                    id=license.id,
                    status=license.status.value,
                    assigned_at=license.assigned_at,
                    user=(
                        UserSummaryDTO.from_entity(users[license.user_id])
                        if license.user_id in users
                        else None
                    ),
                    software_name=(
                        software[license.software_id].name if license.software_id in software else ""
                    ),
                )
                for license in recent
            ],
        )

        await LicenseStatsCacheService.set_stats(query.organization_id, stats)
        return stats
