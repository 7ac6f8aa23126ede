"""
License statistics cache service.

Caches the organization-wide license statistics, which aggregate every
license of an organization.
"""
import logging
import uuid
from decimal import Decimal
from typing import Optional

from core.infrastructure.cache_adapters import cache_adapter
from licenses.application.dto.license_dto import (
    LicenseStatsDTO,
    RecentLicenseDTO,
    SoftwareLicenseCountDTO,
)
from organizations.application.dto.user_dto import UserSummaryDTO

logger = logging.getLogger(__name__)

# Cache TTLs (in seconds)
CACHE_TTL_LICENSE_STATS = 300  # 5 minutes


class LicenseStatsCacheService:
    """Service for caching license statistics per organization."""

    @staticmethod
    def _stats_key(organization_id: uuid.UUID) -> str:
        """Generate cache key for organization stats."""
        return f"license_stats:{organization_id}"

    @staticmethod
    async def get_stats(organization_id: uuid.UUID) -> Optional[LicenseStatsDTO]:
        """
        Get cached license statistics.

        Args:
            organization_id: Organization UUID

        Returns:
            Cached LicenseStatsDTO or None
        """
        cached = await cache_adapter.get(LicenseStatsCacheService._stats_key(organization_id))
        if not cached:
            return None
        try:
            return LicenseStatsDTO(
                total_licenses=cached["total_licenses"],
                active_licenses=cached["active_licenses"],
                monthly_total_cost=Decimal(cached["monthly_total_cost"]),
                licenses_by_software=[
                    SoftwareLicenseCountDTO(
                        software_id=uuid.UUID(item["software_id"]),
                        software_name=item["software_name"],
                        count=item["count"],
                    )
                    for item in cached["licenses_by_software"]
                ],
                recent_activity=[
                    RecentLicenseDTO(
                        id=uuid.UUID(item["id"]),
                        status=item["status"],
                        assigned_at=item["assigned_at"],
                        user=UserSummaryDTO(**item["user"]) if item["user"] else None,
                        software_name=item["software_name"],
                    )
                    for item in cached["recent_activity"]
                ],
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Error deserializing cached stats: %s", e)
            return None

    @staticmethod
    async def set_stats(
        organization_id: uuid.UUID, stats: LicenseStatsDTO, ttl: int = None
    ) -> None:
        """
        Cache license statistics.

        Args:
            organization_id: Organization UUID
            stats: LicenseStatsDTO to cache
            ttl: Time to live in seconds
        """
        stats_dict = {
            "total_licenses": stats.total_licenses,
            "active_licenses": stats.active_licenses,
            "monthly_total_cost": str(stats.monthly_total_cost),
            "licenses_by_software": [
                {
                    "software_id": str(item.software_id),
                    "software_name": item.software_name,
                    "count": item.count,
                }
                for item in stats.licenses_by_software
            ],
            "recent_activity": [
                {
                    "id": str(item.id),
                    "status": item.status,
                    "assigned_at": item.assigned_at,
                    "user": (
                        {
                            "id": item.user.id,
                            "email": item.user.email,
                            "first_name": item.user.first_name,
                            "last_name": item.user.last_name,
                        }
                        if item.user
                        else None
                    ),
                    "software_name": item.software_name,
                }
                for item in stats.recent_activity
            ],
        }
        await cache_adapter.set(
            LicenseStatsCacheService._stats_key(organization_id),
            stats_dict,
            timeout=ttl or CACHE_TTL_LICENSE_STATS,
        )

    @staticmethod
    async def invalidate_stats(organization_id: uuid.UUID) -> None:
        """
        Invalidate cached license statistics.

        Args:
            organization_id: Organization UUID
        """
        await cache_adapter.delete(LicenseStatsCacheService._stats_key(organization_id))
        logger.info("Invalidated license stats cache", extra={"organization_id": str(organization_id)})
