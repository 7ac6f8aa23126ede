"""
ExpireLicensesHandler.

Marks ACTIVE licenses whose expiry date has passed as EXPIRED. Run daily
by Celery beat and on demand by the ``expire_licenses`` command.
"""
import logging
from datetime import datetime, timezone

from core.domain.exceptions import InvalidLicenseStatusError
from core.infrastructure.events import event_bus
from licenses.application.commands.expire_licenses import ExpireLicensesCommand
from licenses.application.dto.license_dto import ExpireLicensesResultDTO
from licenses.domain.events import LicenseExpired
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ExpireLicensesHandler:
    """Handler for ExpireLicensesCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: ExpireLicensesCommand) -> ExpireLicensesResultDTO:
        """
        Handle expire licenses command.

        Args:
            command: ExpireLicensesCommand

        Returns:
            ExpireLicensesResultDTO; with ``dry_run`` nothing is changed and
            ``expired`` is 0
        """
        now = command.current_time or datetime.now(timezone.utc)
        candidates = await self.license_repository.find_active_past_expiry(now)
        logger.info("Found %d license(s) past expiry", len(candidates))

        if command.dry_run:
            return ExpireLicensesResultDTO(
                found=len(candidates),
                expired=0,
                license_ids=[license.id for license in candidates],
            )

        expired_ids = []
        for license in candidates:
            try:
                expired = await self.license_repository.save(license.mark_expired())
            except InvalidLicenseStatusError:
                logger.warning(
                    "License changed before it could expire", extra={"license_id": str(license.id)}
                )
                continue
            expired_ids.append(expired.id)
            await event_bus.publish(
                LicenseExpired(
                    license_id=expired.id,
                    organization_id=expired.organization_id,
                    user_id=expired.user_id,
                    software_id=expired.software_id,
                    actor="system",
                )
            )

        logger.info("Expired %d license(s)", len(expired_ids))
        return ExpireLicensesResultDTO(
            found=len(candidates), expired=len(expired_ids), license_ids=expired_ids
        )
