"""
License lifecycle handlers.

Handlers for revoke, return, suspend, and resume license commands.
"""
import logging

from core.domain.exceptions import LicenseAlreadyActiveError, LicenseNotFoundError
from core.infrastructure.events import event_bus
from licenses.application.commands.resume_license import ResumeLicenseCommand
from licenses.application.commands.return_license import ReturnLicenseCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.commands.suspend_license import SuspendLicenseCommand
from licenses.application.dto.license_dto import LicenseActionResultDTO
from licenses.application.services.license_assembler import LicenseAssembler
from licenses.domain.events import LicenseResumed, LicenseRevoked, LicenseSuspended
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class _LicenseActionHandler:
    """Shared lookup and response building for single-license commands."""

    def __init__(self, license_repository: LicenseRepository, license_assembler: LicenseAssembler):
        """Initialize handler with repository and assembler."""
        self.license_repository = license_repository
        self.license_assembler = license_assembler

    async def _load(self, command) -> License:
        license = await self.license_repository.find_in_organization(
            command.principal.organization_id, command.license_id
        )
        if license is None:
            raise LicenseNotFoundError()
        return license

    async def _result(self, message: str, license: License) -> LicenseActionResultDTO:
        return LicenseActionResultDTO(
            message=message,
            license=await self.license_assembler.assemble_one(license, include_user=True),
        )

    @staticmethod
    def _event_args(license: License, command) -> dict:
        return {
            "license_id": license.id,
            "organization_id": license.organization_id,
            "user_id": license.user_id,
            "software_id": license.software_id,
            "actor": str(command.principal.user_id),
        }


class RevokeLicenseHandler(_LicenseActionHandler):
    """Handler for RevokeLicenseCommand."""

    async def handle(self, command: RevokeLicenseCommand) -> LicenseActionResultDTO:
        """
        Handle revoke license command.

        Args:
            command: RevokeLicenseCommand

        Returns:
            LicenseActionResultDTO with the revoked license

        Raises:
            LicenseNotFoundError: If the license is not in the organization
            LicenseNotActiveError: If the license is not ACTIVE
        """
        license = await self._load(command)
        revoked = await self.license_repository.save(license.revoke())
        logger.info("License revoked", extra={"license_id": str(revoked.id)})

        await event_bus.publish(LicenseRevoked(**self._event_args(revoked, command), reason="admin"))
        return await self._result("License revoked successfully", revoked)


class ReturnLicenseHandler(_LicenseActionHandler):
    """Handler for ReturnLicenseCommand."""

    async def handle(self, command: ReturnLicenseCommand) -> LicenseActionResultDTO:
        """
        Handle return license command.

        Raises:
            LicenseNotFoundError: If the caller holds no ACTIVE license with that ID
        """
        license = await self._load(command)
        if license.user_id != command.principal.user_id or not license.is_active:
            raise LicenseNotFoundError()

        returned = await self.license_repository.save(license.return_to_pool())
        logger.info("License returned", extra={"license_id": str(returned.id)})

        await event_bus.publish(
            LicenseRevoked(**self._event_args(returned, command), reason="returned")
        )
        return await self._result("License returned successfully", returned)


class SuspendLicenseHandler(_LicenseActionHandler):
    """Handler for SuspendLicenseCommand."""

    async def handle(self, command: SuspendLicenseCommand) -> LicenseActionResultDTO:
        """
        Handle suspend license command.

        Raises:
            LicenseNotFoundError: If the license is not in the organization
            InvalidLicenseStatusError: If the license is not ACTIVE
        """
        license = await self._load(command)
        suspended = await self.license_repository.save(license.suspend())

        await event_bus.publish(LicenseSuspended(**self._event_args(suspended, command)))
        return await self._result("License suspended successfully", suspended)


class ResumeLicenseHandler(_LicenseActionHandler):
    """Handler for ResumeLicenseCommand."""

    async def handle(self, command: ResumeLicenseCommand) -> LicenseActionResultDTO:
        """
        Handle resume license command.

        Raises:
            LicenseNotFoundError: If the license is not in the organization
            InvalidLicenseStatusError: If the license is not SUSPENDED
            LicenseAlreadyActiveError: If the holder obtained another active
                license for the product while this one was suspended
        """
        license = await self._load(command)
        resumed = license.resume()
        if await self.license_repository.find_active(license.user_id, license.software_id):
            raise LicenseAlreadyActiveError("User already has an active license for this software")
        resumed = await self.license_repository.save(resumed)

        await event_bus.publish(LicenseResumed(**self._event_args(resumed, command)))
        return await self._result("License resumed successfully", resumed)
