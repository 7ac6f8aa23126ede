"""
Handlers for licenses an administrator manages on a user's behalf.
"""
import logging
from typing import List

from catalog.ports.software_repository import SoftwareRepository
from core.domain.exceptions import (
    LicenseAlreadyActiveError,
    LicenseNotFoundError,
    SoftwareNotFoundError,
    UserNotFoundError,
)
from core.domain.value_objects import LicenseStatus
from core.infrastructure.events import event_bus
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.services.license_assembler import LicenseAssembler
from licenses.domain.events import LicenseGranted, LicenseRevoked
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository
from organizations.application.commands.user_licenses import (
    AssignLicenseCommand,
    RemoveUserLicenseCommand,
)
from organizations.application.queries.user_queries import ListUserLicensesQuery
from organizations.ports.user_repository import UserRepository

logger = logging.getLogger(__name__)


class ListUserLicensesHandler:
    """Handler for ListUserLicensesQuery."""

    def __init__(
        self,
        user_repository: UserRepository,
        license_repository: LicenseRepository,
        license_assembler: LicenseAssembler,
    ):
        self.user_repository = user_repository
        self.license_repository = license_repository
        self.license_assembler = license_assembler

    async def handle(self, query: ListUserLicensesQuery) -> List[LicenseDTO]:
        """Active licenses of a user, newest first."""
        user = await self.user_repository.find_in_organization(
            query.actor.organization_id, query.user_id
        )
        if user is None:
            raise UserNotFoundError()
        licenses, _ = await self.license_repository.list_for_user(
            user.id, status=LicenseStatus.ACTIVE
        )
        return await self.license_assembler.assemble(licenses)


class AssignLicenseHandler:
    """Handler for AssignLicenseCommand."""

    def __init__(
        self,
        user_repository: UserRepository,
        software_repository: SoftwareRepository,
        license_repository: LicenseRepository,
        license_assembler: LicenseAssembler,
    ):
        self.user_repository = user_repository
        self.software_repository = software_repository
        self.license_repository = license_repository
        self.license_assembler = license_assembler

    async def handle(self, command: AssignLicenseCommand) -> LicenseDTO:
        """
        Grant a license directly.

        Raises:
            UserNotFoundError: If the user is not in the organization
            SoftwareNotFoundError: If the product is not in the organization
            LicenseAlreadyActiveError: If the user already holds an active license
        """
        actor = command.actor
        user = await self.user_repository.find_in_organization(
            actor.organization_id, command.user_id
        )
        if user is None:
            raise UserNotFoundError()
        software = await self.software_repository.find_in_organization(
            actor.organization_id, command.software_id
        )
        if software is None:
            raise SoftwareNotFoundError()

        if await self.license_repository.find_active(user.id, software.id):
            raise LicenseAlreadyActiveError("User already has an active license for this software")

        license = await self.license_repository.save(
            License.create(
                organization_id=actor.organization_id,
                user_id=user.id,
                software_id=software.id,
                expires_at=command.expires_at,
                notes=f"Manually assigned by {actor.email}",
            )
        )
        logger.info(
            "License assigned",
            extra={"license_id": str(license.id), "user_id": str(user.id)},
        )

        await event_bus.publish(
            LicenseGranted(
                license_id=license.id,
                organization_id=license.organization_id,
                user_id=license.user_id,
                software_id=license.software_id,
                actor=str(actor.user_id),
                source="manual",
            )
        )
        return await self.license_assembler.assemble_one(license)


class RemoveUserLicenseHandler:
    """Handler for RemoveUserLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, license_assembler: LicenseAssembler):
        self.license_repository = license_repository
        self.license_assembler = license_assembler

    async def handle(self, command: RemoveUserLicenseCommand) -> LicenseDTO:
        """
        Revoke one of a user's active licenses.

        Raises:
            LicenseNotFoundError: If the user has no active license with that ID
        """
        actor = command.actor
        license = await self.license_repository.find_in_organization(
            actor.organization_id, command.license_id
        )
        if license is None or license.user_id != command.user_id or not license.is_active:
            raise LicenseNotFoundError()

        license = await self.license_repository.save(
            license.revoke(notes=f"Manually deactivated by {actor.email}")
        )
        logger.info("License removed from user", extra={"license_id": str(license.id)})

        await event_bus.publish(
            LicenseRevoked(
                license_id=license.id,
                organization_id=license.organization_id,
                user_id=license.user_id,
                software_id=license.software_id,
                actor=str(actor.user_id),
                reason="removed",
            )
        )
        return await self.license_assembler.assemble_one(license)
