"""
Catalog command handlers.

Handlers for creating, updating and deleting software products.
"""
import logging

from catalog.application.commands.create_software import CreateSoftwareCommand
from catalog.application.commands.delete_software import DeleteSoftwareCommand
from catalog.application.commands.update_software import UpdateSoftwareCommand
from catalog.application.dto.software_dto import SoftwareDTO
from catalog.domain.events import SoftwareCreated, SoftwareDeleted, SoftwareUpdated
from catalog.domain.software import Software
from catalog.ports.software_repository import SoftwareRepository
from core.domain.exceptions import SoftwareInUseError, SoftwareNotFoundError, ValidationError
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)


class CreateSoftwareHandler:
    """Handler for CreateSoftwareCommand."""

    def __init__(self, software_repository: SoftwareRepository):
        """Initialize handler with repository."""
        self.software_repository = software_repository

    async def handle(self, command: CreateSoftwareCommand) -> SoftwareDTO:
        """
        Handle create software command.

        Args:
            command: CreateSoftwareCommand

        Returns:
            SoftwareDTO of the new product

        Raises:
            ValidationError: If a field is invalid
        """
        fields = dict(command.fields)
        try:
            software = Software.create(
                organization_id=command.actor.organization_id,
                name=fields.pop("name", "") or "",
                category=fields.pop("category", "") or "",
                **fields,
            )
        except (TypeError, ValueError) as e:
            raise ValidationError(str(e)) from e

        software = await self.software_repository.save(software)
        logger.info(
            "Software created",
            extra={"software_id": str(software.id), "organization_id": str(software.organization_id)},
        )

        await event_bus.publish(
            SoftwareCreated(
                software_id=software.id,
                organization_id=software.organization_id,
                actor=str(command.actor.user_id),
                name=software.name,
            )
        )
        return SoftwareDTO.from_entity(software)


class UpdateSoftwareHandler:
    """Handler for UpdateSoftwareCommand."""

    def __init__(self, software_repository: SoftwareRepository):
        """Initialize handler with repository."""
        self.software_repository = software_repository

    async def handle(self, command: UpdateSoftwareCommand) -> SoftwareDTO:
        """
        Handle update software command.

        Raises:
            SoftwareNotFoundError: If the product is not in the organization
            ValidationError: If a field is invalid
        """
        software = await self.software_repository.find_in_organization(
            command.actor.organization_id, command.software_id
        )
        if software is None:
            raise SoftwareNotFoundError()

        try:
            software = software.update(command.changes)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        software = await self.software_repository.save(software)

        await event_bus.publish(
            SoftwareUpdated(
                software_id=software.id,
                organization_id=software.organization_id,
                actor=str(command.actor.user_id),
                changed_fields=list(command.changes),
            )
        )
        return SoftwareDTO.from_entity(software)


class DeleteSoftwareHandler:
    """Handler for DeleteSoftwareCommand."""

    def __init__(self, software_repository: SoftwareRepository):
        """Initialize handler with repository."""
        self.software_repository = software_repository

    async def handle(self, command: DeleteSoftwareCommand) -> None:
        """
        Handle delete software command.

        Raises:
            SoftwareNotFoundError: If the product is not in the organization
            SoftwareInUseError: If any license or request references the product
        """
        software = await self.software_repository.find_in_organization(
            command.actor.organization_id, command.software_id
        )
        if software is None:
            raise SoftwareNotFoundError()
        if await self.software_repository.is_referenced(software.id):
            raise SoftwareInUseError()

        await self.software_repository.delete(software.id)
        logger.info("Software deleted", extra={"software_id": str(software.id)})

        await event_bus.publish(
            SoftwareDeleted(
                software_id=software.id,
                organization_id=software.organization_id,
                actor=str(command.actor.user_id),
                name=software.name,
            )
        )
