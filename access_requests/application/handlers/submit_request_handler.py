"""
SubmitRequestHandler.

Creates an access request, or grants the license immediately when the
product does not require approval.
"""
import logging

from access_requests.application.commands.submit_request import SubmitRequestCommand
from access_requests.application.dto.request_dto import RequestResultDTO
from access_requests.application.services.request_assembler import RequestAssembler
from access_requests.domain.access_request import AccessRequest
from access_requests.domain.events import RequestApproved, RequestSubmitted
from access_requests.domain.services import AUTO_APPROVAL_COMMENT
from access_requests.ports.access_request_repository import AccessRequestRepository
from catalog.ports.software_repository import SoftwareRepository
from core.domain.exceptions import (
    LicenseAlreadyActiveError,
    RequestAlreadyPendingError,
    SoftwareNotFoundError,
    ValidationError,
)
from core.infrastructure.events import event_bus
from licenses.application.services.license_assembler import LicenseAssembler
from licenses.domain.events import LicenseGranted
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class SubmitRequestHandler:
    """Handler for SubmitRequestCommand."""

    def __init__(
        self,
        request_repository: AccessRequestRepository,
        software_repository: SoftwareRepository,
        license_repository: LicenseRepository,
        request_assembler: RequestAssembler,
        license_assembler: LicenseAssembler,
    ):
        """Initialize handler with repositories."""
        self.request_repository = request_repository
        self.software_repository = software_repository
        self.license_repository = license_repository
        self.request_assembler = request_assembler
        self.license_assembler = license_assembler

    async def handle(self, command: SubmitRequestCommand) -> RequestResultDTO:
        """
        Handle submit request command.

        Args:
            command: SubmitRequestCommand

        Returns:
            RequestResultDTO; ``license`` is set only when auto-approved

        Raises:
            SoftwareNotFoundError: If the product is not in the organization
            ValidationError: If the justification is too short
            LicenseAlreadyActiveError: If the caller already holds an active license
            RequestAlreadyPendingError: If the caller already waits on a
                request for a product that needs approval
        """
        principal = command.principal
        software = await self.software_repository.find_in_organization(
            principal.organization_id, command.software_id
        )
        if software is None:
            raise SoftwareNotFoundError()

        try:
            request = AccessRequest.create(
                organization_id=principal.organization_id,
                user_id=principal.user_id,
                software_id=software.id,
                justification=command.justification,
                priority=command.priority,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if await self.license_repository.find_active(principal.user_id, software.id):
            raise LicenseAlreadyActiveError()

        if software.requires_approval:
            if await self.request_repository.has_pending(principal.user_id, software.id):
                raise RequestAlreadyPendingError()
            request = await self.request_repository.create(request)
            logger.info(
                "Access request submitted",
                extra={"request_id": str(request.id), "software_id": str(software.id)},
            )
            await event_bus.publish(self._submitted(request, auto_approved=False))
            return RequestResultDTO(
                message="Request submitted successfully",
                request=await self.request_assembler.assemble_one(request),
            )

        outcome = await self.request_repository.create_auto_approved(request)
        logger.info(
            "Access request auto-approved",
            extra={"request_id": str(request.id), "license_id": str(outcome.license.id)},
        )

        actor = str(principal.user_id)
        await event_bus.publish(self._submitted(outcome.request, auto_approved=True))
        await event_bus.publish(
            RequestApproved(
                request_id=outcome.request.id,
                organization_id=outcome.request.organization_id,
                requester_id=outcome.request.user_id,
                software_id=outcome.request.software_id,
                actor=actor,
                license_id=outcome.license.id,
                comments=AUTO_APPROVAL_COMMENT,
                automatic=True,
            )
        )
        await event_bus.publish(
            LicenseGranted(
                license_id=outcome.license.id,
                organization_id=outcome.license.organization_id,
                user_id=outcome.license.user_id,
                software_id=outcome.license.software_id,
                actor=actor,
                source="auto_approval",
                request_id=outcome.request.id,
            )
        )

        return RequestResultDTO(
            message="Request auto-approved and license granted",
            request=await self.request_assembler.assemble_one(outcome.request),
            license=await self.license_assembler.assemble_one(outcome.license),
        )

    @staticmethod
    def _submitted(request: AccessRequest, auto_approved: bool) -> RequestSubmitted:
        return RequestSubmitted(
            request_id=request.id,
            organization_id=request.organization_id,
            requester_id=request.user_id,
            software_id=request.software_id,
            actor=str(request.user_id),
            priority=request.priority.value,
            auto_approved=auto_approved,
        )
