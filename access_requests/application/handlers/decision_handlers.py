"""
Request decision handlers.

Handlers for approve, reject and cancel. The repository persists each
decision atomically; events are published once it has committed.
"""
import logging

from access_requests.application.commands.decide_request import (
    ApproveRequestCommand,
    CancelRequestCommand,
    RejectRequestCommand,
)
from access_requests.application.dto.request_dto import RequestResultDTO
from access_requests.application.services.request_assembler import RequestAssembler
from access_requests.domain.events import RequestApproved, RequestCancelled, RequestRejected
from access_requests.ports.access_request_repository import AccessRequestRepository
from core.domain.exceptions import ValidationError
from core.infrastructure.events import event_bus
from licenses.application.services.license_assembler import LicenseAssembler
from licenses.domain.events import LicenseGranted

logger = logging.getLogger(__name__)


def _clean(comments):
    if comments is None:
        return None
    return comments.strip() or None


class ApproveRequestHandler:
    """Handler for ApproveRequestCommand."""

    def __init__(
        self,
        request_repository: AccessRequestRepository,
        request_assembler: RequestAssembler,
        license_assembler: LicenseAssembler,
    ):
        """Initialize handler with repository and assemblers."""
        self.request_repository = request_repository
        self.request_assembler = request_assembler
        self.license_assembler = license_assembler

    async def handle(self, command: ApproveRequestCommand) -> RequestResultDTO:
        """
        Handle approve request command.

        Raises:
            RequestNotFoundError: If no PENDING request with that ID exists in
                the caller's organization
        """
        principal = command.principal
        comments = _clean(command.comments)
        outcome = await self.request_repository.record_approval(
            principal.organization_id,
            command.request_id,
            approver_id=principal.user_id,
            comments=comments,
        )
        request, license = outcome.request, outcome.license
        logger.info(
            "Access request approved",
            extra={
                "request_id": str(request.id),
                "license_id": str(license.id),
                "license_created": outcome.license_created,
            },
        )

        actor = str(principal.user_id)
        await event_bus.publish(
            RequestApproved(
                request_id=request.id,
                organization_id=request.organization_id,
                requester_id=request.user_id,
                software_id=request.software_id,
                actor=actor,
                license_id=license.id,
                comments=comments,
            )
        )
        if outcome.license_created:
            await event_bus.publish(
                LicenseGranted(
                    license_id=license.id,
                    organization_id=license.organization_id,
                    user_id=license.user_id,
                    software_id=license.software_id,
                    actor=actor,
                    source="approval",
                    request_id=request.id,
                )
            )

        return RequestResultDTO(
            message="Request approved successfully",
            request=await self.request_assembler.assemble_one(request),
            license=await self.license_assembler.assemble_one(license),
        )


class RejectRequestHandler:
    """Handler for RejectRequestCommand."""

    def __init__(
        self,
        request_repository: AccessRequestRepository,
        request_assembler: RequestAssembler,
    ):
        """Initialize handler with repository and assembler."""
        self.request_repository = request_repository
        self.request_assembler = request_assembler

    async def handle(self, command: RejectRequestCommand) -> RequestResultDTO:
        """
        Handle reject request command.

        Raises:
            ValidationError: If no comments are given
            RequestNotFoundError: If no PENDING request with that ID exists in
                the caller's organization
        """
        comments = _clean(command.comments)
        if comments is None:
            raise ValidationError("Comments are required when rejecting a request")

        principal = command.principal
        outcome = await self.request_repository.record_rejection(
            principal.organization_id,
            command.request_id,
            approver_id=principal.user_id,
            comments=comments,
        )
        request = outcome.request
        logger.info("Access request rejected", extra={"request_id": str(request.id)})

        await event_bus.publish(
            RequestRejected(
                request_id=request.id,
                organization_id=request.organization_id,
                requester_id=request.user_id,
                software_id=request.software_id,
                actor=str(principal.user_id),
                comments=comments,
            )
        )
        return RequestResultDTO(
            message="Request rejected",
            request=await self.request_assembler.assemble_one(request),
        )


class CancelRequestHandler:
    """Handler for CancelRequestCommand."""

    def __init__(
        self,
        request_repository: AccessRequestRepository,
        request_assembler: RequestAssembler,
    ):
        """Initialize handler with repository and assembler."""
        self.request_repository = request_repository
        self.request_assembler = request_assembler

    async def handle(self, command: CancelRequestCommand) -> RequestResultDTO:
        """
        Handle cancel request command.

        Raises:
            RequestNotFoundError: If the caller has no PENDING request with that ID
        """
        principal = command.principal
        request = await self.request_repository.cancel(principal.user_id, command.request_id)
        logger.info("Access request cancelled", extra={"request_id": str(request.id)})

        await event_bus.publish(
            RequestCancelled(
                request_id=request.id,
                organization_id=request.organization_id,
                requester_id=request.user_id,
                software_id=request.software_id,
                actor=str(principal.user_id),
            )
        )
        return RequestResultDTO(
            message="Request cancelled successfully",
            request=await self.request_assembler.assemble_one(request),
        )
