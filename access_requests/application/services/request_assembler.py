"""
Builds access request DTOs with their software, requester and approvals.
"""
from typing import Iterable, List

from access_requests.application.dto.request_dto import (
    AccessRequestDTO,
    ApprovalDTO,
    RequesterDTO,
)
from access_requests.domain.access_request import AccessRequest
from access_requests.ports.access_request_repository import AccessRequestRepository
from catalog.application.dto.software_dto import SoftwareDTO
from catalog.ports.software_repository import SoftwareRepository
from organizations.application.dto.user_dto import UserSummaryDTO
from organizations.ports.user_repository import UserRepository


class RequestAssembler:
    """Batch-loads what request DTOs embed."""

    def __init__(
        self,
        request_repository: AccessRequestRepository,
        software_repository: SoftwareRepository,
        user_repository: UserRepository,
    ):
        self.request_repository = request_repository
        self.software_repository = software_repository
        self.user_repository = user_repository

    async def assemble(
        self,
        requests: Iterable[AccessRequest],
        include_requester: bool = False,
        include_approvals: bool = True,
    ) -> List[AccessRequestDTO]:
        """
        Convert requests to DTOs.

        Args:
            requests: AccessRequest entities
            include_requester: Embed the requester and their manager
            include_approvals: Embed approvals with approver summaries

        Returns:
            AccessRequestDTOs in the order given
        """
        requests = list(requests)
        software = await self.software_repository.find_by_ids(
            {request.software_id for request in requests}
        )
        approvals = {}
        if include_approvals:
            approvals = await self.request_repository.approvals_for(
                [request.id for request in requests]
            )

        user_ids = set()
        for items in approvals.values():
            user_ids.update(a.approver_id for a in items if a.approver_id)
        if include_requester:
            user_ids.update(request.user_id for request in requests)
        users = await self.user_repository.find_by_ids(user_ids)
        if include_requester:
            manager_ids = {
                users[r.user_id].manager_id
                for r in requests
                if r.user_id in users and users[r.user_id].manager_id
            }
            users.update(await self.user_repository.find_by_ids(manager_ids - set(users)))

        def summary(user_id):
            user = users.get(user_id) if user_id else None
            return UserSummaryDTO.from_entity(user) if user else None

        result = []
        for request in requests:
            product = software.get(request.software_id)
            requester = None
            if include_requester and request.user_id in users:
                user = users[request.user_id]
                requester = RequesterDTO(
                    **vars(UserSummaryDTO.from_entity(user)),
                    manager=summary(user.manager_id),
                )
            result.append(
                AccessRequestDTO.from_entity(
                    request,
                    software=SoftwareDTO.from_entity(product) if product else None,
                    user=requester,
                    approvals=[
                        ApprovalDTO.from_entity(approval, summary(approval.approver_id))
                        for approval in approvals.get(request.id, [])
                    ],
                )
            )
        return result

    async def assemble_one(self, request: AccessRequest, **options) -> AccessRequestDTO:
        return (await self.assemble([request], **options))[0]
