"""
Access request query handlers.
"""

from access_requests.application.dto.request_dto import AccessRequestDTO
from access_requests.application.queries.request_queries import (
    ListMyRequestsQuery,
    ListPendingApprovalsQuery,
)
from access_requests.application.services.request_assembler import RequestAssembler
from access_requests.ports.access_request_repository import AccessRequestRepository
from core.domain.pagination import Page


class ListMyRequestsHandler:
    """Handler for ListMyRequestsQuery."""

    def __init__(
        self,
        request_repository: AccessRequestRepository,
        request_assembler: RequestAssembler,
    ):
        self.request_repository = request_repository
        self.request_assembler = request_assembler

    async def handle(self, query: ListMyRequestsQuery) -> Page[AccessRequestDTO]:
        """The caller's requests, newest first, with software and approvals."""
        requests, total = await self.request_repository.list_for_user(
            query.principal.user_id, query.page, status=query.status
        )
        items = await self.request_assembler.assemble(requests)
        return Page.of(items, total, query.page)


class ListPendingApprovalsHandler:
    """Handler for ListPendingApprovalsQuery."""

    def __init__(
        self,
        request_repository: AccessRequestRepository,
        request_assembler: RequestAssembler,
    ):
        self.request_repository = request_repository
        self.request_assembler = request_assembler

    async def handle(self, query: ListPendingApprovalsQuery) -> Page[AccessRequestDTO]:
        """Pending requests of the organization, most urgent and oldest first."""
        requests, total = await self.request_repository.list_pending_in_organization(
            query.principal.organization_id, query.page
        )
        items = await self.request_assembler.assemble(
            requests, include_requester=True, include_approvals=False
        )
        return Page.of(items, total, query.page)
