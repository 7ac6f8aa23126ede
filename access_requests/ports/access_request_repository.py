"""
AccessRequest repository port (interface).

Decision methods persist the request transition, the Approval record and
any granted license together, or not at all.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Set, Tuple
import uuid

from access_requests.domain.access_request import AccessRequest, Approval
from access_requests.domain.services import DecisionOutcome
from core.domain.pagination import PageRequest
from core.domain.value_objects import RequestStatus


class AccessRequestRepository(ABC):
    """Abstract repository for AccessRequest and Approval entities."""

    @abstractmethod
    async def create(self, request: AccessRequest) -> AccessRequest:
        """
        Persist a new PENDING request.

        Raises:
            RequestAlreadyPendingError: If the user already has a PENDING
                request for the software
        """

    @abstractmethod
    async def create_auto_approved(self, request: AccessRequest) -> DecisionOutcome:
        """
        Persist a new request already approved, its Approval and its license.

        Raises:
            LicenseAlreadyActiveError: If the requester obtained an ACTIVE
                license for the product concurrently
        """

    @abstractmethod
    async def record_approval(
        self,
        organization_id: uuid.UUID,
        request_id: uuid.UUID,
        approver_id: uuid.UUID,
        comments: Optional[str] = None,
    ) -> DecisionOutcome:
        """
        Approve a PENDING request of an organization and grant its license.

        The request row is locked for the duration of the decision.

        Raises:
            RequestNotFoundError: If no PENDING request matches
        """

    @abstractmethod
    async def record_rejection(
        self,
        organization_id: uuid.UUID,
        request_id: uuid.UUID,
        approver_id: uuid.UUID,
        comments: str,
    ) -> DecisionOutcome:
        """
        Reject a PENDING request of an organization.

        Raises:
            RequestNotFoundError: If no PENDING request matches
        """

    @abstractmethod
    async def cancel(self, user_id: uuid.UUID, request_id: uuid.UUID) -> AccessRequest:
        """
        Cancel a user's own PENDING request.

        Raises:
            RequestNotFoundError: If the user has no PENDING request with that ID
        """

    @abstractmethod
    async def has_pending(self, user_id: uuid.UUID, software_id: uuid.UUID) -> bool:
        """Whether the user has a PENDING request for the product."""

    @abstractmethod
    async def pending_software_ids(
        self, user_id: uuid.UUID, software_ids: Iterable[uuid.UUID]
    ) -> Set[uuid.UUID]:
        """Products among ``software_ids`` the user has a PENDING request for."""

    @abstractmethod
    async def count_pending_by_software(
        self, software_ids: Iterable[uuid.UUID]
    ) -> Dict[uuid.UUID, int]:
        """Number of PENDING requests per product."""

    @abstractmethod
    async def list_for_user(
        self,
        user_id: uuid.UUID,
        page: PageRequest,
        status: Optional[RequestStatus] = None,
    ) -> Tuple[List[AccessRequest], int]:
        """A user's requests, newest first."""

    @abstractmethod
    async def list_pending_in_organization(
        self, organization_id: uuid.UUID, page: PageRequest
    ) -> Tuple[List[AccessRequest], int]:
        """PENDING requests ordered URGENT to LOW, then oldest first."""

    @abstractmethod
    async def approvals_for(
        self, request_ids: Iterable[uuid.UUID]
    ) -> Dict[uuid.UUID, List[Approval]]:
        """Approvals of each request, oldest first."""
