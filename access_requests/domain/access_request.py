"""
AccessRequest and Approval domain entities.

An access request asks for a license to one software product. It stays
PENDING until it is approved, rejected or cancelled, exactly once.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import InvalidRequestStatusError
from core.domain.value_objects import ApprovalDecision, Priority, RequestStatus

MIN_JUSTIFICATION_LENGTH = 10


@dataclass(frozen=True)
class AccessRequest:
    """
    AccessRequest domain entity.

    Transition methods return new instances and refuse to leave a
    terminal status.
    """

    id: uuid.UUID
    organization_id: uuid.UUID
    user_id: uuid.UUID
    software_id: uuid.UUID
    justification: str
    priority: Priority
    status: RequestStatus
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate request entity."""
        if not self.organization_id:
            raise ValueError("Organization ID is required")
        if not self.user_id:
            raise ValueError("User ID is required")
        if not self.software_id:
            raise ValueError("Software ID is required")
        if not self.justification or len(self.justification.strip()) < MIN_JUSTIFICATION_LENGTH:
            raise ValueError(
                f"Justification must be at least {MIN_JUSTIFICATION_LENGTH} characters"
            )

    @classmethod
    def create(
        cls,
        organization_id: uuid.UUID,
        user_id: uuid.UUID,
        software_id: uuid.UUID,
        justification: str,
        priority: Priority = Priority.MEDIUM,
        request_id: Optional[uuid.UUID] = None,
    ) -> "AccessRequest":
        """
        Create a new PENDING request.

        Args:
            organization_id: Requester's organization
            user_id: Requester
            software_id: Requested product
            justification: Why the license is needed (trimmed)
            priority: How urgent the request is
            request_id: Optional UUID (generated if not provided)

        Returns:
            AccessRequest entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=request_id or uuid.uuid4(),
            organization_id=organization_id,
            user_id=user_id,
            software_id=software_id,
            justification=(justification or "").strip(),
            priority=priority,
            status=RequestStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    def _transition(self, status: RequestStatus) -> "AccessRequest":
        if not self.is_pending:
            raise InvalidRequestStatusError(
                f"Request is already {self.status.value.lower()}"
            )
        return replace(self, status=status, updated_at=datetime.now(timezone.utc))

    def approve(self) -> "AccessRequest":
        return self._transition(RequestStatus.APPROVED)

    def reject(self) -> "AccessRequest":
        return self._transition(RequestStatus.REJECTED)

    def cancel(self) -> "AccessRequest":
        return self._transition(RequestStatus.CANCELLED)


@dataclass(frozen=True)
class Approval:
    """
    Record of a decision on a request.

    ``approver_id`` becomes None if the approver's account is deleted.
    """

    id: uuid.UUID
    request_id: uuid.UUID
    approver_id: Optional[uuid.UUID]
    status: ApprovalDecision
    comments: Optional[str]
    created_at: datetime

    @classmethod
    def create(
        cls,
        request_id: uuid.UUID,
        approver_id: uuid.UUID,
        status: ApprovalDecision,
        comments: Optional[str] = None,
    ) -> "Approval":
        return cls(
            id=uuid.uuid4(),
            request_id=request_id,
            approver_id=approver_id,
            status=status,
            comments=comments,
            created_at=datetime.now(timezone.utc),
        )
