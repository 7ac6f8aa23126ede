"""
Access request DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from access_requests.domain.access_request import AccessRequest, Approval
from catalog.application.dto.software_dto import SoftwareDTO
from licenses.application.dto.license_dto import LicenseDTO
from organizations.application.dto.user_dto import UserSummaryDTO


@dataclass
class ApprovalDTO:
    """DTO for a decision on a request."""

    id: uuid.UUID
    status: str
    comments: Optional[str]
    created_at: datetime
    approver: Optional[UserSummaryDTO] = None

    @classmethod
    def from_entity(
        cls, approval: Approval, approver: Optional[UserSummaryDTO] = None
    ) -> "ApprovalDTO":
        return cls(
            id=approval.id,
            status=approval.status.value,
            comments=approval.comments,
            created_at=approval.created_at,
            approver=approver,
        )


@dataclass
class RequesterDTO(UserSummaryDTO):
    """The requester, with their manager, as shown to approvers."""

    manager: Optional[UserSummaryDTO] = None


@dataclass
class AccessRequestDTO:
    """DTO for request information."""

    id: uuid.UUID
    user_id: uuid.UUID
    software_id: uuid.UUID
    justification: str
    priority: str
    status: str
    created_at: datetime
    updated_at: datetime
    software: Optional[SoftwareDTO] = None
    user: Optional[RequesterDTO] = None
    approvals: List[ApprovalDTO] = field(default_factory=list)

    @classmethod
    def from_entity(cls, request: AccessRequest, **related) -> "AccessRequestDTO":
        return cls(
            id=request.id,
            user_id=request.user_id,
            software_id=request.software_id,
            justification=request.justification,
            priority=request.priority.value,
            status=request.status.value,
            created_at=request.created_at,
            updated_at=request.updated_at,
            **related,
        )


@dataclass
class RequestResultDTO:
    """DTO for submit, approve, reject and cancel responses."""

    message: str
    request: AccessRequestDTO
    license: Optional[LicenseDTO] = None
