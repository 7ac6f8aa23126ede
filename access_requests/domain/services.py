"""
Access request domain services.

ApprovalWorkflow computes the full outcome of a decision (new request
state, the Approval record, and the license to grant) so the repository
can persist it in a single transaction.
"""
import uuid
from dataclasses import dataclass
from typing import List, Optional

from access_requests.domain.access_request import AccessRequest, Approval
from core.domain.exceptions import ValidationError
from core.domain.value_objects import ApprovalDecision
from licenses.domain.license import License

AUTO_APPROVAL_COMMENT = "Auto-approved - No approval required"


@dataclass(frozen=True)
class DecisionOutcome:
    """Everything a decision changes."""

    request: AccessRequest
    approval: Approval
    license: Optional[License] = None
    license_created: bool = False


class ApprovalWorkflow:
    """Domain service for request decisions."""

    @staticmethod
    def approve(
        request: AccessRequest,
        approver_id: uuid.UUID,
        comments: Optional[str] = None,
        existing_license: Optional[License] = None,
    ) -> DecisionOutcome:
        """
        Approve a pending request.

        Args:
            request: The PENDING request
            approver_id: User making the decision
            comments: Optional comments, also stored as the license notes
            existing_license: The requester's ACTIVE license for the product,
                if they obtained one while the request was pending

        Returns:
            DecisionOutcome; ``license_created`` is False when the existing
            license is reused
        """
        approved = request.approve()
        approval = Approval.create(
            request_id=request.id,
            approver_id=approver_id,
            status=ApprovalDecision.APPROVED,
            comments=comments,
        )
        if existing_license is not None and existing_license.is_active:
            return DecisionOutcome(approved, approval, existing_license, False)

        license = License.create(
            organization_id=request.organization_id,
            user_id=request.user_id,
            software_id=request.software_id,
            notes=comments,
        )
        return DecisionOutcome(approved, approval, license, True)

    @staticmethod
    def auto_approve(request: AccessRequest) -> DecisionOutcome:
        """
        Approve a request for a product that needs no approval.

        The requester is recorded as the approver and the license carries
        no notes.
        """
        approved = request.approve()
        approval = Approval.create(
            request_id=request.id,
            approver_id=request.user_id,
            status=ApprovalDecision.APPROVED,
            comments=AUTO_APPROVAL_COMMENT,
        )
        license = License.create(
            organization_id=request.organization_id,
            user_id=request.user_id,
            software_id=request.software_id,
        )
        return DecisionOutcome(approved, approval, license, True)

    @staticmethod
    def reject(request: AccessRequest, approver_id: uuid.UUID, comments: str) -> DecisionOutcome:
        """
        Reject a pending request.

        Raises:
            ValidationError: If ``comments`` is blank
        """
        if not comments or not comments.strip():
            raise ValidationError("Comments are required when rejecting a request")
        rejected = request.reject()
        approval = Approval.create(
            request_id=request.id,
            approver_id=approver_id,
            status=ApprovalDecision.REJECTED,
            comments=comments.strip(),
        )
        return DecisionOutcome(rejected, approval)


def order_for_review(requests: List[AccessRequest]) -> List[AccessRequest]:
    """Most urgent first, then oldest first."""
    return sorted(requests, key=lambda r: (r.priority.rank, r.created_at))
