"""
Unit tests for AccessRequest and ApprovalWorkflow.
"""

import uuid
from datetime import datetime, timedelta, timezone
from dataclasses import replace

import pytest

from access_requests.domain.access_request import AccessRequest
from access_requests.domain.services import (
    AUTO_APPROVAL_COMMENT,
    ApprovalWorkflow,
    order_for_review,
)
from core.domain.exceptions import InvalidRequestStatusError, ValidationError
from core.domain.value_objects import ApprovalDecision, LicenseStatus, Priority, RequestStatus
from licenses.domain.license import License


def _request(priority=Priority.MEDIUM, justification="Needed for the Q3 launch"):
    return AccessRequest.create(
        organization_id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        software_id=uuid.uuid4(),
        justification=justification,
        priority=priority,
    )


class TestAccessRequestEntity:
    """Tests for AccessRequest transitions."""

    def test_create_pending(self):
        request = _request(justification="  Needed for the Q3 launch  ")

        assert request.status == RequestStatus.PENDING
        assert request.justification == "Needed for the Q3 launch"

    def test_short_justification_rejected(self):
        """Justification must have at least 10 characters after trimming."""
        with pytest.raises(ValueError, match="at least 10"):
            _request(justification="   too short  ")

    @pytest.mark.parametrize("transition", ["approve", "reject", "cancel"])
    def test_terminal_states_are_final(self, transition):
        decided = getattr(_request(), transition)()

        for follow_up in ("approve", "reject", "cancel"):
            with pytest.raises(InvalidRequestStatusError):
                getattr(decided, follow_up)()


class TestApprovalWorkflow:
    """Tests for ApprovalWorkflow decisions."""

    def test_approve_grants_new_license(self):
        request = _request()
        approver_id = uuid.uuid4()

        outcome = ApprovalWorkflow.approve(request, approver_id, comments="Go ahead")

        assert outcome.request.status == RequestStatus.APPROVED
        assert outcome.approval.status == ApprovalDecision.APPROVED
        assert outcome.approval.approver_id == approver_id
        assert outcome.license_created is True
        assert outcome.license.user_id == request.user_id
        assert outcome.license.software_id == request.software_id
        assert outcome.license.status == LicenseStatus.ACTIVE
        assert outcome.license.notes == "Go ahead"

    def test_approve_reuses_active_license(self):
        """A license obtained while the request was pending is not duplicated."""
        request = _request()
        existing = License.create(
            organization_id=request.organization_id,
            user_id=request.user_id,
            software_id=request.software_id,
        )

        outcome = ApprovalWorkflow.approve(request, uuid.uuid4(), existing_license=existing)

        assert outcome.license_created is False
        assert outcome.license.id == existing.id

    def test_auto_approve(self):
        request = _request()

        outcome = ApprovalWorkflow.auto_approve(request)

        assert outcome.request.status == RequestStatus.APPROVED
        assert outcome.approval.approver_id == request.user_id
        assert outcome.approval.comments == AUTO_APPROVAL_COMMENT
        assert outcome.license.notes is None

    def test_reject_requires_comments(self):
        with pytest.raises(ValidationError):
            ApprovalWorkflow.reject(_request(), uuid.uuid4(), comments="   ")

    def test_reject(self):
        outcome = ApprovalWorkflow.reject(_request(), uuid.uuid4(), comments=" Budget freeze ")

        assert outcome.request.status == RequestStatus.REJECTED
        assert outcome.approval.status == ApprovalDecision.REJECTED
        assert outcome.approval.comments == "Budget freeze"
        assert outcome.license is None

    def test_order_for_review(self):
        """Most urgent first, oldest first within a priority."""
        now = datetime.now(timezone.utc)
        old_low = replace(_request(Priority.LOW), created_at=now - timedelta(days=3))
        new_high = replace(_request(Priority.HIGH), created_at=now)
        old_high = replace(_request(Priority.HIGH), created_at=now - timedelta(days=1))
        urgent = replace(_request(Priority.URGENT), created_at=now)

        ordered = order_for_review([old_low, new_high, old_high, urgent])

        assert ordered == [urgent, old_high, new_high, old_low]
