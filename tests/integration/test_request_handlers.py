"""
Integration tests for access request handlers.
"""

import uuid

import pytest
from asgiref.sync import async_to_sync

from access_requests.application.commands.decide_request import (
    ApproveRequestCommand,
    CancelRequestCommand,
    RejectRequestCommand,
)
from access_requests.application.commands.submit_request import SubmitRequestCommand
from access_requests.application.handlers.decision_handlers import (
    ApproveRequestHandler,
    CancelRequestHandler,
    RejectRequestHandler,
)
from access_requests.application.handlers.request_query_handlers import (
    ListMyRequestsHandler,
    ListPendingApprovalsHandler,
)
from access_requests.application.handlers.submit_request_handler import SubmitRequestHandler
from access_requests.application.queries.request_queries import (
    ListMyRequestsQuery,
    ListPendingApprovalsQuery,
)
from access_requests.application.services.request_assembler import RequestAssembler
from core.domain.exceptions import (
    LicenseAlreadyActiveError,
    RequestAlreadyPendingError,
    RequestNotFoundError,
    SoftwareNotFoundError,
    ValidationError,
)
from core.domain.value_objects import Priority, RequestStatus
from core.infrastructure.models import AuditLog
from licenses.application.services.license_assembler import LicenseAssembler

JUSTIFICATION = "Need it for the upcoming product launch"


@pytest.fixture
def request_assembler(request_repository, software_repository, user_repository):
    return RequestAssembler(request_repository, software_repository, user_repository)


@pytest.fixture
def submit_handler(
    request_repository, software_repository, license_repository, request_assembler
):
    return SubmitRequestHandler(
        request_repository=request_repository,
        software_repository=software_repository,
        license_repository=license_repository,
        request_assembler=request_assembler,
        license_assembler=LicenseAssembler(software_repository),
    )


@pytest.fixture
def approve_handler(request_repository, software_repository, request_assembler):
    return ApproveRequestHandler(
        request_repository, request_assembler, LicenseAssembler(software_repository)
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestSubmitRequestHandler:
    """Tests for SubmitRequestHandler."""

    def test_submit_pending(self, submit_handler, regular_user, software, as_principal):
        """Products that need approval wait for a manager."""
        result = async_to_sync(submit_handler.handle)(
            SubmitRequestCommand(
                principal=as_principal(regular_user),
                software_id=software.id,
                justification=JUSTIFICATION,
                priority=Priority.HIGH,
            )
        )

        assert result.message == "Request submitted successfully"
        assert result.request.status == "PENDING"
        assert result.request.priority == "HIGH"
        assert result.request.software.name == "GitHub"
        assert result.license is None

    def test_submit_auto_approved(
        self, submit_handler, license_repository, regular_user, open_software, as_principal
    ):
        """Products without approval are granted immediately."""
        result = async_to_sync(submit_handler.handle)(
            SubmitRequestCommand(
                principal=as_principal(regular_user),
                software_id=open_software.id,
                justification=JUSTIFICATION,
            )
        )

        assert result.request.status == "APPROVED"
        assert result.license is not None
        assert result.license.status == "ACTIVE"
        assert result.request.approvals[0].comments == "Auto-approved - No approval required"
        active = async_to_sync(license_repository.find_active)(regular_user.id, open_software.id)
        assert active.id == result.license.id

    def test_duplicate_pending(self, submit_handler, pending_request, regular_user, as_principal):
        with pytest.raises(RequestAlreadyPendingError):
            async_to_sync(submit_handler.handle)(
                SubmitRequestCommand(
                    principal=as_principal(regular_user),
                    software_id=pending_request.software_id,
                    justification=JUSTIFICATION,
                )
            )

    def test_already_licensed(self, submit_handler, active_license, regular_user, as_principal):
        with pytest.raises(LicenseAlreadyActiveError):
            async_to_sync(submit_handler.handle)(
                SubmitRequestCommand(
                    principal=as_principal(regular_user),
                    software_id=active_license.software_id,
                    justification=JUSTIFICATION,
                )
            )

    def test_short_justification(self, submit_handler, regular_user, software, as_principal):
        with pytest.raises(ValidationError):
            async_to_sync(submit_handler.handle)(
                SubmitRequestCommand(
                    principal=as_principal(regular_user),
                    software_id=software.id,
                    justification="please",
                )
            )

    def test_software_of_other_organization(
        self, submit_handler, foreign_admin, software, as_principal
    ):
        with pytest.raises(SoftwareNotFoundError):
            async_to_sync(submit_handler.handle)(
                SubmitRequestCommand(
                    principal=as_principal(foreign_admin),
                    software_id=software.id,
                    justification=JUSTIFICATION,
                )
            )

    def test_submission_is_audited(
        self, submit_handler, regular_user, software, organization, as_principal
    ):
        result = async_to_sync(submit_handler.handle)(
            SubmitRequestCommand(
                principal=as_principal(regular_user),
                software_id=software.id,
                justification=JUSTIFICATION,
            )
        )

        log = AuditLog.objects.get(entity_id=str(result.request.id))
        assert log.organization_id == organization.id
        assert log.actor == str(regular_user.id)


@pytest.mark.django_db
@pytest.mark.integration
class TestDecisionHandlers:
    """Tests for approve, reject and cancel."""

    def test_approve(self, approve_handler, pending_request, manager_user, as_principal):
        result = async_to_sync(approve_handler.handle)(
            ApproveRequestCommand(
                principal=as_principal(manager_user),
                request_id=pending_request.id,
                comments="  Approved for the team  ",
            )
        )

        assert result.message == "Request approved successfully"
        assert result.request.status == "APPROVED"
        assert result.license.status == "ACTIVE"
        assert result.license.notes == "Approved for the team"
        approval = result.request.approvals[0]
        assert approval.status == "APPROVED"
        assert approval.approver.id == manager_user.id

    def test_approve_twice(self, approve_handler, pending_request, manager_user, as_principal):
        command = ApproveRequestCommand(
            principal=as_principal(manager_user), request_id=pending_request.id
        )
        async_to_sync(approve_handler.handle)(command)

        with pytest.raises(RequestNotFoundError):
            async_to_sync(approve_handler.handle)(command)

    def test_approve_other_organization(
        self, approve_handler, pending_request, foreign_admin, as_principal
    ):
        with pytest.raises(RequestNotFoundError):
            async_to_sync(approve_handler.handle)(
                ApproveRequestCommand(
                    principal=as_principal(foreign_admin), request_id=pending_request.id
                )
            )

    def test_reject(self, request_repository, request_assembler, pending_request, admin_user,
                    as_principal):
        handler = RejectRequestHandler(request_repository, request_assembler)

        result = async_to_sync(handler.handle)(
            RejectRequestCommand(
                principal=as_principal(admin_user),
                request_id=pending_request.id,
                comments="Use the team account",
            )
        )

        assert result.request.status == "REJECTED"
        assert result.license is None
        assert result.request.approvals[0].comments == "Use the team account"

    def test_reject_without_comments(
        self, request_repository, request_assembler, pending_request, admin_user, as_principal
    ):
        handler = RejectRequestHandler(request_repository, request_assembler)

        with pytest.raises(ValidationError):
            async_to_sync(handler.handle)(
                RejectRequestCommand(
                    principal=as_principal(admin_user),
                    request_id=pending_request.id,
                    comments="   ",
                )
            )

    def test_cancel(
        self, request_repository, request_assembler, pending_request, regular_user, as_principal
    ):
        handler = CancelRequestHandler(request_repository, request_assembler)

        result = async_to_sync(handler.handle)(
            CancelRequestCommand(principal=as_principal(regular_user), request_id=pending_request.id)
        )

        assert result.message == "Request cancelled successfully"
        assert result.request.status == "CANCELLED"

    def test_cancel_someone_elses(
        self, request_repository, request_assembler, pending_request, other_user, as_principal
    ):
        handler = CancelRequestHandler(request_repository, request_assembler)

        with pytest.raises(RequestNotFoundError):
            async_to_sync(handler.handle)(
                CancelRequestCommand(
                    principal=as_principal(other_user), request_id=pending_request.id
                )
            )

    def test_decision_email(
        self, approve_handler, pending_request, manager_user, as_principal, mailoutbox
    ):
        """The requester is told about a manager's decision."""
        async_to_sync(approve_handler.handle)(
            ApproveRequestCommand(
                principal=as_principal(manager_user),
                request_id=pending_request.id,
                comments="Enjoy",
            )
        )

        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == ["john@acme.com"]
        assert "approved" in mailoutbox[0].subject
        assert "Comments: Enjoy" in mailoutbox[0].body

    def test_no_email_for_auto_approval(
        self, submit_handler, regular_user, open_software, as_principal, mailoutbox
    ):
        async_to_sync(submit_handler.handle)(
            SubmitRequestCommand(
                principal=as_principal(regular_user),
                software_id=open_software.id,
                justification=JUSTIFICATION,
            )
        )

        assert mailoutbox == []


@pytest.mark.django_db
@pytest.mark.integration
class TestRequestQueryHandlers:
    """Tests for request listings."""

    def test_my_requests(
        self, request_repository, request_assembler, pending_request, regular_user, as_principal
    ):
        handler = ListMyRequestsHandler(request_repository, request_assembler)

        page = async_to_sync(handler.handle)(ListMyRequestsQuery(principal=as_principal(regular_user)))

        assert page.total == 1
        assert page.items[0].id == pending_request.id
        assert page.items[0].software.name == "GitHub"

    def test_my_requests_status_filter(
        self, request_repository, request_assembler, pending_request, regular_user, as_principal
    ):
        handler = ListMyRequestsHandler(request_repository, request_assembler)

        page = async_to_sync(handler.handle)(
            ListMyRequestsQuery(principal=as_principal(regular_user), status=RequestStatus.APPROVED)
        )

        assert page.total == 0
        assert page.items == []

    def test_pending_approvals_include_requester(
        self,
        request_repository,
        request_assembler,
        pending_request,
        manager_user,
        foreign_admin,
        as_principal,
    ):
        handler = ListPendingApprovalsHandler(request_repository, request_assembler)

        pending = async_to_sync(handler.handle)(
            ListPendingApprovalsQuery(principal=as_principal(manager_user))
        )
        assert pending.total == 1
        assert [item.id for item in pending.items] == [pending_request.id]
        assert pending.items[0].user.email == "john@acme.com"
        assert pending.items[0].user.manager.id == manager_user.id

        elsewhere = async_to_sync(handler.handle)(
            ListPendingApprovalsQuery(principal=as_principal(foreign_admin))
        )
        assert elsewhere.total == 0
        assert elsewhere.items == []

    def test_unknown_request(self, approve_handler, admin_user, organization, as_principal):
        with pytest.raises(RequestNotFoundError):
            async_to_sync(approve_handler.handle)(
                ApproveRequestCommand(principal=as_principal(admin_user), request_id=uuid.uuid4())
            )
