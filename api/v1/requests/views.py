"""
Access request API views.

These endpoints are used by the portal to:
- Submit and cancel requests for software
- Review pending requests and approve or reject them (admins and managers)
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

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
from access_requests.infrastructure.repositories.django_access_request_repository import (
    DjangoAccessRequestRepository,
)
from api.permissions import CanApprove, IsAuthenticatedPrincipal
from api.v1.requests.serializers import (
    AccessRequestSerializer,
    ApproveRequestSerializer,
    MyRequestsQuerySerializer,
    RejectRequestSerializer,
    RequestResultSerializer,
    SubmitRequestSerializer,
)
from api.v1.serializers import PageQuerySerializer, paginated
from catalog.infrastructure.repositories.django_software_repository import (
    DjangoSoftwareRepository,
)
from core.domain.value_objects import Priority, RequestStatus
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.services.license_assembler import LicenseAssembler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from organizations.infrastructure.repositories.django_user_repository import DjangoUserRepository

# Initialize repositories (in production, use DI container)
_request_repo = DjangoAccessRequestRepository()
_software_repo = DjangoSoftwareRepository()
_license_repo = DjangoLicenseRepository()
_user_repo = DjangoUserRepository()

tracer = get_tracer(__name__)


def _request_assembler() -> RequestAssembler:
    return RequestAssembler(
        request_repository=_request_repo,
        software_repository=_software_repo,
        user_repository=_user_repo,
    )


class SubmitRequestView(APIView):
    """View for submitting a request."""

    permission_classes = [IsAuthenticatedPrincipal]

    @extend_schema(
        operation_id="submit_request",
        summary="Submit Request",
        description=(
            "Request a license for a product. Products that do not require approval "
            "are approved at once and the license is returned with the request."
        ),
        tags=["Requests"],
        request=SubmitRequestSerializer,
        responses={
            201: RequestResultSerializer,
            400: {"description": "Validation error, license already active or request pending"},
            404: {"description": "Software not found"},
        },
    )
    def post(self, request: Request) -> Response:
        """Submit a request."""
        return async_to_sync(self._handle_submit_request)(request)

    async def _handle_submit_request(self, request: Request) -> Response:
        """Async handler for submit request."""
        with tracer.start_as_current_span("submit_request") as span:
            span.set_attribute("operation", "submit_request")

            serializer = SubmitRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            span.set_attribute("software.id", str(serializer.validated_data["software_id"]))

            handler = SubmitRequestHandler(
                request_repository=_request_repo,
                software_repository=_software_repo,
                license_repository=_license_repo,
                request_assembler=_request_assembler(),
                license_assembler=LicenseAssembler(_software_repo),
            )
            result = await handler.handle(
                SubmitRequestCommand(
                    principal=request.principal,
                    software_id=serializer.validated_data["software_id"],
                    justification=serializer.validated_data["justification"],
                    priority=Priority(serializer.validated_data["priority"]),
                )
            )

            span.set_attribute("request.id", str(result.request.id))
            span.set_attribute("request.status", result.request.status)
            span.set_status(Status(StatusCode.OK))

            return Response(RequestResultSerializer(result).data, status=status.HTTP_201_CREATED)


class MyRequestsView(APIView):
    """View for the caller's own requests."""

    permission_classes = [IsAuthenticatedPrincipal]

    @extend_schema(
        operation_id="list_my_requests",
        summary="My Requests",
        description="The caller's requests, newest first, with software and approvals.",
        tags=["Requests"],
        parameters=[
            OpenApiParameter(name="page", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY),
            OpenApiParameter(name="limit", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY),
            OpenApiParameter(
                name="status",
                type=str,
                location=OpenApiParameter.QUERY,
                enum=[request_status.value for request_status in RequestStatus],
            ),
        ],
        responses={
            200: AccessRequestSerializer(many=True),
            400: {"description": "Invalid filters"},
        },
    )
    def get(self, request: Request) -> Response:
        """List the caller's requests."""
        return async_to_sync(self._handle_my_requests)(request)

    async def _handle_my_requests(self, request: Request) -> Response:
        """Async handler for my requests."""
        with tracer.start_as_current_span("list_my_requests") as span:
            span.set_attribute("operation", "list_my_requests")

            params = MyRequestsQuerySerializer(data=request.query_params)
            params.is_valid(raise_exception=True)
            request_status = params.validated_data.get("status")

            handler = ListMyRequestsHandler(
                request_repository=_request_repo, request_assembler=_request_assembler()
            )
            page = await handler.handle(
                ListMyRequestsQuery(
                    principal=request.principal,
                    page=params.to_page_request(),
                    status=RequestStatus(request_status) if request_status else None,
                )
            )

            span.set_attribute("requests.total", page.total)
            span.set_status(Status(StatusCode.OK))

            return Response(paginated(page, AccessRequestSerializer), status=status.HTTP_200_OK)


class PendingApprovalsView(APIView):
    """View for the organization's pending requests."""

    permission_classes = [CanApprove]

    @extend_schema(
        operation_id="list_pending_approvals",
        summary="Pending Approvals",
        description=(
            "PENDING requests of the organization, most urgent first and then oldest "
            "first, with the requester and their manager."
        ),
        tags=["Requests"],
        parameters=[
            OpenApiParameter(name="page", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY),
            OpenApiParameter(name="limit", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY),
        ],
        responses={
            200: AccessRequestSerializer(many=True),
            400: {"description": "Invalid page parameters"},
            403: {"description": "Insufficient permissions"},
        },
    )
    def get(self, request: Request) -> Response:
        """List pending requests."""
        return async_to_sync(self._handle_pending_approvals)(request)

    async def _handle_pending_approvals(self, request: Request) -> Response:
        """Async handler for pending approvals."""
        with tracer.start_as_current_span("list_pending_approvals") as span:
            span.set_attribute("operation", "list_pending_approvals")

            params = PageQuerySerializer(data=request.query_params)
            params.is_valid(raise_exception=True)

            handler = ListPendingApprovalsHandler(
                request_repository=_request_repo, request_assembler=_request_assembler()
            )
            page = await handler.handle(
                ListPendingApprovalsQuery(
                    principal=request.principal, page=params.to_page_request()
                )
            )

            span.set_attribute("requests.total", page.total)
            span.set_status(Status(StatusCode.OK))

            return Response(paginated(page, AccessRequestSerializer), status=status.HTTP_200_OK)


class ApproveRequestView(APIView):
    """View for approving a request."""

    permission_classes = [CanApprove]

    @extend_schema(
        operation_id="approve_request",
        summary="Approve Request",
        description="Approve a PENDING request and grant the requester an ACTIVE license.",
        tags=["Requests"],
        request=ApproveRequestSerializer,
        responses={
            200: RequestResultSerializer,
            403: {"description": "Insufficient permissions"},
            404: {"description": "Request not found or already processed"},
        },
    )
    def put(self, request: Request, request_id: uuid.UUID) -> Response:
        """Approve a request."""
        return async_to_sync(self._handle_approve)(request, request_id)

    async def _handle_approve(self, request: Request, request_id: uuid.UUID) -> Response:
        """Async handler for approve request."""
        with tracer.start_as_current_span("approve_request") as span:
            span.set_attribute("operation", "approve_request")
            span.set_attribute("request.id", str(request_id))

            serializer = ApproveRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = ApproveRequestHandler(
                request_repository=_request_repo,
                request_assembler=_request_assembler(),
                license_assembler=LicenseAssembler(_software_repo),
            )
            result = await handler.handle(
                ApproveRequestCommand(
                    principal=request.principal,
                    request_id=request_id,
                    comments=serializer.validated_data.get("comments") or None,
                )
            )

            if result.license is not None:
                span.set_attribute("license.id", str(result.license.id))
            span.set_status(Status(StatusCode.OK))

            return Response(RequestResultSerializer(result).data, status=status.HTTP_200_OK)


class RejectRequestView(APIView):
    """View for rejecting a request."""

    permission_classes = [CanApprove]

    @extend_schema(
        operation_id="reject_request",
        summary="Reject Request",
        description="Reject a PENDING request. Comments are required.",
        tags=["Requests"],
        request=RejectRequestSerializer,
        responses={
            200: RequestResultSerializer,
            400: {"description": "Comments missing"},
            403: {"description": "Insufficient permissions"},
            404: {"description": "Request not found or already processed"},
        },
    )
    def put(self, request: Request, request_id: uuid.UUID) -> Response:
        """Reject a request."""
        return async_to_sync(self._handle_reject)(request, request_id)

    async def _handle_reject(self, request: Request, request_id: uuid.UUID) -> Response:
        """Async handler for reject request."""
        with tracer.start_as_current_span("reject_request") as span:
            span.set_attribute("operation", "reject_request")
            span.set_attribute("request.id", str(request_id))

            serializer = RejectRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = RejectRequestHandler(
                request_repository=_request_repo, request_assembler=_request_assembler()
            )
            result = await handler.handle(
                RejectRequestCommand(
                    principal=request.principal,
                    request_id=request_id,
                    comments=serializer.validated_data["comments"],
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(RequestResultSerializer(result).data, status=status.HTTP_200_OK)


class CancelRequestView(APIView):
    """View for cancelling the caller's own request."""

    permission_classes = [IsAuthenticatedPrincipal]

    @extend_schema(
        operation_id="cancel_request",
        summary="Cancel Request",
        description="Cancel one of the caller's PENDING requests.",
        tags=["Requests"],
        request=None,
        responses={
            200: RequestResultSerializer,
            404: {"description": "Request not found or already processed"},
        },
    )
    def put(self, request: Request, request_id: uuid.UUID) -> Response:
        """Cancel a request."""
        return async_to_sync(self._handle_cancel)(request, request_id)

    async def _handle_cancel(self, request: Request, request_id: uuid.UUID) -> Response:
        """Async handler for cancel request."""
        with tracer.start_as_current_span("cancel_request") as span:
            span.set_attribute("operation", "cancel_request")
            span.set_attribute("request.id", str(request_id))

            handler = CancelRequestHandler(
                request_repository=_request_repo, request_assembler=_request_assembler()
            )
            result = await handler.handle(
                CancelRequestCommand(principal=request.principal, request_id=request_id)
            )

            span.set_status(Status(StatusCode.OK))
            return Response(RequestResultSerializer(result).data, status=status.HTTP_200_OK)
