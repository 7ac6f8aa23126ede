"""
License API views.

These endpoints are used by the portal to:
- List the caller's licenses and return them
- List, revoke, suspend and resume any license of the organization (admins)
- Report license statistics and monthly cost (admins)
"""

import uuid
from typing import Optional

from asgiref.sync import async_to_sync
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import IsAdmin, IsAuthenticatedPrincipal
from api.v1.licenses.serializers import (
    AllLicensesQuerySerializer,
    LicenseActionResultSerializer,
    LicenseStatsSerializer,
    MyLicensesQuerySerializer,
)
from api.v1.serializers import LicenseSerializer, paginated
from catalog.infrastructure.repositories.django_software_repository import (
    DjangoSoftwareRepository,
)
from core.domain.value_objects import LicenseStatus
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.resume_license import ResumeLicenseCommand
from licenses.application.commands.return_license import ReturnLicenseCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.commands.suspend_license import SuspendLicenseCommand
from licenses.application.handlers.license_lifecycle_handlers import (
    ResumeLicenseHandler,
    ReturnLicenseHandler,
    RevokeLicenseHandler,
    SuspendLicenseHandler,
)
from licenses.application.handlers.license_query_handlers import (
    ListAllLicensesHandler,
    ListMyLicensesHandler,
)
from licenses.application.handlers.license_stats_handler import GetLicenseStatsHandler
from licenses.application.queries.get_license_stats import GetLicenseStatsQuery
from licenses.application.queries.list_licenses import ListAllLicensesQuery, ListMyLicensesQuery
from licenses.application.services.license_assembler import LicenseAssembler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from organizations.infrastructure.repositories.django_user_repository import DjangoUserRepository

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()
_software_repo = DjangoSoftwareRepository()
_user_repo = DjangoUserRepository()

tracer = get_tracer(__name__)

STATUS_PARAMETER = OpenApiParameter(
    name="status",
    type=str,
    location=OpenApiParameter.QUERY,
    enum=[license_status.value for license_status in LicenseStatus],
)
PAGE_PARAMETERS = [
    OpenApiParameter(name="page", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY),
    OpenApiParameter(name="limit", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY),
]


def _license_assembler() -> LicenseAssembler:
    return LicenseAssembler(_software_repo, _user_repo)


def _status_filter(params) -> Optional[LicenseStatus]:
    value = params.validated_data.get("status")
    return LicenseStatus(value) if value else None


class MyLicensesView(APIView):
    """View for the caller's licenses."""

    permission_classes = [IsAuthenticatedPrincipal]

    @extend_schema(
        operation_id="list_my_licenses",
        summary="My Licenses",
        description="The caller's licenses, most recently assigned first, with software.",
        tags=["Licenses"],
        parameters=PAGE_PARAMETERS + [STATUS_PARAMETER],
        responses={
            200: LicenseSerializer(many=True),
            400: {"description": "Invalid filters"},
        },
    )
    def get(self, request: Request) -> Response:
        """List the caller's licenses."""
        return async_to_sync(self._handle_my_licenses)(request)

    async def _handle_my_licenses(self, request: Request) -> Response:
        """Async handler for my licenses."""
        with tracer.start_as_current_span("list_my_licenses") as span:
            span.set_attribute("operation", "list_my_licenses")

            params = MyLicensesQuerySerializer(data=request.query_params)
            params.is_valid(raise_exception=True)

            handler = ListMyLicensesHandler(
                license_repository=_license_repo, license_assembler=_license_assembler()
            )
            page = await handler.handle(
                ListMyLicensesQuery(
                    principal=request.principal,
                    page=params.to_page_request(),
                    status=_status_filter(params),
                )
            )

            span.set_attribute("licenses.total", page.total)
            span.set_status(Status(StatusCode.OK))

            return Response(paginated(page, LicenseSerializer), status=status.HTTP_200_OK)


class AllLicensesView(APIView):
    """View for every license of the organization."""

    permission_classes = [IsAdmin]

    @extend_schema(
        operation_id="list_all_licenses",
        summary="All Licenses",
        description="Every license of the organization with its holder and software. Admin only.",
        tags=["Licenses"],
        parameters=PAGE_PARAMETERS
        + [
            STATUS_PARAMETER,
            OpenApiParameter(name="user_id", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY),
            OpenApiParameter(
                name="software_id", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY
            ),
        ],
        responses={
            200: LicenseSerializer(many=True),
            400: {"description": "Invalid filters"},
            403: {"description": "Insufficient permissions"},
        },
    )
    def get(self, request: Request) -> Response:
        """List all licenses."""
        return async_to_sync(self._handle_all_licenses)(request)

    async def _handle_all_licenses(self, request: Request) -> Response:
        """Async handler for all licenses."""
        with tracer.start_as_current_span("list_all_licenses") as span:
            span.set_attribute("operation", "list_all_licenses")

            params = AllLicensesQuerySerializer(data=request.query_params)
            params.is_valid(raise_exception=True)

            handler = ListAllLicensesHandler(
                license_repository=_license_repo, license_assembler=_license_assembler()
            )
            page = await handler.handle(
                ListAllLicensesQuery(
                    principal=request.principal,
                    page=params.to_page_request(),
                    user_id=params.validated_data.get("user_id"),
                    software_id=params.validated_data.get("software_id"),
                    status=_status_filter(params),
                )
            )

            span.set_attribute("licenses.total", page.total)
            span.set_status(Status(StatusCode.OK))

            return Response(paginated(page, LicenseSerializer), status=status.HTTP_200_OK)


class LicenseStatsView(APIView):
    """View for organization license statistics."""

    permission_classes = [IsAdmin]

    @extend_schema(
        operation_id="get_license_stats",
        summary="License Statistics",
        description=(
            "License totals, active licenses per product, monthly cost and the ten most "
            "recently assigned licenses. Admin only."
        ),
        tags=["Licenses"],
        responses={
            200: LicenseStatsSerializer,
            403: {"description": "Insufficient permissions"},
        },
    )
    def get(self, request: Request) -> Response:
        """Get license statistics."""
        return async_to_sync(self._handle_stats)(request)

    async def _handle_stats(self, request: Request) -> Response:
        """Async handler for license statistics."""
        with tracer.start_as_current_span("get_license_stats") as span:
            span.set_attribute("operation", "get_license_stats")
            span.set_attribute("organization.id", str(request.principal.organization_id))

            handler = GetLicenseStatsHandler(
                license_repository=_license_repo,
                software_repository=_software_repo,
                user_repository=_user_repo,
            )
            result = await handler.handle(
                GetLicenseStatsQuery(organization_id=request.principal.organization_id)
            )

            span.set_attribute("licenses.active", result.active_licenses)
            span.set_status(Status(StatusCode.OK))

            return Response(LicenseStatsSerializer(result).data, status=status.HTTP_200_OK)


class _LicenseActionView(APIView):
    """Shared flow of the single-license status changes."""

    operation = ""
    handler_class = None
    command_class = None

    def put(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_action)(request, license_id)

    async def _handle_action(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span(self.operation) as span:
            span.set_attribute("operation", self.operation)
            span.set_attribute("license.id", str(license_id))

            handler = self.handler_class(
                license_repository=_license_repo, license_assembler=_license_assembler()
            )
            result = await handler.handle(
                self.command_class(principal=request.principal, license_id=license_id)
            )

            span.set_attribute("license.status", result.license.status)
            span.set_status(Status(StatusCode.OK))

            return Response(
                LicenseActionResultSerializer(result).data, status=status.HTTP_200_OK
            )


ACTION_ERRORS = {
    400: {"description": "License is not in a state that allows this change"},
    403: {"description": "Insufficient permissions"},
    404: {"description": "License not found"},
}


class RevokeLicenseView(_LicenseActionView):
    """View for revoking a license."""

    permission_classes = [IsAdmin]
    operation = "revoke_license"
    handler_class = RevokeLicenseHandler
    command_class = RevokeLicenseCommand

    @extend_schema(
        operation_id="revoke_license",
        summary="Revoke License",
        description="Revoke an ACTIVE license. Admin only.",
        tags=["Licenses"],
        request=None,
        responses={200: LicenseActionResultSerializer, **ACTION_ERRORS},
    )
    def put(self, request: Request, license_id: uuid.UUID) -> Response:
        """Revoke a license."""
        return super().put(request, license_id)


class ReturnLicenseView(_LicenseActionView):
    """View for giving back one of the caller's licenses."""

    permission_classes = [IsAuthenticatedPrincipal]
    operation = "return_license"
    handler_class = ReturnLicenseHandler
    command_class = ReturnLicenseCommand

    @extend_schema(
        operation_id="return_license",
        summary="Return License",
        description="Give back one of the caller's ACTIVE licenses.",
        tags=["Licenses"],
        request=None,
        responses={
            200: LicenseActionResultSerializer,
            404: {"description": "License not found"},
        },
    )
    def put(self, request: Request, license_id: uuid.UUID) -> Response:
        """Return a license."""
        return super().put(request, license_id)


class SuspendLicenseView(_LicenseActionView):
    """View for suspending a license."""

    permission_classes = [IsAdmin]
    operation = "suspend_license"
    handler_class = SuspendLicenseHandler
    command_class = SuspendLicenseCommand

    @extend_schema(
        operation_id="suspend_license",
        summary="Suspend License",
        description="Suspend an ACTIVE license. Admin only.",
        tags=["Licenses"],
        request=None,
        responses={200: LicenseActionResultSerializer, **ACTION_ERRORS},
    )
    def put(self, request: Request, license_id: uuid.UUID) -> Response:
        """Suspend a license."""
        return super().put(request, license_id)


class ResumeLicenseView(_LicenseActionView):
    """View for resuming a suspended license."""

    permission_classes = [IsAdmin]
    operation = "resume_license"
    handler_class = ResumeLicenseHandler
    command_class = ResumeLicenseCommand

    @extend_schema(
        operation_id="resume_license",
        summary="Resume License",
        description="Reactivate a SUSPENDED license. Admin only.",
        tags=["Licenses"],
        request=None,
        responses={200: LicenseActionResultSerializer, **ACTION_ERRORS},
    )
    def put(self, request: Request, license_id: uuid.UUID) -> Response:
        """Resume a license."""
        return super().put(request, license_id)
