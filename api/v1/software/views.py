"""
Software catalog API views.

These endpoints are used by the portal to:
- Browse the organization's software catalog
- Manage software products (admins)
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from access_requests.infrastructure.repositories.django_access_request_repository import (
    DjangoAccessRequestRepository,
)
from api.permissions import IsAdmin, IsAuthenticatedPrincipal
from api.v1.serializers import MessageSerializer, SoftwareSerializer, paginated
from api.v1.software.serializers import (
    CatalogItemSerializer,
    SoftwareListQuerySerializer,
    SoftwareUpdateSerializer,
    SoftwareWriteSerializer,
)
from catalog.application.commands.create_software import CreateSoftwareCommand
from catalog.application.commands.delete_software import DeleteSoftwareCommand
from catalog.application.commands.update_software import UpdateSoftwareCommand
from catalog.application.handlers.catalog_query_handlers import (
    CatalogDecorator,
    GetSoftwareHandler,
    ListCategoriesHandler,
    ListSoftwareHandler,
)
from catalog.application.handlers.software_handlers import (
    CreateSoftwareHandler,
    DeleteSoftwareHandler,
    UpdateSoftwareHandler,
)
from catalog.application.queries.catalog_queries import (
    GetSoftwareQuery,
    ListCategoriesQuery,
    ListSoftwareQuery,
)
from catalog.infrastructure.repositories.django_software_repository import (
    DjangoSoftwareRepository,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_software_repo = DjangoSoftwareRepository()
_license_repo = DjangoLicenseRepository()
_request_repo = DjangoAccessRequestRepository()

tracer = get_tracer(__name__)


def _catalog_decorator() -> CatalogDecorator:
    return CatalogDecorator(license_repository=_license_repo, request_repository=_request_repo)


class SoftwareListView(APIView):
    """View for browsing and creating software."""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAdmin()]
        return [IsAuthenticatedPrincipal()]

    @extend_schema(
        operation_id="list_software",
        summary="List Software",
        description=(
            "Paginated catalog ordered by name. Each item carries the caller's license "
            "for it, whether the caller has a pending request, and counts."
        ),
        tags=["Software"],
        parameters=[
            OpenApiParameter(name="page", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY),
            OpenApiParameter(name="limit", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY),
            OpenApiParameter(
                name="search",
                type=str,
                location=OpenApiParameter.QUERY,
                description="Case-insensitive match on name, description or vendor",
            ),
            OpenApiParameter(name="category", type=str, location=OpenApiParameter.QUERY),
        ],
        responses={
            200: CatalogItemSerializer(many=True),
            400: {"description": "Invalid pagination parameters"},
        },
    )
    def get(self, request: Request) -> Response:
        """List software."""
        return async_to_sync(self._handle_list_software)(request)

    async def _handle_list_software(self, request: Request) -> Response:
        """Async handler for list software."""
        with tracer.start_as_current_span("list_software") as span:
            span.set_attribute("operation", "list_software")

            params = SoftwareListQuerySerializer(data=request.query_params)
            params.is_valid(raise_exception=True)

            handler = ListSoftwareHandler(
                software_repository=_software_repo, decorator=_catalog_decorator()
            )
            page = await handler.handle(
                ListSoftwareQuery(
                    principal=request.principal,
                    page=params.to_page_request(),
                    search=params.validated_data.get("search") or None,
                    category=params.validated_data.get("category") or None,
                )
            )

            span.set_attribute("software.total", page.total)
            span.set_status(Status(StatusCode.OK))

            return Response(paginated(page, CatalogItemSerializer), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="create_software",
        summary="Create Software",
        description="Add a product to the catalog. Admin only.",
        tags=["Software"],
        request=SoftwareWriteSerializer,
        responses={
            201: SoftwareSerializer,
            400: {"description": "Validation error"},
            403: {"description": "Insufficient permissions"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create software."""
        return async_to_sync(self._handle_create_software)(request)

    async def _handle_create_software(self, request: Request) -> Response:
        """Async handler for create software."""
        with tracer.start_as_current_span("create_software") as span:
            span.set_attribute("operation", "create_software")

            serializer = SoftwareWriteSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = CreateSoftwareHandler(software_repository=_software_repo)
            result = await handler.handle(
                CreateSoftwareCommand(actor=request.principal, fields=serializer.to_fields())
            )

            span.set_attribute("software.id", str(result.id))
            span.set_status(Status(StatusCode.OK))

            return Response(SoftwareSerializer(result).data, status=status.HTTP_201_CREATED)


class SoftwareDetailView(APIView):
    """View for reading, updating and deleting one product."""

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAuthenticatedPrincipal()]
        return [IsAdmin()]

    @extend_schema(
        operation_id="get_software",
        summary="Get Software",
        tags=["Software"],
        responses={
            200: CatalogItemSerializer,
            404: {"description": "Software not found"},
        },
    )
    def get(self, request: Request, software_id: uuid.UUID) -> Response:
        """Get software."""
        return async_to_sync(self._handle_get_software)(request, software_id)

    async def _handle_get_software(self, request: Request, software_id: uuid.UUID) -> Response:
        """Async handler for get software."""
        with tracer.start_as_current_span("get_software") as span:
            span.set_attribute("operation", "get_software")
            span.set_attribute("software.id", str(software_id))

            handler = GetSoftwareHandler(
                software_repository=_software_repo, decorator=_catalog_decorator()
            )
            result = await handler.handle(
                GetSoftwareQuery(principal=request.principal, software_id=software_id)
            )

            span.set_status(Status(StatusCode.OK))
            return Response(CatalogItemSerializer(result).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="update_software",
        summary="Update Software",
        description="Partially update a product. Admin only.",
        tags=["Software"],
        request=SoftwareUpdateSerializer,
        responses={
            200: SoftwareSerializer,
            400: {"description": "Validation error"},
            403: {"description": "Insufficient permissions"},
            404: {"description": "Software not found"},
        },
    )
    def put(self, request: Request, software_id: uuid.UUID) -> Response:
        """Update software."""
        return async_to_sync(self._handle_update_software)(request, software_id)

    async def _handle_update_software(self, request: Request, software_id: uuid.UUID) -> Response:
        """Async handler for update software."""
        with tracer.start_as_current_span("update_software") as span:
            span.set_attribute("operation", "update_software")
            span.set_attribute("software.id", str(software_id))

            serializer = SoftwareUpdateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = UpdateSoftwareHandler(software_repository=_software_repo)
            result = await handler.handle(
                UpdateSoftwareCommand(
                    actor=request.principal,
                    software_id=software_id,
                    changes=serializer.to_fields(),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(SoftwareSerializer(result).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="delete_software",
        summary="Delete Software",
        description="Delete a product that no license or request references. Admin only.",
        tags=["Software"],
        responses={
            200: MessageSerializer,
            400: {"description": "Software is in use"},
            403: {"description": "Insufficient permissions"},
            404: {"description": "Software not found"},
        },
    )
    def delete(self, request: Request, software_id: uuid.UUID) -> Response:
        """Delete software."""
        return async_to_sync(self._handle_delete_software)(request, software_id)

    async def _handle_delete_software(self, request: Request, software_id: uuid.UUID) -> Response:
        """Async handler for delete software."""
        with tracer.start_as_current_span("delete_software") as span:
            span.set_attribute("operation", "delete_software")
            span.set_attribute("software.id", str(software_id))

            handler = DeleteSoftwareHandler(software_repository=_software_repo)
            await handler.handle(
                DeleteSoftwareCommand(actor=request.principal, software_id=software_id)
            )

            span.set_status(Status(StatusCode.OK))
            return Response(
                {"message": "Software deleted successfully"}, status=status.HTTP_200_OK
            )


class CategoryListView(APIView):
    """View for the organization's software categories."""

    permission_classes = [IsAuthenticatedPrincipal]

    @extend_schema(
        operation_id="list_categories",
        summary="List Categories",
        description="Distinct categories of the organization's software, sorted ascending.",
        tags=["Software"],
        responses={200: {"type": "array", "items": {"type": "string"}}},
    )
    def get(self, request: Request) -> Response:
        """List categories."""
        return async_to_sync(self._handle_list_categories)(request)

    async def _handle_list_categories(self, request: Request) -> Response:
        """Async handler for list categories."""
        with tracer.start_as_current_span("list_categories") as span:
            span.set_attribute("operation", "list_categories")

            handler = ListCategoriesHandler(software_repository=_software_repo)
            result = await handler.handle(
                ListCategoriesQuery(organization_id=request.principal.organization_id)
            )

            span.set_status(Status(StatusCode.OK))
            return Response(result, status=status.HTTP_200_OK)
