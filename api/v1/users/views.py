"""
User administration API views.

These endpoints are used by admins and managers to:
- List, create, update and delete users of their organization
- Assign and remove licenses on a user's behalf
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import CanApprove, IsAdmin
from api.v1.serializers import LicenseSerializer, MessageSerializer, UserSerializer
from api.v1.users.serializers import (
    AssignLicenseRequestSerializer,
    CreateUserRequestSerializer,
    UpdateUserRequestSerializer,
    UserDetailSerializer,
    UserListQuerySerializer,
)
from catalog.infrastructure.repositories.django_software_repository import (
    DjangoSoftwareRepository,
)
from core.domain.value_objects import Role
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.services.license_assembler import LicenseAssembler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from organizations.application.commands.manage_users import (
    CreateUserCommand,
    DeleteUserCommand,
    UpdateUserCommand,
)
from organizations.application.commands.user_licenses import (
    AssignLicenseCommand,
    RemoveUserLicenseCommand,
)
from organizations.application.handlers.user_handlers import (
    CreateUserHandler,
    DeleteUserHandler,
    GetUserHandler,
    ListUsersHandler,
    UpdateUserHandler,
    UserDetailAssembler,
)
from organizations.application.handlers.user_license_handlers import (
    AssignLicenseHandler,
    ListUserLicensesHandler,
    RemoveUserLicenseHandler,
)
from organizations.application.queries.user_queries import (
    GetUserQuery,
    ListUserLicensesQuery,
    ListUsersQuery,
)
from organizations.infrastructure.repositories.django_user_repository import DjangoUserRepository

# Initialize repositories (in production, use DI container)
_user_repo = DjangoUserRepository()
_license_repo = DjangoLicenseRepository()
_software_repo = DjangoSoftwareRepository()

tracer = get_tracer(__name__)


def _user_detail_assembler() -> UserDetailAssembler:
    return UserDetailAssembler(
        user_repository=_user_repo,
        license_repository=_license_repo,
        license_assembler=LicenseAssembler(_software_repo),
    )


class UserListView(APIView):
    """View for listing and creating users."""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAdmin()]
        return [CanApprove()]

    @extend_schema(
        operation_id="list_users",
        summary="List Users",
        description=(
            "List the organization's users ordered by first name, with their manager, "
            "active licenses and counts."
        ),
        tags=["Users"],
        parameters=[
            OpenApiParameter(
                name="search",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Case-insensitive match on first name, last name or e-mail",
            ),
            OpenApiParameter(
                name="role",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=[role.value for role in Role],
            ),
        ],
        responses={
            200: UserDetailSerializer(many=True),
            403: {"description": "Insufficient permissions"},
        },
    )
    def get(self, request: Request) -> Response:
        """List users."""
        return async_to_sync(self._handle_list_users)(request)

    async def _handle_list_users(self, request: Request) -> Response:
        """Async handler for list users."""
        with tracer.start_as_current_span("list_users") as span:
            span.set_attribute("operation", "list_users")

            params = UserListQuerySerializer(data=request.query_params)
            params.is_valid(raise_exception=True)
            role = params.validated_data.get("role")

            handler = ListUsersHandler(
                user_repository=_user_repo, assembler=_user_detail_assembler()
            )
            result = await handler.handle(
                ListUsersQuery(
                    actor=request.principal,
                    search=params.validated_data.get("search") or None,
                    role=Role(role) if role else None,
                )
            )

            span.set_attribute("users.count", len(result))
            span.set_status(Status(StatusCode.OK))

            return Response(UserDetailSerializer(result, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="create_user",
        summary="Create User",
        description="Create a user in the caller's organization. Admin only.",
        tags=["Users"],
        request=CreateUserRequestSerializer,
        responses={
            201: UserSerializer,
            400: {"description": "Validation error, e-mail in use or invalid manager"},
            403: {"description": "Insufficient permissions"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create a user."""
        return async_to_sync(self._handle_create_user)(request)

    async def _handle_create_user(self, request: Request) -> Response:
        """Async handler for create user."""
        with tracer.start_as_current_span("create_user") as span:
            span.set_attribute("operation", "create_user")

            serializer = CreateUserRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = dict(serializer.validated_data)
            data["role"] = Role(data["role"])

            handler = CreateUserHandler(user_repository=_user_repo)
            result = await handler.handle(CreateUserCommand(actor=request.principal, **data))

            span.set_attribute("user.id", str(result.id))
            span.set_status(Status(StatusCode.OK))

            return Response(UserSerializer(result).data, status=status.HTTP_201_CREATED)


class UserDetailView(APIView):
    """View for reading, updating and deleting one user."""

    permission_classes = [CanApprove]

    @extend_schema(
        operation_id="get_user",
        summary="Get User",
        tags=["Users"],
        responses={
            200: UserDetailSerializer,
            403: {"description": "Insufficient permissions"},
            404: {"description": "User not found"},
        },
    )
    def get(self, request: Request, user_id: uuid.UUID) -> Response:
        """Get a user."""
        return async_to_sync(self._handle_get_user)(request, user_id)

    async def _handle_get_user(self, request: Request, user_id: uuid.UUID) -> Response:
        """Async handler for get user."""
        with tracer.start_as_current_span("get_user") as span:
            span.set_attribute("operation", "get_user")
            span.set_attribute("user.id", str(user_id))

            handler = GetUserHandler(user_repository=_user_repo, assembler=_user_detail_assembler())
            result = await handler.handle(GetUserQuery(actor=request.principal, user_id=user_id))

            span.set_status(Status(StatusCode.OK))
            return Response(UserDetailSerializer(result).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="update_user",
        summary="Update User",
        description=(
            "Partially update a user. Setting manager_id to null removes the manager. "
            "Only admins may grant the ADMIN role."
        ),
        tags=["Users"],
        request=UpdateUserRequestSerializer,
        responses={
            200: UserSerializer,
            400: {"description": "Validation error, e-mail in use or invalid manager"},
            403: {"description": "Insufficient permissions"},
            404: {"description": "User not found"},
        },
    )
    def put(self, request: Request, user_id: uuid.UUID) -> Response:
        """Update a user."""
        return async_to_sync(self._handle_update_user)(request, user_id)

    async def _handle_update_user(self, request: Request, user_id: uuid.UUID) -> Response:
        """Async handler for update user."""
        with tracer.start_as_current_span("update_user") as span:
            span.set_attribute("operation", "update_user")
            span.set_attribute("user.id", str(user_id))

            serializer = UpdateUserRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            changes = dict(serializer.validated_data)
            if "role" in changes:
                changes["role"] = Role(changes["role"])

            handler = UpdateUserHandler(user_repository=_user_repo)
            result = await handler.handle(
                UpdateUserCommand(actor=request.principal, user_id=user_id, changes=changes)
            )

            span.set_attribute("changed_fields", ",".join(sorted(changes)))
            span.set_status(Status(StatusCode.OK))

            return Response(UserSerializer(result).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="delete_user",
        summary="Delete User",
        description=(
            "Delete a user. Refused while the user holds active licenses or manages "
            "other users, and for the caller's own account."
        ),
        tags=["Users"],
        responses={
            200: MessageSerializer,
            400: {"description": "User cannot be deleted"},
            403: {"description": "Insufficient permissions"},
            404: {"description": "User not found"},
        },
    )
    def delete(self, request: Request, user_id: uuid.UUID) -> Response:
        """Delete a user."""
        return async_to_sync(self._handle_delete_user)(request, user_id)

    async def _handle_delete_user(self, request: Request, user_id: uuid.UUID) -> Response:
        """Async handler for delete user."""
        with tracer.start_as_current_span("delete_user") as span:
            span.set_attribute("operation", "delete_user")
            span.set_attribute("user.id", str(user_id))

            handler = DeleteUserHandler(user_repository=_user_repo, license_repository=_license_repo)
            await handler.handle(DeleteUserCommand(actor=request.principal, user_id=user_id))

            span.set_status(Status(StatusCode.OK))
            return Response({"message": "User deleted successfully"}, status=status.HTTP_200_OK)


class UserLicenseListView(APIView):
    """View for a user's active licenses."""

    permission_classes = [CanApprove]

    @extend_schema(
        operation_id="list_user_licenses",
        summary="List User Licenses",
        description="Active licenses of a user, newest first.",
        tags=["Users"],
        responses={
            200: LicenseSerializer(many=True),
            403: {"description": "Insufficient permissions"},
            404: {"description": "User not found"},
        },
    )
    def get(self, request: Request, user_id: uuid.UUID) -> Response:
        """List a user's licenses."""
        return async_to_sync(self._handle_list_user_licenses)(request, user_id)

    async def _handle_list_user_licenses(self, request: Request, user_id: uuid.UUID) -> Response:
        """Async handler for list user licenses."""
        with tracer.start_as_current_span("list_user_licenses") as span:
            span.set_attribute("operation", "list_user_licenses")
            span.set_attribute("user.id", str(user_id))

            handler = ListUserLicensesHandler(
                user_repository=_user_repo,
                license_repository=_license_repo,
                license_assembler=LicenseAssembler(_software_repo),
            )
            result = await handler.handle(
                ListUserLicensesQuery(actor=request.principal, user_id=user_id)
            )

            span.set_attribute("licenses.count", len(result))
            span.set_status(Status(StatusCode.OK))

            return Response(LicenseSerializer(result, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="assign_license",
        summary="Assign License",
        description="Grant a user an ACTIVE license without a request.",
        tags=["Users"],
        request=AssignLicenseRequestSerializer,
        responses={
            201: LicenseSerializer,
            400: {"description": "Validation error or license already active"},
            403: {"description": "Insufficient permissions"},
            404: {"description": "User or software not found"},
        },
    )
    def post(self, request: Request, user_id: uuid.UUID) -> Response:
        """Assign a license."""
        return async_to_sync(self._handle_assign_license)(request, user_id)

    async def _handle_assign_license(self, request: Request, user_id: uuid.UUID) -> Response:
        """Async handler for assign license."""
        with tracer.start_as_current_span("assign_license") as span:
            span.set_attribute("operation", "assign_license")
            span.set_attribute("user.id", str(user_id))

            serializer = AssignLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            span.set_attribute("software.id", str(serializer.validated_data["software_id"]))

            handler = AssignLicenseHandler(
                user_repository=_user_repo,
                software_repository=_software_repo,
                license_repository=_license_repo,
                license_assembler=LicenseAssembler(_software_repo),
            )
            result = await handler.handle(
                AssignLicenseCommand(
                    actor=request.principal,
                    user_id=user_id,
                    software_id=serializer.validated_data["software_id"],
                    expires_at=serializer.validated_data.get("expires_at"),
                )
            )

            span.set_attribute("license.id", str(result.id))
            span.set_status(Status(StatusCode.OK))

            return Response(LicenseSerializer(result).data, status=status.HTTP_201_CREATED)


class UserLicenseDetailView(APIView):
    """View for removing a license from a user."""

    permission_classes = [CanApprove]

    @extend_schema(
        operation_id="remove_user_license",
        summary="Remove User License",
        description="Revoke one of the user's active licenses.",
        tags=["Users"],
        responses={
            200: LicenseSerializer,
            403: {"description": "Insufficient permissions"},
            404: {"description": "License not found"},
        },
    )
    def delete(self, request: Request, user_id: uuid.UUID, license_id: uuid.UUID) -> Response:
        """Remove a license."""
        return async_to_sync(self._handle_remove_license)(request, user_id, license_id)

    async def _handle_remove_license(
        self, request: Request, user_id: uuid.UUID, license_id: uuid.UUID
    ) -> Response:
        """Async handler for remove license."""
        with tracer.start_as_current_span("remove_user_license") as span:
            span.set_attribute("operation", "remove_user_license")
            span.set_attribute("user.id", str(user_id))
            span.set_attribute("license.id", str(license_id))

            handler = RemoveUserLicenseHandler(
                license_repository=_license_repo,
                license_assembler=LicenseAssembler(_software_repo),
            )
            result = await handler.handle(
                RemoveUserLicenseCommand(
                    actor=request.principal, user_id=user_id, license_id=license_id
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(result).data, status=status.HTTP_200_OK)
