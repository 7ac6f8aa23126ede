"""
Authentication API views.

These endpoints are used by the portal to:
- Register an organization with its first admin
- Log in and refresh access tokens
- Load the current user
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import IsAuthenticatedPrincipal
from api.v1.auth.serializers import (
    CurrentUserSerializer,
    LoginRequestSerializer,
    LoginResponseSerializer,
    RefreshTokenRequestSerializer,
    RefreshTokenResponseSerializer,
    RegisterRequestSerializer,
    RegisterResponseSerializer,
)
from catalog.infrastructure.repositories.django_software_repository import (
    DjangoSoftwareRepository,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.services.license_assembler import LicenseAssembler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from organizations.application.commands.authenticate import LoginCommand, RefreshTokenCommand
from organizations.application.commands.register_organization import (
    RegisterOrganizationCommand,
)
from organizations.application.handlers.auth_handlers import (
    GetCurrentUserHandler,
    LoginHandler,
    RefreshTokenHandler,
    RegisterOrganizationHandler,
)
from organizations.application.queries.get_current_user import GetCurrentUserQuery
from organizations.infrastructure.repositories.django_organization_repository import (
    DjangoOrganizationRepository,
)
from organizations.infrastructure.repositories.django_user_repository import DjangoUserRepository

# Initialize repositories (in production, use DI container)
_organization_repo = DjangoOrganizationRepository()
_user_repo = DjangoUserRepository()
_license_repo = DjangoLicenseRepository()
_software_repo = DjangoSoftwareRepository()

tracer = get_tracer(__name__)


class RegisterView(APIView):
    """View for organization sign-up."""

    permission_classes = []

    @extend_schema(
        operation_id="register",
        summary="Register Organization",
        description=(
            "Create an organization and its first user with the ADMIN role. "
            "The organization's domain is taken from the e-mail address."
        ),
        tags=["Auth"],
        auth=[],
        request=RegisterRequestSerializer,
        responses={
            201: RegisterResponseSerializer,
            400: {"description": "Validation error or user already exists"},
            429: {"description": "Rate limit exceeded"},
        },
    )
    def post(self, request: Request) -> Response:
        """Register an organization."""
        return async_to_sync(self._handle_register)(request)

    async def _handle_register(self, request: Request) -> Response:
        """Async handler for register."""
        with tracer.start_as_current_span("register") as span:
            span.set_attribute("operation", "register")

            serializer = RegisterRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = RegisterOrganizationHandler(organization_repository=_organization_repo)
            result = await handler.handle(RegisterOrganizationCommand(**serializer.validated_data))

            span.set_attribute("organization.id", str(result.organization.id))
            span.set_attribute("user.id", str(result.user.id))
            span.set_status(Status(StatusCode.OK))

            return Response(
                RegisterResponseSerializer(result).data, status=status.HTTP_201_CREATED
            )


class LoginView(APIView):
    """View for logging in."""

    permission_classes = []

    @extend_schema(
        operation_id="login",
        summary="Login",
        description="Exchange e-mail and password for an access token and a refresh token.",
        tags=["Auth"],
        auth=[],
        request=LoginRequestSerializer,
        responses={
            200: LoginResponseSerializer,
            400: {"description": "Validation error"},
            401: {"description": "Invalid credentials"},
            429: {"description": "Rate limit exceeded"},
        },
    )
    def post(self, request: Request) -> Response:
        """Log in."""
        return async_to_sync(self._handle_login)(request)

    async def _handle_login(self, request: Request) -> Response:
        """Async handler for login."""
        with tracer.start_as_current_span("login") as span:
            span.set_attribute("operation", "login")

            serializer = LoginRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = LoginHandler(
                user_repository=_user_repo, organization_repository=_organization_repo
            )
            result = await handler.handle(LoginCommand(**serializer.validated_data))

            span.set_attribute("user.id", str(result.user.id))
            span.set_status(Status(StatusCode.OK))

            return Response(LoginResponseSerializer(result).data, status=status.HTTP_200_OK)


class RefreshTokenView(APIView):
    """View for refreshing an access token."""

    permission_classes = []

    @extend_schema(
        operation_id="refresh_token",
        summary="Refresh Token",
        description="Exchange a refresh token for a new access token.",
        tags=["Auth"],
        auth=[],
        request=RefreshTokenRequestSerializer,
        responses={
            200: RefreshTokenResponseSerializer,
            400: {"description": "Validation error"},
            401: {"description": "Invalid or expired refresh token"},
        },
    )
    def post(self, request: Request) -> Response:
        """Refresh an access token."""
        return async_to_sync(self._handle_refresh)(request)

    async def _handle_refresh(self, request: Request) -> Response:
        """Async handler for refresh."""
        with tracer.start_as_current_span("refresh_token") as span:
            span.set_attribute("operation", "refresh_token")

            serializer = RefreshTokenRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = RefreshTokenHandler(user_repository=_user_repo)
            token = await handler.handle(
                RefreshTokenCommand(refresh_token=serializer.validated_data["refresh_token"])
            )
            span.set_status(Status(StatusCode.OK))

            return Response(
                RefreshTokenResponseSerializer({"token": token}).data, status=status.HTTP_200_OK
            )


class CurrentUserView(APIView):
    """View for the authenticated user."""

    permission_classes = [IsAuthenticatedPrincipal]

    @extend_schema(
        operation_id="get_current_user",
        summary="Current User",
        description="The caller with their organization and all of their licenses.",
        tags=["Auth"],
        responses={
            200: CurrentUserSerializer,
            401: {"description": "Authentication required"},
        },
    )
    def get(self, request: Request) -> Response:
        """Get the current user."""
        return async_to_sync(self._handle_me)(request)

    async def _handle_me(self, request: Request) -> Response:
        """Async handler for current user."""
        with tracer.start_as_current_span("get_current_user") as span:
            span.set_attribute("operation", "get_current_user")
            span.set_attribute("user.id", str(request.principal.user_id))

            handler = GetCurrentUserHandler(
                user_repository=_user_repo,
                organization_repository=_organization_repo,
                license_repository=_license_repo,
                license_assembler=LicenseAssembler(_software_repo),
            )
            result = await handler.handle(GetCurrentUserQuery(principal=request.principal))

            span.set_attribute("licenses.count", len(result.licenses))
            span.set_status(Status(StatusCode.OK))

            return Response(CurrentUserSerializer(result).data, status=status.HTTP_200_OK)
