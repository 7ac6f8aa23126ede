"""
Authentication handlers.

Handlers for registration, login, token refresh and the current user.
"""
import logging

from core.domain.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    OrganizationNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from core.domain.value_objects import Email, Role
from core.infrastructure.events import event_bus
from licenses.application.services.license_assembler import LicenseAssembler
from licenses.ports.license_repository import LicenseRepository
from organizations.application.commands.authenticate import LoginCommand, RefreshTokenCommand
from organizations.application.commands.register_organization import (
    RegisterOrganizationCommand,
)
from organizations.application.dto.user_detail_dto import CurrentUserDTO
from organizations.application.dto.user_dto import AuthResultDTO, OrganizationDTO, UserDTO
from organizations.application.queries.get_current_user import GetCurrentUserQuery
from organizations.application.services.password_hasher import PasswordHasher
from organizations.application.services.token_service import TokenService
from organizations.domain.events import OrganizationRegistered
from organizations.domain.organization import Organization
from organizations.domain.user import User, validate_password
from organizations.ports.organization_repository import OrganizationRepository
from organizations.ports.user_repository import UserRepository

logger = logging.getLogger(__name__)


class RegisterOrganizationHandler:
    """Handler for RegisterOrganizationCommand."""

    def __init__(self, organization_repository: OrganizationRepository):
        """Initialize handler with repository."""
        self.organization_repository = organization_repository

    async def handle(self, command: RegisterOrganizationCommand) -> AuthResultDTO:
        """
        Handle registration.

        The organization's domain is taken from the admin's e-mail address.

        Args:
            command: RegisterOrganizationCommand

        Returns:
            AuthResultDTO with tokens, the new admin and the organization

        Raises:
            ValidationError: If the password, names or e-mail are invalid
            UserAlreadyExistsError: If the e-mail is already registered
        """
        try:
            validate_password(command.password)
            email = Email.normalize(command.email)
            organization = Organization.create(
                name=command.organization_name, domain=email.domain
            )
            admin = User.create(
                organization_id=organization.id,
                email=str(email),
                password_hash=PasswordHasher.hash(command.password),
                first_name=command.first_name or "",
                last_name=command.last_name or "",
                role=Role.ADMIN,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        organization, admin = await self.organization_repository.create_with_admin(
            organization, admin
        )
        logger.info(
            "Organization registered",
            extra={"organization_id": str(organization.id), "user_id": str(admin.id)},
        )

        await event_bus.publish(
            OrganizationRegistered(
                organization_id=organization.id,
                admin_user_id=admin.id,
                name=organization.name,
            )
        )

        return AuthResultDTO(
            message="Registration successful",
            token=TokenService.generate_access_token(admin),
            refresh_token=TokenService.generate_refresh_token(admin),
            user=UserDTO.from_entity(admin),
            organization=OrganizationDTO.from_entity(organization),
        )


class LoginHandler:
    """Handler for LoginCommand."""

    def __init__(
        self,
        user_repository: UserRepository,
        organization_repository: OrganizationRepository,
    ):
        """Initialize handler with repositories."""
        self.user_repository = user_repository
        self.organization_repository = organization_repository

    async def handle(self, command: LoginCommand) -> AuthResultDTO:
        """
        Handle login.

        Unknown e-mail and wrong password fail with the same error.

        Raises:
            InvalidCredentialsError: If the credentials do not match a user
        """
        email = (command.email or "").strip().lower()
        user = await self.user_repository.find_by_email(email)
        if user is None or not PasswordHasher.verify(command.password or "", user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentialsError()

        organization = await self.organization_repository.find_by_id(user.organization_id)
        logger.info("User logged in", extra={"user_id": str(user.id)})

        return AuthResultDTO(
            message="Login successful",
            token=TokenService.generate_access_token(user),
            refresh_token=TokenService.generate_refresh_token(user),
            user=UserDTO.from_entity(user, organization),
        )


class RefreshTokenHandler:
    """Handler for RefreshTokenCommand."""

    def __init__(self, user_repository: UserRepository):
        """Initialize handler with repository."""
        self.user_repository = user_repository

    async def handle(self, command: RefreshTokenCommand) -> str:
        """
        Issue a new access token.

        Returns:
            Encoded access token

        Raises:
            InvalidTokenError: If the refresh token is invalid, expired, or
                was issued to a user that no longer exists
        """
        user_id = TokenService.decode_refresh_token(command.refresh_token)
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise InvalidTokenError()
        return TokenService.generate_access_token(user)


class GetCurrentUserHandler:
    """Handler for GetCurrentUserQuery."""

    def __init__(
        self,
        user_repository: UserRepository,
        organization_repository: OrganizationRepository,
        license_repository: LicenseRepository,
        license_assembler: LicenseAssembler,
    ):
        """Initialize handler with repositories."""
        self.user_repository = user_repository
        self.organization_repository = organization_repository
        self.license_repository = license_repository
        self.license_assembler = license_assembler

    async def handle(self, query: GetCurrentUserQuery) -> CurrentUserDTO:
        """
        Load the caller with their organization and every license they hold or held.

        Raises:
            UserNotFoundError: If the caller's account was deleted
            OrganizationNotFoundError: If the caller's organization is gone
        """
        user = await self.user_repository.find_by_id(query.principal.user_id)
        if user is None:
            raise UserNotFoundError()
        organization = await self.organization_repository.find_by_id(user.organization_id)
        if organization is None:
            raise OrganizationNotFoundError()

        licenses, _ = await self.license_repository.list_for_user(user.id)
        return CurrentUserDTO(
            **vars(UserDTO.from_entity(user, organization)),
            licenses=await self.license_assembler.assemble(licenses),
        )
