"""
User administration handlers.

Handlers for listing, reading, creating, updating and deleting users of
the caller's organization.
"""
import logging
from typing import Dict, List

from core.domain.exceptions import EmailInUseError, UserNotFoundError, ValidationError
from core.domain.value_objects import Email
from core.infrastructure.events import event_bus
from licenses.application.services.license_assembler import LicenseAssembler
from licenses.ports.license_repository import LicenseRepository
from organizations.application.commands.manage_users import (
    CreateUserCommand,
    DeleteUserCommand,
    UpdateUserCommand,
)
from organizations.application.dto.user_detail_dto import UserDetailDTO
from organizations.application.dto.user_dto import UserDTO, UserSummaryDTO
from organizations.application.queries.user_queries import GetUserQuery, ListUsersQuery
from organizations.application.services.password_hasher import PasswordHasher
from organizations.domain.events import UserCreated, UserDeleted, UserUpdated
from organizations.domain.services import UserAdministrationPolicy
from organizations.domain.user import User, validate_password
from organizations.ports.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserDetailAssembler:
    """Builds UserDetailDTOs with managers, active licenses and counts."""

    def __init__(
        self,
        user_repository: UserRepository,
        license_repository: LicenseRepository,
        license_assembler: LicenseAssembler,
    ):
        self.user_repository = user_repository
        self.license_repository = license_repository
        self.license_assembler = license_assembler

    async def assemble(self, users: List[User]) -> List[UserDetailDTO]:
        user_ids = [user.id for user in users]
        managers = await self.user_repository.find_by_ids(
            {user.manager_id for user in users if user.manager_id}
        )
        active = await self.license_repository.list_active_for_users(user_ids)
        managed = await self.user_repository.count_managed(user_ids)

        details = []
        for user in users:
            manager = managers.get(user.manager_id) if user.manager_id else None
            licenses = active.get(user.id, [])
            details.append(
                UserDetailDTO(
                    **vars(UserDTO.from_entity(user)),
                    manager=UserSummaryDTO.from_entity(manager) if manager else None,
                    licenses=await self.license_assembler.assemble(licenses),
                    counts={
                        "active_licenses": len(licenses),
                        "managed_users": managed.get(user.id, 0),
                    },
                )
            )
        return details


class ListUsersHandler:
    """Handler for ListUsersQuery."""

    def __init__(self, user_repository: UserRepository, assembler: UserDetailAssembler):
        self.user_repository = user_repository
        self.assembler = assembler

    async def handle(self, query: ListUsersQuery) -> List[UserDetailDTO]:
        """List users of the caller's organization ordered by first name."""
        users = await self.user_repository.list(
            query.actor.organization_id,
            search=(query.search or "").strip() or None,
            role=query.role,
        )
        return await self.assembler.assemble(users)


class GetUserHandler:
    """Handler for GetUserQuery."""

    def __init__(self, user_repository: UserRepository, assembler: UserDetailAssembler):
        self.user_repository = user_repository
        self.assembler = assembler

    async def handle(self, query: GetUserQuery) -> UserDetailDTO:
        """
        Load one user of the caller's organization.

        Raises:
            UserNotFoundError: If the user is not in the organization
        """
        user = await self.user_repository.find_in_organization(
            query.actor.organization_id, query.user_id
        )
        if user is None:
            raise UserNotFoundError()
        return (await self.assembler.assemble([user]))[0]


class CreateUserHandler:
    """Handler for CreateUserCommand."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def handle(self, command: CreateUserCommand) -> UserDTO:
        """
        Create a user in the caller's organization.

        Raises:
            ValidationError: If the input is invalid
            EmailInUseError: If the e-mail is taken
            InvalidManagerError: If the manager is not allowed
            PermissionDeniedError: If a non-admin grants the ADMIN role or edits
                an ADMIN
        """
        actor = command.actor
        UserAdministrationPolicy.check_role_grant(actor, command.role)

        try:
            validate_password(command.password)
            email = Email.normalize(command.email)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if await self.user_repository.email_exists(str(email)):
            raise EmailInUseError()

        if command.manager_id is not None:
            manager = await self.user_repository.find_by_id(command.manager_id)
            UserAdministrationPolicy.check_manager(None, manager, actor.organization_id)

        try:
            user = User.create(
                organization_id=actor.organization_id,
                email=str(email),
                password_hash=PasswordHasher.hash(command.password),
                first_name=command.first_name or "",
                last_name=command.last_name or "",
                role=command.role,
                manager_id=command.manager_id,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        user = await self.user_repository.save(user)
        logger.info(
            "User created",
            extra={"user_id": str(user.id), "organization_id": str(actor.organization_id)},
        )

        await event_bus.publish(
            UserCreated(
                user_id=user.id,
                organization_id=user.organization_id,
                actor=str(actor.user_id),
                email=str(user.email),
                role=user.role.value,
            )
        )
        return UserDTO.from_entity(user)


class UpdateUserHandler:
    """Handler for UpdateUserCommand."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def handle(self, command: UpdateUserCommand) -> UserDTO:
        """
        Apply a partial update to a user of the caller's organization.

        Raises:
            UserNotFoundError: If the user is not in the organization
            ValidationError: If a field is invalid
            EmailInUseError: If the new e-mail belongs to another user
            InvalidManagerError: If the new manager is not allowed
            PermissionDeniedError: If a non-admin grants the ADMIN role
        """
        actor = command.actor
        changes: Dict = command.changes
        user = await self.user_repository.find_in_organization(
            actor.organization_id, command.user_id
        )
        if user is None:
            raise UserNotFoundError()
        UserAdministrationPolicy.check_can_modify(actor, user)

        try:
            if "email" in changes:
                email = Email.normalize(changes["email"])
                if email != user.email and await self.user_repository.email_exists(
                    str(email), exclude_user_id=user.id
                ):
                    raise EmailInUseError()

            if any(name in changes for name in ("first_name", "last_name", "email")):
                user = user.update_profile(
                    first_name=changes.get("first_name"),
                    last_name=changes.get("last_name"),
                    email=changes.get("email"),
                )

            if "password" in changes:
                validate_password(changes["password"])
                user = user.change_password_hash(PasswordHasher.hash(changes["password"]))
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if "role" in changes and changes["role"] != user.role:
            UserAdministrationPolicy.check_role_grant(actor, changes["role"])
            user = user.change_role(changes["role"])

        if "manager_id" in changes:
            manager_id = changes["manager_id"]
            if manager_id is not None:
                manager = await self.user_repository.find_by_id(manager_id)
                UserAdministrationPolicy.check_manager(user.id, manager, actor.organization_id)
            user = user.assign_manager(manager_id)

        user = await self.user_repository.save(user)
        logger.info("User updated", extra={"user_id": str(user.id)})

        await event_bus.publish(
            UserUpdated(
                user_id=user.id,
                organization_id=user.organization_id,
                actor=str(actor.user_id),
                changed_fields=list(changes),
            )
        )
        return UserDTO.from_entity(user)


class DeleteUserHandler:
    """Handler for DeleteUserCommand."""

    def __init__(self, user_repository: UserRepository, license_repository: LicenseRepository):
        self.user_repository = user_repository
        self.license_repository = license_repository

    async def handle(self, command: DeleteUserCommand) -> None:
        """
        Delete a user of the caller's organization.

        Raises:
            UserNotFoundError: If the user is not in the organization
            CannotDeleteSelfError: If the caller deletes themself
            UserHasActiveLicensesError: If the user holds active licenses
            UserManagesOthersError: If other users report to the user
        """
        actor = command.actor
        user = await self.user_repository.find_in_organization(
            actor.organization_id, command.user_id
        )
        if user is None:
            raise UserNotFoundError()

        active = await self.license_repository.count_active_by_user([user.id])
        managed = await self.user_repository.count_managed([user.id])
        UserAdministrationPolicy.check_can_delete(
            actor, user, active.get(user.id, 0), managed.get(user.id, 0)
        )

        await self.user_repository.delete(user.id)
        logger.info("User deleted", extra={"user_id": str(user.id)})

        await event_bus.publish(
            UserDeleted(
                user_id=user.id,
                organization_id=user.organization_id,
                actor=str(actor.user_id),
                email=str(user.email),
            )
        )
