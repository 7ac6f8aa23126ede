"""
Organization domain services.

Rules about user administration that involve more than one user.
"""
from typing import Optional

from core.domain.exceptions import (
    CannotDeleteSelfError,
    InvalidManagerError,
    PermissionDeniedError,
    UserHasActiveLicensesError,
    UserManagesOthersError,
)
from core.domain.value_objects import Principal, Role
from organizations.domain.user import User


class UserAdministrationPolicy:
    """Domain service deciding whether a user change is allowed."""

    @staticmethod
    def check_manager(user_id, manager: Optional[User], organization_id) -> None:
        """
        Validate a manager assignment.

        Args:
            user_id: The user being managed (None while creating)
            manager: The proposed manager, or None if it does not exist
            organization_id: Organization the user belongs to

        Raises:
            InvalidManagerError: If the manager is missing, in another
                organization, not an ADMIN or MANAGER, or the user itself
        """
        if manager is None or manager.organization_id != organization_id:
            raise InvalidManagerError()
        if not manager.role.can_approve:
            raise InvalidManagerError()
        if user_id is not None and manager.id == user_id:
            raise InvalidManagerError("User cannot be their own manager")

    @staticmethod
    def check_role_grant(actor: Principal, role: Role) -> None:
        """Only an ADMIN may grant the ADMIN role."""
        if role == Role.ADMIN and not actor.is_admin:
            raise PermissionDeniedError("Only admins can grant the ADMIN role")

    @staticmethod
    def check_can_modify(actor: Principal, user: User) -> None:
        """Only an ADMIN may change or delete an ADMIN account."""
        if user.role == Role.ADMIN and not actor.is_admin:
            raise PermissionDeniedError("Only admins can modify an admin account")

    @staticmethod
    def check_can_delete(
        actor: Principal, user: User, active_licenses: int, managed_users: int
    ) -> None:
        """
        Validate a user deletion.

        Raises:
            CannotDeleteSelfError: If the actor deletes their own account
            PermissionDeniedError: If a non-admin deletes an ADMIN
            UserHasActiveLicensesError: If the user still holds active licenses
            UserManagesOthersError: If other users report to the user
        """
        if user.id == actor.user_id:
            raise CannotDeleteSelfError()
        UserAdministrationPolicy.check_can_modify(actor, user)
        if active_licenses > 0:
            raise UserHasActiveLicensesError()
        if managed_users > 0:
            raise UserManagesOthersError()
