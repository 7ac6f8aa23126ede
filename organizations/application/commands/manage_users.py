"""
User administration commands.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from core.domain.value_objects import Principal, Role


@dataclass
class CreateUserCommand:
    """Command to add a user to the caller's organization."""

    actor: Principal
    email: str
    password: str
    first_name: str
    last_name: str
    role: Role = Role.USER
    manager_id: Optional[uuid.UUID] = None


@dataclass
class UpdateUserCommand:
    """
    Command to change a user.

    ``changes`` holds only the fields sent by the caller, among
    ``first_name``, ``last_name``, ``email``, ``role``, ``manager_id`` and
    ``password``. A ``manager_id`` of None clears the manager.
    """

    actor: Principal
    user_id: uuid.UUID
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DeleteUserCommand:
    """Command to delete a user."""

    actor: Principal
    user_id: uuid.UUID
