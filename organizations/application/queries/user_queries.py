"""
User administration queries.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Principal, Role


@dataclass
class ListUsersQuery:
    """Query to list the users of the caller's organization."""

    actor: Principal
    search: Optional[str] = None
    role: Optional[Role] = None


@dataclass
class GetUserQuery:
    """Query for one user of the caller's organization."""

    actor: Principal
    user_id: uuid.UUID


@dataclass
class ListUserLicensesQuery:
    """Query for a user's active licenses."""

    actor: Principal
    user_id: uuid.UUID
