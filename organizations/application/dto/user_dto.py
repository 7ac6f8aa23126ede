"""
Organization and user DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from organizations.domain.organization import Organization
from organizations.domain.user import User


@dataclass
class OrganizationDTO:
    """DTO for organization information."""

    id: uuid.UUID
    name: str
    domain: Optional[str]

    @classmethod
    def from_entity(cls, organization: Organization) -> "OrganizationDTO":
        return cls(id=organization.id, name=organization.name, domain=organization.domain)


@dataclass
class UserSummaryDTO:
    """Who a user is, embedded in other resources."""

    id: uuid.UUID
    email: str
    first_name: str
    last_name: str

    @classmethod
    def from_entity(cls, user: User) -> "UserSummaryDTO":
        return cls(
            id=user.id,
            email=str(user.email),
            first_name=user.first_name,
            last_name=user.last_name,
        )


@dataclass
class UserDTO:
    """DTO for a user's own fields (never the password hash)."""

    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    role: str
    organization_id: uuid.UUID
    manager_id: Optional[uuid.UUID]
    created_at: datetime
    updated_at: datetime
    organization: Optional[OrganizationDTO] = None

    @classmethod
    def from_entity(
        cls, user: User, organization: Optional[Organization] = None
    ) -> "UserDTO":
        return cls(
            id=user.id,
            email=str(user.email),
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role.value,
            organization_id=user.organization_id,
            manager_id=user.manager_id,
            created_at=user.created_at,
            updated_at=user.updated_at,
            organization=OrganizationDTO.from_entity(organization) if organization else None,
        )


@dataclass
class AuthResultDTO:
    """DTO for register and login responses."""

    message: str
    token: str
    refresh_token: str
    user: UserDTO
    organization: Optional[OrganizationDTO] = None
