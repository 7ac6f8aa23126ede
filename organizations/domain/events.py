"""
Organization domain events.
"""

import uuid
from typing import Any, Dict

from core.domain.events import DomainEvent


class OrganizationRegistered(DomainEvent):
    """Event raised when a new organization signs up with its first admin."""

    entity_type = "organization"

    def __init__(self, organization_id: uuid.UUID, admin_user_id: uuid.UUID, name: str):
        super().__init__(
            aggregate_id=organization_id,
            organization_id=organization_id,
            actor=str(admin_user_id),
        )
        self.admin_user_id = admin_user_id
        self.name = name

    def payload(self) -> Dict[str, Any]:
        return {"name": self.name, "admin_user_id": str(self.admin_user_id)}


class UserCreated(DomainEvent):
    """Event raised when an admin creates a user."""

    entity_type = "user"

    def __init__(
        self,
        user_id: uuid.UUID,
        organization_id: uuid.UUID,
        actor: str,
        email: str,
        role: str,
    ):
        super().__init__(aggregate_id=user_id, organization_id=organization_id, actor=actor)
        self.user_id = user_id
        self.email = email
        self.role = role

    def payload(self) -> Dict[str, Any]:
        return {"email": self.email, "role": self.role}


class UserUpdated(DomainEvent):
    """Event raised when a user's profile, role, manager or password changes."""

    entity_type = "user"

    def __init__(
        self,
        user_id: uuid.UUID,
        organization_id: uuid.UUID,
        actor: str,
        changed_fields: list,
    ):
        super().__init__(aggregate_id=user_id, organization_id=organization_id, actor=actor)
        self.user_id = user_id
        self.changed_fields = changed_fields

    def payload(self) -> Dict[str, Any]:
        return {"changed_fields": sorted(self.changed_fields)}


class UserDeleted(DomainEvent):
    """Event raised when a user is deleted."""

    entity_type = "user"

    def __init__(self, user_id: uuid.UUID, organization_id: uuid.UUID, actor: str, email: str):
        super().__init__(aggregate_id=user_id, organization_id=organization_id, actor=actor)
        self.user_id = user_id
        self.email = email

    def payload(self) -> Dict[str, Any]:
        return {"email": self.email}
