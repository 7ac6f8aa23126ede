"""
Catalog domain events.
"""

import uuid
from typing import Any, Dict

from core.domain.events import DomainEvent


class SoftwareCreated(DomainEvent):
    """Event raised when a software product is added to the catalog."""

    entity_type = "software"

    def __init__(self, software_id: uuid.UUID, organization_id: uuid.UUID, actor: str, name: str):
        super().__init__(aggregate_id=software_id, organization_id=organization_id, actor=actor)
        self.software_id = software_id
        self.name = name

    def payload(self) -> Dict[str, Any]:
        return {"name": self.name}


class SoftwareUpdated(DomainEvent):
    """Event raised when catalog fields of a product change."""

    entity_type = "software"

    def __init__(
        self,
        software_id: uuid.UUID,
        organization_id: uuid.UUID,
        actor: str,
        changed_fields: list,
    ):
        super().__init__(aggregate_id=software_id, organization_id=organization_id, actor=actor)
        self.software_id = software_id
        self.changed_fields = changed_fields

    def payload(self) -> Dict[str, Any]:
        return {"changed_fields": sorted(self.changed_fields)}


class SoftwareDeleted(DomainEvent):
    """Event raised when a product is removed from the catalog."""

    entity_type = "software"

    def __init__(self, software_id: uuid.UUID, organization_id: uuid.UUID, actor: str, name: str):
        super().__init__(aggregate_id=software_id, organization_id=organization_id, actor=actor)
        self.software_id = software_id
        self.name = name

    def payload(self) -> Dict[str, Any]:
        return {"name": self.name}
