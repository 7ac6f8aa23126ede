"""
Domain events base classes and infrastructure.

Domain events represent something that happened in the domain.
They are used for decoupling modules and enabling event-driven architecture.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class DomainEvent:
    """
    Base class for all domain events.

    Every event is scoped to the organization it happened in and records
    the actor (user id or "system") that caused it.
    """

    entity_type = "event"

    def __init__(
        self,
        aggregate_id: uuid.UUID,
        organization_id: uuid.UUID,
        actor: str,
        occurred_at: Optional[datetime] = None,
    ):
        self.event_id = uuid.uuid4()
        self.occurred_at = occurred_at or datetime.now(timezone.utc)
        self.aggregate_id = str(aggregate_id)
        self.organization_id = organization_id
        self.actor = actor

    @property
    def event_type(self) -> str:
        """Event type name (the class name)."""
        return self.__class__.__name__

    def payload(self) -> Dict[str, Any]:
        """Event-specific data, overridden by subclasses."""
        return {}


class EventHandler(ABC):
    """
    Base class for event handlers.

    Event handlers process domain events asynchronously.
    """

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """


class EventBus(ABC):
    """
    Abstract event bus for publishing and subscribing to domain events.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
