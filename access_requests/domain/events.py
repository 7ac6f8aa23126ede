"""
Access request domain events.
"""

import uuid
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


class RequestEvent(DomainEvent):
    """Base class for events about one access request."""

    entity_type = "request"

    def __init__(
        self,
        request_id: uuid.UUID,
        organization_id: uuid.UUID,
        requester_id: uuid.UUID,
        software_id: uuid.UUID,
        actor: str,
    ):
        super().__init__(aggregate_id=request_id, organization_id=organization_id, actor=actor)
        self.request_id = request_id
        self.requester_id = requester_id
        self.software_id = software_id

    def payload(self) -> Dict[str, Any]:
        return {"requester_id": str(self.requester_id), "software_id": str(self.software_id)}


class RequestSubmitted(RequestEvent):
    """Event raised when a request is created (before any decision)."""

    def __init__(self, *args, priority: str, auto_approved: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.priority = priority
        self.auto_approved = auto_approved

    def payload(self) -> Dict[str, Any]:
        return dict(super().payload(), priority=self.priority, auto_approved=self.auto_approved)


class RequestApproved(RequestEvent):
    """Event raised when a request is approved, manually or automatically."""

    def __init__(
        self,
        *args,
        license_id: uuid.UUID,
        comments: Optional[str] = None,
        automatic: bool = False,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.license_id = license_id
        self.comments = comments
        self.automatic = automatic

    def payload(self) -> Dict[str, Any]:
        return dict(
            super().payload(),
            license_id=str(self.license_id),
            comments=self.comments,
            automatic=self.automatic,
        )


class RequestRejected(RequestEvent):
    """Event raised when a request is rejected."""

    def __init__(self, *args, comments: str, **kwargs):
        super().__init__(*args, **kwargs)
        self.comments = comments

    def payload(self) -> Dict[str, Any]:
        return dict(super().payload(), comments=self.comments)


class RequestCancelled(RequestEvent):
    """Event raised when the requester withdraws a request."""
