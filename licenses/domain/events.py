"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


class LicenseEvent(DomainEvent):
    """Base class for events about a single license."""

    entity_type = "license"

    def __init__(
        self,
        license_id: uuid.UUID,
        organization_id: uuid.UUID,
        user_id: uuid.UUID,
        software_id: uuid.UUID,
        actor: str,
    ):
        super().__init__(aggregate_id=license_id, organization_id=organization_id, actor=actor)
        self.license_id = license_id
        self.user_id = user_id
        self.software_id = software_id

    def payload(self) -> Dict[str, Any]:
        return {"user_id": str(self.user_id), "software_id": str(self.software_id)}


class LicenseGranted(LicenseEvent):
    """
    Event raised when a license is created.

    ``source`` is one of ``approval``, ``auto_approval`` or ``manual``.
    """

    def __init__(self, *args, source: str, request_id: Optional[uuid.UUID] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.source = source
        self.request_id = request_id

    def payload(self) -> Dict[str, Any]:
        data = super().payload()
        data["source"] = self.source
        if self.request_id:
            data["request_id"] = str(self.request_id)
        return data


class LicenseRevoked(LicenseEvent):
    """
    Event raised when an active license is revoked.

    ``reason`` is one of ``admin``, ``returned`` or ``removed``.
    """

    def __init__(self, *args, reason: str, **kwargs):
        super().__init__(*args, **kwargs)
        self.reason = reason

    def payload(self) -> Dict[str, Any]:
        return dict(super().payload(), reason=self.reason)


class LicenseSuspended(LicenseEvent):
    """Event raised when a license is suspended."""


class LicenseResumed(LicenseEvent):
    """Event raised when a suspended license is resumed."""


class LicenseExpired(LicenseEvent):
    """Event raised when the expiry job marks a license as expired."""
