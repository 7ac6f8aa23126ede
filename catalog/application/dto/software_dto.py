"""
Software DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from catalog.domain.software import Software


@dataclass
class SoftwareDTO:
    """DTO for software information."""

    id: uuid.UUID
    organization_id: uuid.UUID
    name: str
    description: Optional[str]
    category: str
    vendor: Optional[str]
    cost_per_license: Optional[Decimal]
    billing_cycle: str
    logo_url: Optional[str]
    website_url: Optional[str]
    requires_approval: bool
    auto_provision: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, software: Software) -> "SoftwareDTO":
        return cls(
            id=software.id,
            organization_id=software.organization_id,
            name=software.name,
            description=software.description,
            category=software.category,
            vendor=software.vendor,
            cost_per_license=software.cost_per_license,
            billing_cycle=software.billing_cycle.value,
            logo_url=software.logo_url,
            website_url=software.website_url,
            requires_approval=software.requires_approval,
            auto_provision=software.auto_provision,
            created_at=software.created_at,
            updated_at=software.updated_at,
        )


@dataclass
class CatalogItemDTO(SoftwareDTO):
    """
    Software as seen by one caller.

    ``user_license`` is a LicenseDTO (without embedded software) or None.
    """

    user_license: Optional[Any] = None
    has_pending_request: bool = False
    counts: Dict[str, int] = field(default_factory=dict)
