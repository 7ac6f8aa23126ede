"""
Software domain entity.

A software product an organization offers to its users.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from core.domain.value_objects import BillingCycle

EDITABLE_FIELDS = (
    "name",
    "description",
    "category",
    "vendor",
    "cost_per_license",
    "billing_cycle",
    "logo_url",
    "website_url",
    "requires_approval",
    "auto_provision",
)


@dataclass(frozen=True)
class Software:
    """
    Software domain entity.

    ``requires_approval`` decides whether a request for the product waits
    for a manager or is granted immediately.
    """

    id: uuid.UUID
    organization_id: uuid.UUID
    name: str
    description: Optional[str]
    category: str
    vendor: Optional[str]
    cost_per_license: Optional[Decimal]
    billing_cycle: BillingCycle
    logo_url: Optional[str]
    website_url: Optional[str]
    requires_approval: bool
    auto_provision: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate software entity."""
        if not self.organization_id:
            raise ValueError("Organization ID is required")
        if not self.name or not self.name.strip():
            raise ValueError("Software name cannot be empty")
        if len(self.name) > 255:
            raise ValueError("Software name too long")
        if not self.category or not self.category.strip():
            raise ValueError("Category cannot be empty")
        if self.cost_per_license is not None and self.cost_per_license < 0:
            raise ValueError("Cost per license cannot be negative")

    @classmethod
    def create(
        cls,
        organization_id: uuid.UUID,
        name: str,
        category: str,
        description: Optional[str] = None,
        vendor: Optional[str] = None,
        cost_per_license: Optional[Decimal] = None,
        billing_cycle: BillingCycle = BillingCycle.MONTHLY,
        logo_url: Optional[str] = None,
        website_url: Optional[str] = None,
        requires_approval: bool = True,
        auto_provision: bool = False,
        software_id: Optional[uuid.UUID] = None,
    ) -> "Software":
        """
        Create a new Software entity.

        Returns:
            Software entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=software_id or uuid.uuid4(),
            organization_id=organization_id,
            name=name.strip(),
            description=description,
            category=category.strip(),
            vendor=vendor,
            cost_per_license=cost_per_license,
            billing_cycle=billing_cycle,
            logo_url=logo_url,
            website_url=website_url,
            requires_approval=requires_approval,
            auto_provision=auto_provision,
            created_at=now,
            updated_at=now,
        )

    def update(self, changes: Dict[str, Any]) -> "Software":
        """
        Return a copy with the given editable fields changed.

        Args:
            changes: Mapping of field name to new value; unknown keys are rejected

        Returns:
            Updated Software entity
        """
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if "name" in changes and changes["name"] is not None:
            changes = dict(changes, name=changes["name"].strip())
        if "category" in changes and changes["category"] is not None:
            changes = dict(changes, category=changes["category"].strip())
        return replace(self, updated_at=datetime.now(timezone.utc), **changes)

    def monthly_cost(self) -> Decimal:
        """Monthly cost of one license (0 when no cost is recorded)."""
        if self.cost_per_license is None:
            return Decimal(0)
        return self.cost_per_license * self.billing_cycle.monthly_multiplier
