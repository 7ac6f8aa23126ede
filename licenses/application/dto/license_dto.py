"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from catalog.application.dto.software_dto import SoftwareDTO
from licenses.domain.license import License
from organizations.application.dto.user_dto import UserSummaryDTO


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    user_id: uuid.UUID
    software_id: uuid.UUID
    status: str
    assigned_at: datetime
    expires_at: Optional[datetime]
    last_used_at: Optional[datetime]
    notes: Optional[str]
    updated_at: datetime
    software: Optional[SoftwareDTO] = None
    user: Optional[UserSummaryDTO] = None

    @classmethod
    def from_entity(
        cls,
        license: License,
        software: Optional[SoftwareDTO] = None,
        user: Optional[UserSummaryDTO] = None,
    ) -> "LicenseDTO":
        return cls(
            id=license.id,
            user_id=license.user_id,
            software_id=license.software_id,
            status=license.status.value,
            assigned_at=license.assigned_at,
            expires_at=license.expires_at,
            last_used_at=license.last_used_at,
            notes=license.notes,
            updated_at=license.updated_at,
            software=software,
            user=user,
        )


@dataclass
class LicenseActionResultDTO:
    """DTO for revoke, return, suspend and resume responses."""

    message: str
    license: LicenseDTO


@dataclass
class SoftwareLicenseCountDTO:
    """Active licenses of one product."""

    software_id: uuid.UUID
    software_name: str
    count: int


@dataclass
class RecentLicenseDTO:
    """A recently assigned license with who holds it and for what."""

    id: uuid.UUID
    status: str
    assigned_at: datetime
    user: Optional[UserSummaryDTO]
    software_name: str


@dataclass
class LicenseStatsDTO:
    """DTO for organization license statistics."""

    total_licenses: int
    active_licenses: int
    monthly_total_cost: Decimal
    licenses_by_software: List[SoftwareLicenseCountDTO] = field(default_factory=list)
    recent_activity: List[RecentLicenseDTO] = field(default_factory=list)


@dataclass
class ExpireLicensesResultDTO:
    """Outcome of one run of the expiry job."""

    found: int
    expired: int
    license_ids: List[uuid.UUID] = field(default_factory=list)
