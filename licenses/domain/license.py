"""
License domain entity.

This is the core domain entity representing a user's right to use a
software product. It contains business logic and is independent of
infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional, Tuple

from core.domain.exceptions import InvalidLicenseStatusError, LicenseNotActiveError
from core.domain.value_objects import LicenseStatus

RETURNED_BY_USER_NOTE = "Returned by user"

# Stored status a license must still hold to be saved with each new status.
PREVIOUS_STATUSES = {
    LicenseStatus.ACTIVE: (LicenseStatus.SUSPENDED,),
    LicenseStatus.SUSPENDED: (LicenseStatus.ACTIVE,),
    LicenseStatus.REVOKED: (LicenseStatus.ACTIVE,),
    LicenseStatus.EXPIRED: (LicenseStatus.ACTIVE,),
}


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Transitions return new instances. ACTIVE and SUSPENDED licenses can
    move between each other; REVOKED and EXPIRED are final.
    """

    id: uuid.UUID
    organization_id: uuid.UUID
    user_id: uuid.UUID
    software_id: uuid.UUID
    status: LicenseStatus
    assigned_at: datetime
    expires_at: Optional[datetime]
    last_used_at: Optional[datetime]
    notes: Optional[str]
    updated_at: datetime

    def __post_init__(self):
        """Validate license entity."""
        if not self.organization_id:
            raise ValueError("Organization ID is required")
        if not self.user_id:
            raise ValueError("User ID is required")
        if not self.software_id:
            raise ValueError("Software ID is required")

    @classmethod
    def create(
        cls,
        organization_id: uuid.UUID,
        user_id: uuid.UUID,
        software_id: uuid.UUID,
        expires_at: Optional[datetime] = None,
        notes: Optional[str] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new ACTIVE License entity.

        Args:
            organization_id: Owning organization
            user_id: License holder
            software_id: Licensed product
            expires_at: Optional expiration datetime
            notes: Free-text note stored with the grant
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=license_id or uuid.uuid4(),
            organization_id=organization_id,
            user_id=user_id,
            software_id=software_id,
            status=LicenseStatus.ACTIVE,
            assigned_at=now,
            expires_at=expires_at,
            last_used_at=None,
            notes=notes,
            updated_at=now,
        )

    @property
    def is_active(self) -> bool:
        return self.status == LicenseStatus.ACTIVE

    @property
    def previous_statuses(self) -> Tuple[LicenseStatus, ...]:
        """Statuses this license can have moved out of to reach its current one."""
        return PREVIOUS_STATUSES[self.status]

    def is_past_expiry(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check if the license's expiry date has passed.

        Args:
            current_time: Current time (defaults to now, UTC)

        Returns:
            True if ``expires_at`` is set and in the past
        """
        if self.expires_at is None:
            return False
        return self.expires_at < (current_time or datetime.now(timezone.utc))

    def _with_status(self, status: LicenseStatus, notes: Optional[str] = None) -> "License":
        return replace(
            self,
            status=status,
            notes=notes if notes is not None else self.notes,
            updated_at=datetime.now(timezone.utc),
        )

    def revoke(self, notes: Optional[str] = None) -> "License":
        """
        Revoke an active license.

        Raises:
            LicenseNotActiveError: If the license is not ACTIVE
        """
        if not self.is_active:
            raise LicenseNotActiveError()
        return self._with_status(LicenseStatus.REVOKED, notes)

    def return_to_pool(self) -> "License":
        """
        Give an active license back; recorded as a revocation by the holder.

        Raises:
            LicenseNotActiveError: If the license is not ACTIVE
        """
        return self.revoke(notes=RETURNED_BY_USER_NOTE)

    def suspend(self) -> "License":
        """
        Suspend an active license.

        Raises:
            InvalidLicenseStatusError: If the license is not ACTIVE
        """
        if not self.is_active:
            raise InvalidLicenseStatusError("Only active licenses can be suspended")
        return self._with_status(LicenseStatus.SUSPENDED)

    def resume(self) -> "License":
        """
        Resume a suspended license.

        Raises:
            InvalidLicenseStatusError: If the license is not SUSPENDED
        """
        if self.status != LicenseStatus.SUSPENDED:
            raise InvalidLicenseStatusError("Only suspended licenses can be resumed")
        return self._with_status(LicenseStatus.ACTIVE)

    def mark_expired(self) -> "License":
        """
        Mark an active license as expired.

        Raises:
            InvalidLicenseStatusError: If the license is not ACTIVE
        """
        if not self.is_active:
            raise InvalidLicenseStatusError("Only active licenses can expire")
        return self._with_status(LicenseStatus.EXPIRED)
