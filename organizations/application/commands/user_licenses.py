"""
Commands for licenses managed directly by an administrator.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.value_objects import Principal


@dataclass
class AssignLicenseCommand:
    """Command to give a user a license without a request."""

    actor: Principal
    user_id: uuid.UUID
    software_id: uuid.UUID
    expires_at: Optional[datetime] = None


@dataclass
class RemoveUserLicenseCommand:
    """Command to take an active license away from a user."""

    actor: Principal
    user_id: uuid.UUID
    license_id: uuid.UUID
