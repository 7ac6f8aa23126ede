"""
SuspendLicenseCommand.

Command to suspend an active license.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Principal


@dataclass
class SuspendLicenseCommand:
    """Command to suspend an active license."""

    principal: Principal
    license_id: uuid.UUID
