"""
ReturnLicenseCommand.

Command to give back the caller's own active license.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Principal


@dataclass
class ReturnLicenseCommand:
    """Command to give back the caller's own active license."""

    principal: Principal
    license_id: uuid.UUID
