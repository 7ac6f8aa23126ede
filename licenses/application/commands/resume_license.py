"""
ResumeLicenseCommand.

Command to resume a suspended license.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Principal


@dataclass
class ResumeLicenseCommand:
    """Command to resume a suspended license."""

    principal: Principal
    license_id: uuid.UUID
