"""
RevokeLicenseCommand.

Command to revoke an active license.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Principal


@dataclass
class RevokeLicenseCommand:
    """Command to revoke an active license."""

    principal: Principal
    license_id: uuid.UUID
