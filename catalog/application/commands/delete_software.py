"""
DeleteSoftwareCommand.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Principal


@dataclass
class DeleteSoftwareCommand:
    """Command to remove a product from the catalog."""

    actor: Principal
    software_id: uuid.UUID
