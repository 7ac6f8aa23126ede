"""
UpdateSoftwareCommand.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict

from core.domain.value_objects import Principal


@dataclass
class UpdateSoftwareCommand:
    """Command to change catalog fields of a product."""

    actor: Principal
    software_id: uuid.UUID
    changes: Dict[str, Any] = field(default_factory=dict)
