"""
CreateSoftwareCommand.
"""
from dataclasses import dataclass, field
from typing import Any, Dict

from core.domain.value_objects import Principal


@dataclass
class CreateSoftwareCommand:
    """
    Command to add a product to the caller's organization.

    ``fields`` holds ``name`` and ``category`` plus any optional catalog
    fields sent by the caller.
    """

    actor: Principal
    fields: Dict[str, Any] = field(default_factory=dict)
