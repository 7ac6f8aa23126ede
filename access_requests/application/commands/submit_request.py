"""
SubmitRequestCommand.

Command to ask for a license to a software product.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import Principal, Priority


@dataclass
class SubmitRequestCommand:
    """Command to submit an access request."""

    principal: Principal
    software_id: uuid.UUID
    justification: str
    priority: Priority = Priority.MEDIUM
