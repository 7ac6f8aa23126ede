"""
Commands that take a request out of PENDING.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Principal


@dataclass
class ApproveRequestCommand:
    """Command to approve a pending request and grant its license."""

    principal: Principal
    request_id: uuid.UUID
    comments: Optional[str] = None


@dataclass
class RejectRequestCommand:
    """Command to reject a pending request. Comments are mandatory."""

    principal: Principal
    request_id: uuid.UUID
    comments: str


@dataclass
class CancelRequestCommand:
    """Command for a requester to withdraw their own pending request."""

    principal: Principal
    request_id: uuid.UUID
