"""
Access request queries.
"""
from dataclasses import dataclass, field
from typing import Optional

from core.domain.pagination import PageRequest
from core.domain.value_objects import Principal, RequestStatus


@dataclass
class ListMyRequestsQuery:
    """Query for the caller's own requests."""

    principal: Principal
    page: PageRequest = field(default_factory=PageRequest)
    status: Optional[RequestStatus] = None


@dataclass
class ListPendingApprovalsQuery:
    """Query for the requests awaiting a decision in the caller's organization."""

    principal: Principal
    page: PageRequest = field(default_factory=PageRequest)
