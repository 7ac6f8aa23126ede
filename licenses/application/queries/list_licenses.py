"""
License list queries.
"""
import uuid
from dataclasses import dataclass, field
from typing import Optional

from core.domain.pagination import PageRequest
from core.domain.value_objects import LicenseStatus, Principal


@dataclass
class ListMyLicensesQuery:
    """Query for the caller's licenses in any status."""

    principal: Principal
    page: PageRequest = field(default_factory=PageRequest)
    status: Optional[LicenseStatus] = None


@dataclass
class ListAllLicensesQuery:
    """Query for every license of the caller's organization."""

    principal: Principal
    page: PageRequest = field(default_factory=PageRequest)
    user_id: Optional[uuid.UUID] = None
    software_id: Optional[uuid.UUID] = None
    status: Optional[LicenseStatus] = None
