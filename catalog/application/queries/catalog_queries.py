"""
Catalog queries.
"""
import uuid
from dataclasses import dataclass, field
from typing import Optional

from core.domain.pagination import PageRequest
from core.domain.value_objects import Principal


@dataclass
class ListSoftwareQuery:
    """Query for a page of the caller's catalog."""

    principal: Principal
    page: PageRequest = field(default_factory=PageRequest)
    search: Optional[str] = None
    category: Optional[str] = None


@dataclass
class GetSoftwareQuery:
    """Query for one product as seen by the caller."""

    principal: Principal
    software_id: uuid.UUID


@dataclass
class ListCategoriesQuery:
    """Query for the distinct categories of an organization."""

    organization_id: uuid.UUID
