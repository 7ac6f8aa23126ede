"""
GetCurrentUserQuery.
"""
from dataclasses import dataclass

from core.domain.value_objects import Principal


@dataclass
class GetCurrentUserQuery:
    """Query for the authenticated caller's account."""

    principal: Principal
