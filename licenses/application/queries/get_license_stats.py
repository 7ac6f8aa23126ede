"""
GetLicenseStatsQuery.

Query for an organization's license statistics.
"""
import uuid
from dataclasses import dataclass


@dataclass
class GetLicenseStatsQuery:
    """Query for license totals, monthly cost and recent activity."""

    organization_id: uuid.UUID
