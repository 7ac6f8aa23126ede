"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping
import uuid

from catalog.domain.software import Software
from licenses.domain.license import License

CENTS = Decimal("0.01")


class LicenseCostCalculator:
    """Domain service for license cost reporting."""

    @staticmethod
    def monthly_total(
        licenses: Iterable[License], software_by_id: Mapping[uuid.UUID, Software]
    ) -> Decimal:
        """
        Monthly spend of a set of licenses.

        Only ACTIVE licenses count. Each contributes its product's
        ``cost_per_license`` converted to a monthly amount (MONTHLY x1,
        YEARLY /12, ONE_TIME 0); a missing cost counts as 0.

        Args:
            licenses: Licenses to total
            software_by_id: Products referenced by the licenses

        Returns:
            Total rounded to 2 decimal places
        """
        total = Decimal(0)
        for license in licenses:
            if not license.is_active:
                continue
            software = software_by_id.get(license.software_id)
            if software is not None:
                total += software.monthly_cost()
        return total.quantize(CENTS, rounding=ROUND_HALF_UP)
