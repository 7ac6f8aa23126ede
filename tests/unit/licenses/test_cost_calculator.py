"""
Unit tests for LicenseCostCalculator.
"""

import uuid
from decimal import Decimal

from catalog.domain.software import Software
from core.domain.value_objects import BillingCycle
from licenses.domain.license import License
from licenses.domain.services import LicenseCostCalculator

ORGANIZATION_ID = uuid.uuid4()


def _software(cost, cycle=BillingCycle.MONTHLY):
    return Software.create(
        organization_id=ORGANIZATION_ID,
        name="Product",
        category="Tools",
        cost_per_license=cost,
        billing_cycle=cycle,
    )


def _license(software):
    return License.create(
        organization_id=ORGANIZATION_ID, user_id=uuid.uuid4(), software_id=software.id
    )


class TestLicenseCostCalculator:
    """Tests for monthly cost totals."""

    def test_monthly_total(self):
        """Monthly costs add up per active license."""
        slack = _software(Decimal("8.75"))
        zoom = _software(Decimal("14.99"))
        licenses = [_license(slack), _license(slack), _license(zoom)]

        total = LicenseCostCalculator.monthly_total(licenses, {s.id: s for s in (slack, zoom)})

        assert total == Decimal("32.49")

    def test_yearly_cost_is_spread_over_twelve_months(self):
        tableau = _software(Decimal("100.00"), BillingCycle.YEARLY)

        total = LicenseCostCalculator.monthly_total([_license(tableau)], {tableau.id: tableau})

        assert total == Decimal("8.33")

    def test_one_time_and_missing_cost_count_as_zero(self):
        once = _software(Decimal("500.00"), BillingCycle.ONE_TIME)
        free = _software(None)

        total = LicenseCostCalculator.monthly_total(
            [_license(once), _license(free)], {once.id: once, free.id: free}
        )

        assert total == Decimal("0.00")

    def test_inactive_licenses_are_ignored(self):
        slack = _software(Decimal("8.75"))
        licenses = [_license(slack).revoke(), _license(slack).suspend(), _license(slack)]

        total = LicenseCostCalculator.monthly_total(licenses, {slack.id: slack})

        assert total == Decimal("8.75")
