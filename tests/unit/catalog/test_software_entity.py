"""
Unit tests for Software domain entity.
"""

import uuid
from decimal import Decimal

import pytest

from catalog.domain.software import Software
from core.domain.value_objects import BillingCycle


def _software(**kwargs):
    fields = dict(organization_id=uuid.uuid4(), name="  Figma ", category=" Design ")
    fields.update(kwargs)
    return Software.create(**fields)


class TestSoftwareEntity:
    """Tests for Software domain entity."""

    def test_create_defaults(self):
        software = _software()

        assert software.name == "Figma"
        assert software.category == "Design"
        assert software.billing_cycle == BillingCycle.MONTHLY
        assert software.requires_approval is True
        assert software.auto_provision is False

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            _software(name="   ")

    def test_update(self):
        """Test that only given fields change."""
        software = _software(cost_per_license=Decimal("15.00"))

        updated = software.update({"name": " Figma Pro ", "requires_approval": False})

        assert updated.name == "Figma Pro"
        assert updated.requires_approval is False
        assert updated.cost_per_license == Decimal("15.00")
        assert updated.id == software.id

    def test_update_unknown_field(self):
        with pytest.raises(ValueError, match="organization_id"):
            _software().update({"organization_id": uuid.uuid4()})

    @pytest.mark.parametrize(
        "cost,cycle,expected",
        [
            (Decimal("15.00"), BillingCycle.MONTHLY, Decimal("15.00")),
            (Decimal("120.00"), BillingCycle.YEARLY, Decimal("10.00")),
            (Decimal("99.00"), BillingCycle.ONE_TIME, Decimal("0")),
            (None, BillingCycle.MONTHLY, Decimal("0")),
        ],
    )
    def test_monthly_cost(self, cost, cycle, expected):
        software = _software(cost_per_license=cost, billing_cycle=cycle)
        assert software.monthly_cost().quantize(Decimal("0.01")) == expected.quantize(
            Decimal("0.01")
        )
