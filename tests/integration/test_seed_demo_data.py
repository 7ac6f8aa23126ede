"""
Integration tests for the seed_demo_data management command.
"""

from io import StringIO

import pytest
from django.core.management import call_command

from access_requests.infrastructure.models import AccessRequest
from catalog.infrastructure.models import Software
from licenses.infrastructure.models import License
from organizations.infrastructure.models import Organization, User


def _seed(*args) -> str:
    out = StringIO()
    call_command("seed_demo_data", *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
@pytest.mark.integration
class TestSeedDemoData:
    """Tests for seed_demo_data."""

    def test_seed(self):
        output = _seed()

        organization = Organization.objects.get(domain="demo.com")
        assert organization.name == "Demo Company"
        assert User.objects.filter(organization=organization).count() == 4
        assert Software.objects.filter(organization=organization).count() == 12
        assert License.objects.filter(organization=organization, status="ACTIVE").count() == 5
        assert AccessRequest.objects.filter(organization=organization, status="PENDING").count() == 2

        john = User.objects.get(email="john@demo.com")
        assert john.manager.email == "manager@demo.com"
        assert "admin@demo.com / admin123" in output

    def test_second_run_keeps_data(self):
        _seed()
        first_id = Organization.objects.get(domain="demo.com").id

        output = _seed()

        assert "already exists" in output
        assert Organization.objects.get(domain="demo.com").id == first_id

    def test_reset(self):
        _seed()
        first_id = Organization.objects.get(domain="demo.com").id

        output = _seed("--reset")

        assert "Removed existing demo organization" in output
        organization = Organization.objects.get(domain="demo.com")
        assert organization.id != first_id
        assert Software.objects.count() == 12
