"""
Pytest configuration and shared fixtures.
"""

from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync

from access_requests.domain.access_request import AccessRequest
from access_requests.infrastructure.repositories.django_access_request_repository import (
    DjangoAccessRequestRepository,
)
from catalog.domain.software import Software
from catalog.infrastructure.repositories.django_software_repository import (
    DjangoSoftwareRepository,
)
from core.domain.value_objects import BillingCycle, Principal, Priority, Role
from licenses.domain.license import License
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from organizations.application.services.password_hasher import PasswordHasher
from organizations.application.services.token_service import TokenService
from organizations.domain.organization import Organization
from organizations.domain.user import User
from organizations.infrastructure.repositories.django_organization_repository import (
    DjangoOrganizationRepository,
)
from organizations.infrastructure.repositories.django_user_repository import DjangoUserRepository

PASSWORD = "correct-horse"


@pytest.fixture(autouse=True)
def event_handlers():
    """Make sure the side-effect handlers are subscribed."""
    from core.infrastructure.event_handlers import register_event_handlers

    register_event_handlers()


@pytest.fixture
def organization_repository():
    """Fixture for OrganizationRepository."""
    return DjangoOrganizationRepository()


@pytest.fixture
def user_repository():
    """Fixture for UserRepository."""
    return DjangoUserRepository()


@pytest.fixture
def software_repository():
    """Fixture for SoftwareRepository."""
    return DjangoSoftwareRepository()


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def request_repository():
    """Fixture for AccessRequestRepository."""
    return DjangoAccessRequestRepository()


def make_user(organization_id, email, role=Role.USER, manager_id=None, first_name="Test"):
    """Build an unsaved User with the shared test password."""
    return User.create(
        organization_id=organization_id,
        email=email,
        password_hash=PasswordHasher.hash(PASSWORD),
        first_name=first_name,
        last_name="User",
        role=role,
        manager_id=manager_id,
    )


def principal_for(user: User) -> Principal:
    """The Principal a request from ``user`` would carry."""
    return Principal(
        user_id=user.id,
        email=str(user.email),
        organization_id=user.organization_id,
        role=user.role,
    )


@pytest.fixture
def as_principal():
    """Turn a User into the Principal handlers receive."""
    return principal_for


@pytest.fixture
def organization_and_admin(db, organization_repository):
    """An organization saved in database together with its admin."""
    organization = Organization.create(name="Acme Corp", domain="acme.com")
    admin = make_user(organization.id, "admin@acme.com", role=Role.ADMIN, first_name="Ada")
    return async_to_sync(organization_repository.create_with_admin)(organization, admin)


@pytest.fixture
def organization(organization_and_admin):
    """Fixture for an Organization saved in database."""
    return organization_and_admin[0]


@pytest.fixture
def admin_user(organization_and_admin):
    """Fixture for the organization's ADMIN."""
    return organization_and_admin[1]


@pytest.fixture
def manager_user(organization, user_repository):
    """Fixture for a MANAGER in the organization."""
    manager = make_user(organization.id, "manager@acme.com", role=Role.MANAGER, first_name="Max")
    return async_to_sync(user_repository.save)(manager)


@pytest.fixture
def regular_user(organization, manager_user, user_repository):
    """Fixture for a USER reporting to the manager."""
    user = make_user(organization.id, "john@acme.com", manager_id=manager_user.id, first_name="John")
    return async_to_sync(user_repository.save)(user)


@pytest.fixture
def other_user(organization, user_repository):
    """Fixture for a second USER without a manager."""
    user = make_user(organization.id, "jane@acme.com", first_name="Jane")
    return async_to_sync(user_repository.save)(user)


@pytest.fixture
def foreign_admin(db, organization_repository):
    """Admin of a second, unrelated organization."""
    organization = Organization.create(name="Globex", domain="globex.com")
    admin = make_user(organization.id, "admin@globex.com", role=Role.ADMIN, first_name="Hank")
    return async_to_sync(organization_repository.create_with_admin)(organization, admin)[1]


@pytest.fixture
def software(organization, software_repository):
    """A product that needs approval."""
    product = Software.create(
        organization_id=organization.id,
        name="GitHub",
        category="Development",
        vendor="GitHub Inc.",
        cost_per_license=Decimal("4.00"),
        billing_cycle=BillingCycle.MONTHLY,
        requires_approval=True,
    )
    return async_to_sync(software_repository.save)(product)


@pytest.fixture
def open_software(organization, software_repository):
    """A product granted without approval."""
    product = Software.create(
        organization_id=organization.id,
        name="Slack",
        category="Communication",
        vendor="Slack Technologies",
        cost_per_license=Decimal("8.75"),
        billing_cycle=BillingCycle.MONTHLY,
        requires_approval=False,
    )
    return async_to_sync(software_repository.save)(product)


@pytest.fixture
def yearly_software(organization, software_repository):
    """A yearly-billed product that needs approval."""
    product = Software.create(
        organization_id=organization.id,
        name="Tableau",
        category="Analytics",
        cost_per_license=Decimal("120.00"),
        billing_cycle=BillingCycle.YEARLY,
    )
    return async_to_sync(software_repository.save)(product)


@pytest.fixture
def active_license(regular_user, open_software, license_repository):
    """An ACTIVE license held by the regular user."""
    license = License.create(
        organization_id=regular_user.organization_id,
        user_id=regular_user.id,
        software_id=open_software.id,
    )
    return async_to_sync(license_repository.save)(license)


@pytest.fixture
def pending_request(regular_user, software, request_repository):
    """A PENDING request by the regular user for the approval-gated product."""
    request = AccessRequest.create(
        organization_id=regular_user.organization_id,
        user_id=regular_user.id,
        software_id=software.id,
        justification="Need access to company repositories",
        priority=Priority.HIGH,
    )
    return async_to_sync(request_repository.create)(request)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def client_for():
    """Build an API client authenticated as a user."""
    from rest_framework.test import APIClient

    def _client(user: User):
        client = APIClient()
        client.credentials(
            HTTP_AUTHORIZATION=f"Bearer {TokenService.generate_access_token(user)}"
        )
        return client

    return _client
