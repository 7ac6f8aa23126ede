"""
Integration tests for repository implementations.
"""

import uuid
from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone

from access_requests.domain.access_request import AccessRequest
from core.domain.exceptions import (
    EmailInUseError,
    InvalidLicenseStatusError,
    LicenseAlreadyActiveError,
    RequestAlreadyPendingError,
    RequestNotFoundError,
    UserAlreadyExistsError,
)
from core.domain.pagination import PageRequest
from core.domain.value_objects import LicenseStatus, Priority, RequestStatus, Role
from licenses.domain.license import License
from organizations.domain.organization import Organization
from organizations.domain.user import User


@pytest.mark.django_db
@pytest.mark.integration
class TestUserRepository:
    """Integration tests for UserRepository."""

    def test_save_and_find(self, user_repository, regular_user, manager_user):
        """Test saving and finding a user."""
        found = async_to_sync(user_repository.find_by_id)(regular_user.id)

        assert found is not None
        assert str(found.email) == "john@acme.com"
        assert found.manager_id == manager_user.id
        assert found.role == Role.USER

    def test_find_by_email(self, user_repository, regular_user):
        found = async_to_sync(user_repository.find_by_email)("john@acme.com")
        assert found.id == regular_user.id

        assert async_to_sync(user_repository.find_by_email)("nobody@acme.com") is None

    def test_find_in_other_organization(self, user_repository, regular_user, foreign_admin):
        """Lookups are scoped to the caller's organization."""
        found = async_to_sync(user_repository.find_in_organization)(
            foreign_admin.organization_id, regular_user.id
        )
        assert found is None

    def test_duplicate_email(self, user_repository, regular_user):
        duplicate = User.create(
            organization_id=regular_user.organization_id,
            email="john@acme.com",
            password_hash="hashed",
            first_name="Other",
            last_name="John",
        )
        with pytest.raises(EmailInUseError):
            async_to_sync(user_repository.save)(duplicate)

    def test_email_exists(self, user_repository, regular_user):
        email_exists = async_to_sync(user_repository.email_exists)
        assert email_exists("john@acme.com") is True
        assert email_exists("john@acme.com", exclude_user_id=regular_user.id) is False

    def test_count_managed(self, user_repository, manager_user, regular_user):
        counts = async_to_sync(user_repository.count_managed)([manager_user.id, regular_user.id])
        assert counts.get(manager_user.id) == 1
        assert counts.get(regular_user.id, 0) == 0


@pytest.mark.django_db
@pytest.mark.integration
class TestOrganizationRepository:
    """Integration tests for OrganizationRepository."""

    def test_create_with_admin(self, organization_repository, organization, admin_user):
        found = async_to_sync(organization_repository.find_by_id)(organization.id)

        assert found.name == "Acme Corp"
        assert admin_user.organization_id == organization.id
        assert admin_user.role == Role.ADMIN

    def test_admin_email_taken(self, organization_repository, admin_user):
        organization = Organization.create(name="Copycat", domain="acme.com")
        admin = User.create(
            organization_id=organization.id,
            email="admin@acme.com",
            password_hash="hashed",
            first_name="Copy",
            last_name="Cat",
            role=Role.ADMIN,
        )
        with pytest.raises(UserAlreadyExistsError):
            async_to_sync(organization_repository.create_with_admin)(organization, admin)


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseRepository:
    """Integration tests for LicenseRepository."""

    def test_save_and_find(self, license_repository, active_license, organization):
        found = async_to_sync(license_repository.find_in_organization)(
            organization.id, active_license.id
        )

        assert found is not None
        assert found.status == LicenseStatus.ACTIVE

    def test_second_active_license_rejected(
        self, license_repository, active_license, regular_user, open_software
    ):
        """A user holds at most one ACTIVE license per product."""
        duplicate = License.create(
            organization_id=regular_user.organization_id,
            user_id=regular_user.id,
            software_id=open_software.id,
        )
        with pytest.raises(LicenseAlreadyActiveError):
            async_to_sync(license_repository.save)(duplicate)

    def test_stale_copy_does_not_overwrite_newer_status(
        self, license_repository, active_license, organization
    ):
        stale = async_to_sync(license_repository.find_in_organization)(
            organization.id, active_license.id
        )
        async_to_sync(license_repository.save)(active_license.revoke())

        with pytest.raises(InvalidLicenseStatusError):
            async_to_sync(license_repository.save)(stale.mark_expired())

        found = async_to_sync(license_repository.find_in_organization)(
            organization.id, active_license.id
        )
        assert found.status == LicenseStatus.REVOKED

    def test_new_license_after_revocation(
        self, license_repository, active_license, regular_user, open_software
    ):
        async_to_sync(license_repository.save)(active_license.revoke())
        replacement = License.create(
            organization_id=regular_user.organization_id,
            user_id=regular_user.id,
            software_id=open_software.id,
        )

        saved = async_to_sync(license_repository.save)(replacement)

        assert saved.is_active
        found = async_to_sync(license_repository.find_active)(regular_user.id, open_software.id)
        assert found.id == replacement.id

    def test_list_for_user_with_status_filter(
        self, license_repository, active_license, regular_user, software
    ):
        revoked = License.create(
            organization_id=regular_user.organization_id,
            user_id=regular_user.id,
            software_id=software.id,
        ).revoke()
        async_to_sync(license_repository.save)(revoked)

        licenses, total = async_to_sync(license_repository.list_for_user)(
            regular_user.id, PageRequest(page=1, limit=10)
        )
        assert total == 2
        assert len(licenses) == 2

        licenses, total = async_to_sync(license_repository.list_for_user)(
            regular_user.id, PageRequest(page=1, limit=10), LicenseStatus.REVOKED
        )
        assert total == 1
        assert licenses[0].id == revoked.id

    def test_count_in_organization(self, license_repository, active_license, organization):
        total, active = async_to_sync(license_repository.count_in_organization)(organization.id)
        assert (total, active) == (1, 1)

    def test_find_active_past_expiry(self, license_repository, regular_user, software):
        expired = License.create(
            organization_id=regular_user.organization_id,
            user_id=regular_user.id,
            software_id=software.id,
            expires_at=timezone.now() - timedelta(days=1),
        )
        async_to_sync(license_repository.save)(expired)

        found = async_to_sync(license_repository.find_active_past_expiry)(timezone.now())

        assert [license.id for license in found] == [expired.id]


@pytest.mark.django_db
@pytest.mark.integration
class TestAccessRequestRepository:
    """Integration tests for AccessRequestRepository."""

    def test_create_and_has_pending(self, request_repository, pending_request, regular_user, software):
        assert pending_request.status == RequestStatus.PENDING
        assert async_to_sync(request_repository.has_pending)(regular_user.id, software.id) is True

    def test_record_approval_creates_license(
        self, request_repository, license_repository, pending_request, organization, manager_user
    ):
        outcome = async_to_sync(request_repository.record_approval)(
            organization.id, pending_request.id, approver_id=manager_user.id, comments="OK"
        )

        assert outcome.request.status == RequestStatus.APPROVED
        assert outcome.license_created is True
        found = async_to_sync(license_repository.find_active)(
            pending_request.user_id, pending_request.software_id
        )
        assert found.id == outcome.license.id

        approvals = async_to_sync(request_repository.approvals_for)([pending_request.id])
        assert len(approvals[pending_request.id]) == 1

    def test_record_approval_twice(
        self, request_repository, pending_request, organization, manager_user
    ):
        """A request is decided at most once."""
        record = async_to_sync(request_repository.record_approval)
        record(organization.id, pending_request.id, approver_id=manager_user.id)

        with pytest.raises(RequestNotFoundError):
            record(organization.id, pending_request.id, approver_id=manager_user.id)

    def test_record_approval_other_organization(
        self, request_repository, pending_request, foreign_admin
    ):
        with pytest.raises(RequestNotFoundError):
            async_to_sync(request_repository.record_approval)(
                foreign_admin.organization_id, pending_request.id, approver_id=foreign_admin.id
            )

    def test_second_pending_request_rejected(
        self, request_repository, pending_request, regular_user, software
    ):
        def duplicate():
            return AccessRequest.create(
                organization_id=regular_user.organization_id,
                user_id=regular_user.id,
                software_id=software.id,
                justification="Submitted twice from two tabs",
            )

        with pytest.raises(RequestAlreadyPendingError):
            async_to_sync(request_repository.create)(duplicate())

        async_to_sync(request_repository.cancel)(regular_user.id, pending_request.id)
        resubmitted = async_to_sync(request_repository.create)(duplicate())
        assert resubmitted.status == RequestStatus.PENDING

    def test_cancel_only_own(self, request_repository, pending_request, other_user, regular_user):
        with pytest.raises(RequestNotFoundError):
            async_to_sync(request_repository.cancel)(other_user.id, pending_request.id)

        cancelled = async_to_sync(request_repository.cancel)(regular_user.id, pending_request.id)
        assert cancelled.status == RequestStatus.CANCELLED

    def test_list_pending_in_organization(
        self, request_repository, pending_request, other_user, yearly_software, organization
    ):
        urgent = AccessRequest.create(
            organization_id=organization.id,
            user_id=other_user.id,
            software_id=yearly_software.id,
            justification="Board report due tomorrow",
            priority=Priority.URGENT,
        )
        async_to_sync(request_repository.create)(urgent)

        pending, total = async_to_sync(request_repository.list_pending_in_organization)(
            organization.id, PageRequest()
        )

        assert total == 2
        assert [request.id for request in pending] == [urgent.id, pending_request.id]

        second_page, _ = async_to_sync(request_repository.list_pending_in_organization)(
            organization.id, PageRequest(page=2, limit=1)
        )
        assert [request.id for request in second_page] == [pending_request.id]

    def test_list_for_user_unknown(self, request_repository):
        requests, total = async_to_sync(request_repository.list_for_user)(
            uuid.uuid4(), PageRequest()
        )
        assert requests == []
        assert total == 0
