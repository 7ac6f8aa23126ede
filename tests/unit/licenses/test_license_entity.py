"""
Unit tests for License domain entity.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import InvalidLicenseStatusError, LicenseNotActiveError
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import RETURNED_BY_USER_NOTE, License


def _license(**kwargs):
    return License.create(
        organization_id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        software_id=uuid.uuid4(),
        **kwargs,
    )


class TestLicenseEntity:
    """Tests for License domain entity."""

    def test_create_license(self):
        """Test creating a license entity."""
        expires_at = datetime.now(timezone.utc) + timedelta(days=365)

        license = _license(expires_at=expires_at, notes="Approved for Q3")

        assert license.status == LicenseStatus.ACTIVE
        assert license.expires_at == expires_at
        assert license.notes == "Approved for Q3"
        assert license.last_used_at is None

    def test_create_license_requires_user(self):
        """Test that a holder is mandatory."""
        with pytest.raises(ValueError, match="User ID"):
            License.create(organization_id=uuid.uuid4(), user_id=None, software_id=uuid.uuid4())

    def test_revoke(self):
        """Test revoking an active license."""
        license = _license()

        revoked = license.revoke()

        assert revoked.status == LicenseStatus.REVOKED
        assert license.status == LicenseStatus.ACTIVE
        assert revoked.updated_at >= license.updated_at

    def test_revoke_twice_fails(self):
        """Test that revoked is final."""
        with pytest.raises(LicenseNotActiveError):
            _license().revoke().revoke()

    def test_return_to_pool(self):
        """Test returning a license records a revocation with a note."""
        returned = _license(notes="original").return_to_pool()

        assert returned.status == LicenseStatus.REVOKED
        assert returned.notes == RETURNED_BY_USER_NOTE

    def test_suspend_and_resume(self):
        """Test the ACTIVE <-> SUSPENDED cycle."""
        suspended = _license().suspend()
        assert suspended.status == LicenseStatus.SUSPENDED

        resumed = suspended.resume()
        assert resumed.status == LicenseStatus.ACTIVE

    def test_suspend_suspended_fails(self):
        with pytest.raises(InvalidLicenseStatusError):
            _license().suspend().suspend()

    def test_resume_active_fails(self):
        with pytest.raises(InvalidLicenseStatusError):
            _license().resume()

    def test_revoke_suspended_fails(self):
        """Only ACTIVE licenses can be revoked."""
        with pytest.raises(LicenseNotActiveError):
            _license().suspend().revoke()

    def test_is_past_expiry(self):
        """Test expiry detection."""
        now = datetime.now(timezone.utc)

        assert _license(expires_at=now - timedelta(days=1)).is_past_expiry(now) is True
        assert _license(expires_at=now + timedelta(days=1)).is_past_expiry(now) is False
        assert _license().is_past_expiry(now) is False

    def test_mark_expired(self):
        expired = _license(expires_at=datetime.now(timezone.utc) - timedelta(days=1)).mark_expired()
        assert expired.status == LicenseStatus.EXPIRED

        with pytest.raises(InvalidLicenseStatusError):
            expired.mark_expired()

    def test_previous_statuses(self):
        license = _license()

        assert license.suspend().previous_statuses == (LicenseStatus.ACTIVE,)
        assert license.suspend().resume().previous_statuses == (LicenseStatus.SUSPENDED,)
        assert license.revoke().previous_statuses == (LicenseStatus.ACTIVE,)
