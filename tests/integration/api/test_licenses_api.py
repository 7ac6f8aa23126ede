"""
Integration tests for license endpoints.
"""

import pytest
from asgiref.sync import async_to_sync

from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel

LICENSES_URL = "/api/v1/licenses/"


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseListsAPI:
    """Integration tests for license listings and statistics."""

    def test_my_licenses(self, client_for, regular_user, active_license, other_user):
        response = client_for(regular_user).get(f"{LICENSES_URL}my-licenses")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["total_pages"] == 1
        assert data["items"][0]["id"] == str(active_license.id)
        assert data["items"][0]["software"]["name"] == "Slack"

        assert client_for(other_user).get(f"{LICENSES_URL}my-licenses").json()["items"] == []

    def test_my_licenses_status_filter(self, client_for, regular_user, active_license):
        response = client_for(regular_user).get(
            f"{LICENSES_URL}my-licenses", {"status": "SUSPENDED"}
        )

        assert response.status_code == 200
        assert response.json()["total"] == 0

    def test_all_licenses(
        self, client_for, admin_user, other_user, software, active_license, license_repository
    ):
        async_to_sync(license_repository.save)(
            License.create(
                organization_id=other_user.organization_id,
                user_id=other_user.id,
                software_id=software.id,
            )
        )
        client = client_for(admin_user)

        everything = client.get(f"{LICENSES_URL}all").json()
        assert everything["total"] == 2
        assert {item["user"]["email"] for item in everything["items"]} == {
            "john@acme.com",
            "jane@acme.com",
        }

        only_slack = client.get(
            f"{LICENSES_URL}all", {"software_id": str(active_license.software_id)}
        ).json()
        assert [item["id"] for item in only_slack["items"]] == [str(active_license.id)]

    def test_all_licenses_forbidden_for_manager(self, client_for, manager_user):
        response = client_for(manager_user).get(f"{LICENSES_URL}all")

        assert response.status_code == 403

    def test_stats(self, client_for, admin_user, active_license):
        response = client_for(admin_user).get(f"{LICENSES_URL}stats")

        assert response.status_code == 200
        data = response.json()
        assert data["total_licenses"] == 1
        assert data["active_licenses"] == 1
        assert data["monthly_total_cost"] == 8.75
        assert data["licenses_by_software"] == [
            {
                "software_id": str(active_license.software_id),
                "software_name": "Slack",
                "count": 1,
            }
        ]
        assert data["recent_activity"][0]["user"]["email"] == "john@acme.com"

    def test_stats_forbidden_for_user(self, client_for, regular_user):
        response = client_for(regular_user).get(f"{LICENSES_URL}stats")

        assert response.status_code == 403


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseActionsAPI:
    """Integration tests for license status changes."""

    def test_revoke(self, client_for, admin_user, active_license):
        response = client_for(admin_user).put(f"{LICENSES_URL}{active_license.id}/revoke")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "License revoked successfully"
        assert data["license"]["status"] == "REVOKED"
        assert LicenseModel.objects.get(id=active_license.id).status == "REVOKED"

    def test_revoke_forbidden_for_user(self, client_for, regular_user, active_license):
        response = client_for(regular_user).put(f"{LICENSES_URL}{active_license.id}/revoke")

        assert response.status_code == 403
        assert LicenseModel.objects.get(id=active_license.id).status == "ACTIVE"

    def test_return(self, client_for, regular_user, active_license):
        response = client_for(regular_user).put(f"{LICENSES_URL}{active_license.id}/return")

        assert response.status_code == 200
        assert response.json()["license"]["notes"] == "Returned by user"

    def test_return_not_owned(self, client_for, other_user, active_license):
        response = client_for(other_user).put(f"{LICENSES_URL}{active_license.id}/return")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LICENSE_NOT_FOUND"

    def test_suspend_and_resume(self, client_for, admin_user, active_license):
        client = client_for(admin_user)

        suspended = client.put(f"{LICENSES_URL}{active_license.id}/suspend")
        assert suspended.status_code == 200
        assert suspended.json()["license"]["status"] == "SUSPENDED"

        resumed = client.put(f"{LICENSES_URL}{active_license.id}/resume")
        assert resumed.status_code == 200
        assert resumed.json()["license"]["status"] == "ACTIVE"

    def test_suspend_inactive(self, client_for, admin_user, active_license):
        client = client_for(admin_user)
        client.put(f"{LICENSES_URL}{active_license.id}/revoke")

        response = client.put(f"{LICENSES_URL}{active_license.id}/suspend")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_LICENSE_STATUS"

    def test_resume_active(self, client_for, admin_user, active_license):
        response = client_for(admin_user).put(f"{LICENSES_URL}{active_license.id}/resume")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_LICENSE_STATUS"
