"""
Integration tests for access request endpoints.
"""

import pytest
from asgiref.sync import async_to_sync

from access_requests.domain.access_request import AccessRequest as AccessRequestEntity
from access_requests.infrastructure.models import AccessRequest
from core.domain.value_objects import Priority
from licenses.infrastructure.models import License

REQUESTS_URL = "/api/v1/requests/"
JUSTIFICATION = "Need it for the upcoming product launch"


@pytest.mark.django_db
@pytest.mark.integration
class TestSubmitRequestAPI:
    """Integration tests for submitting requests."""

    def test_submit_pending(self, client_for, regular_user, software):
        response = client_for(regular_user).post(
            REQUESTS_URL,
            {"software_id": str(software.id), "justification": JUSTIFICATION, "priority": "URGENT"},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Request submitted successfully"
        assert data["request"]["status"] == "PENDING"
        assert data["request"]["priority"] == "URGENT"
        assert data["license"] is None

    def test_submit_auto_approved(self, client_for, regular_user, open_software):
        response = client_for(regular_user).post(
            REQUESTS_URL,
            {"software_id": str(open_software.id), "justification": JUSTIFICATION},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["request"]["status"] == "APPROVED"
        assert data["request"]["priority"] == "MEDIUM"
        assert data["license"]["status"] == "ACTIVE"
        assert License.objects.filter(id=data["license"]["id"], user_id=regular_user.id).exists()

    def test_submit_short_justification(self, client_for, regular_user, software):
        response = client_for(regular_user).post(
            REQUESTS_URL,
            {"software_id": str(software.id), "justification": "please"},
            format="json",
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "justification" in error["details"]
        assert not AccessRequest.objects.exists()

    def test_submit_duplicate(self, client_for, regular_user, pending_request):
        response = client_for(regular_user).post(
            REQUESTS_URL,
            {"software_id": str(pending_request.software_id), "justification": JUSTIFICATION},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "REQUEST_ALREADY_PENDING"

    def test_submit_requires_authentication(self, api_client, software):
        response = api_client.post(
            REQUESTS_URL,
            {"software_id": str(software.id), "justification": JUSTIFICATION},
            format="json",
        )

        assert response.status_code == 401


@pytest.mark.django_db
@pytest.mark.integration
class TestRequestListsAPI:
    """Integration tests for request listings."""

    def test_my_requests(self, client_for, regular_user, pending_request, other_user):
        response = client_for(regular_user).get(f"{REQUESTS_URL}my-requests")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["id"] == str(pending_request.id)
        assert data["items"][0]["software"]["name"] == "GitHub"

        assert client_for(other_user).get(f"{REQUESTS_URL}my-requests").json()["total"] == 0

    def test_my_requests_status_filter(self, client_for, regular_user, pending_request):
        client = client_for(regular_user)

        assert client.get(f"{REQUESTS_URL}my-requests", {"status": "PENDING"}).json()["total"] == 1
        assert client.get(f"{REQUESTS_URL}my-requests", {"status": "REJECTED"}).json()["total"] == 0

        response = client.get(f"{REQUESTS_URL}my-requests", {"status": "LOST"})
        assert response.status_code == 400

    def test_pending_approvals(self, client_for, manager_user, pending_request):
        response = client_for(manager_user).get(f"{REQUESTS_URL}pending-approvals")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        (item,) = data["items"]
        assert item["id"] == str(pending_request.id)
        assert item["user"]["email"] == "john@acme.com"
        assert item["user"]["manager"]["email"] == "manager@acme.com"

    def test_pending_approvals_paginated(
        self, client_for, manager_user, pending_request, other_user, yearly_software,
        request_repository,
    ):
        async_to_sync(request_repository.create)(
            AccessRequestEntity.create(
                organization_id=other_user.organization_id,
                user_id=other_user.id,
                software_id=yearly_software.id,
                justification="Quarterly dashboards for the board",
                priority=Priority.LOW,
            )
        )
        client = client_for(manager_user)

        first = client.get(f"{REQUESTS_URL}pending-approvals", {"page": 1, "limit": 1}).json()
        assert first["total"] == 2
        assert first["total_pages"] == 2
        assert [item["id"] for item in first["items"]] == [str(pending_request.id)]

        second = client.get(f"{REQUESTS_URL}pending-approvals", {"page": 2, "limit": 1}).json()
        assert [item["user"]["email"] for item in second["items"]] == ["jane@acme.com"]

    def test_pending_approvals_forbidden_for_user(self, client_for, regular_user):
        response = client_for(regular_user).get(f"{REQUESTS_URL}pending-approvals")

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "PERMISSION_DENIED"


@pytest.mark.django_db
@pytest.mark.integration
class TestRequestDecisionAPI:
    """Integration tests for approve, reject and cancel."""

    def test_approve(self, client_for, manager_user, regular_user, pending_request):
        response = client_for(manager_user).put(
            f"{REQUESTS_URL}{pending_request.id}/approve", {"comments": "Go ahead"}, format="json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Request approved successfully"
        assert data["request"]["status"] == "APPROVED"
        assert data["request"]["approvals"][0]["approver"]["id"] == str(manager_user.id)
        assert data["license"]["user_id"] == str(regular_user.id)
        assert data["license"]["notes"] == "Go ahead"

    def test_approve_without_body(self, client_for, admin_user, pending_request):
        response = client_for(admin_user).put(f"{REQUESTS_URL}{pending_request.id}/approve")

        assert response.status_code == 200
        assert response.json()["license"]["notes"] is None

    def test_approve_forbidden_for_user(self, client_for, other_user, pending_request):
        response = client_for(other_user).put(f"{REQUESTS_URL}{pending_request.id}/approve")

        assert response.status_code == 403
        assert AccessRequest.objects.get(id=pending_request.id).status == "PENDING"

    def test_approve_processed_request(self, client_for, manager_user, pending_request):
        client = client_for(manager_user)
        client.put(f"{REQUESTS_URL}{pending_request.id}/approve")

        response = client.put(f"{REQUESTS_URL}{pending_request.id}/approve")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "REQUEST_NOT_FOUND"

    def test_reject(self, client_for, admin_user, pending_request):
        response = client_for(admin_user).put(
            f"{REQUESTS_URL}{pending_request.id}/reject",
            {"comments": "Use the shared account"},
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Request rejected"
        assert data["request"]["status"] == "REJECTED"
        assert data["license"] is None

    def test_reject_requires_comments(self, client_for, admin_user, pending_request):
        response = client_for(admin_user).put(
            f"{REQUESTS_URL}{pending_request.id}/reject", {}, format="json"
        )

        assert response.status_code == 400
        assert "comments" in response.json()["error"]["details"]

    def test_cancel(self, client_for, regular_user, pending_request):
        response = client_for(regular_user).put(f"{REQUESTS_URL}{pending_request.id}/cancel")

        assert response.status_code == 200
        assert response.json()["request"]["status"] == "CANCELLED"

    def test_cancel_someone_elses(self, client_for, admin_user, pending_request):
        response = client_for(admin_user).put(f"{REQUESTS_URL}{pending_request.id}/cancel")

        assert response.status_code == 404
