"""
Integration tests for user administration endpoints.
"""

import uuid

import pytest

from organizations.infrastructure.models import User

USERS_URL = "/api/v1/users/"
PASSWORD = "correct-horse"


@pytest.mark.django_db
@pytest.mark.integration
class TestUserListAPI:
    """Integration tests for listing and creating users."""

    def test_list_users(self, client_for, manager_user, regular_user, admin_user, foreign_admin):
        response = client_for(manager_user).get(USERS_URL)

        assert response.status_code == 200
        emails = {user["email"] for user in response.json()}
        assert emails == {"admin@acme.com", "manager@acme.com", "john@acme.com"}

    def test_list_users_detail_fields(self, client_for, admin_user, manager_user, regular_user):
        response = client_for(admin_user).get(USERS_URL, {"search": "john"})

        assert response.status_code == 200
        (john,) = response.json()
        assert john["manager"]["id"] == str(manager_user.id)
        assert john["counts"] == {"active_licenses": 0, "managed_users": 0}

    def test_list_users_forbidden_for_user(self, client_for, regular_user):
        response = client_for(regular_user).get(USERS_URL)

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "PERMISSION_DENIED"

    def test_create_user(self, client_for, admin_user, manager_user):
        response = client_for(admin_user).post(
            USERS_URL,
            {
                "email": "New.Hire@acme.com",
                "password": "welcome-aboard",
                "first_name": "New",
                "last_name": "Hire",
                "manager_id": str(manager_user.id),
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "new.hire@acme.com"
        assert data["role"] == "USER"
        assert data["manager_id"] == str(manager_user.id)
        assert data["organization_id"] == str(admin_user.organization_id)

    def test_create_user_requires_admin(self, client_for, manager_user):
        response = client_for(manager_user).post(
            USERS_URL,
            {
                "email": "someone@acme.com",
                "password": "welcome-aboard",
                "first_name": "Some",
                "last_name": "One",
            },
            format="json",
        )

        assert response.status_code == 403

    def test_create_user_email_in_use(self, client_for, admin_user, regular_user):
        response = client_for(admin_user).post(
            USERS_URL,
            {
                "email": "john@acme.com",
                "password": "welcome-aboard",
                "first_name": "John",
                "last_name": "Again",
            },
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "EMAIL_IN_USE"

    def test_create_user_manager_must_approve(self, client_for, admin_user, regular_user):
        response = client_for(admin_user).post(
            USERS_URL,
            {
                "email": "intern@acme.com",
                "password": "welcome-aboard",
                "first_name": "In",
                "last_name": "Tern",
                "manager_id": str(regular_user.id),
            },
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_MANAGER"


@pytest.mark.django_db
@pytest.mark.integration
class TestUserDetailAPI:
    """Integration tests for one user."""

    def test_get_user_other_organization(self, client_for, foreign_admin, regular_user):
        response = client_for(foreign_admin).get(f"{USERS_URL}{regular_user.id}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "USER_NOT_FOUND"

    def test_update_user(self, client_for, admin_user, regular_user):
        response = client_for(admin_user).put(
            f"{USERS_URL}{regular_user.id}",
            {"first_name": "Johnny", "role": "MANAGER", "manager_id": None},
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["first_name"] == "Johnny"
        assert data["last_name"] == "User"
        assert data["role"] == "MANAGER"
        assert data["manager_id"] is None

    def test_manager_cannot_grant_admin(self, client_for, manager_user, regular_user):
        response = client_for(manager_user).put(
            f"{USERS_URL}{regular_user.id}", {"role": "ADMIN"}, format="json"
        )

        assert response.status_code == 403
        assert User.objects.get(id=regular_user.id).role == "USER"

    def test_manager_cannot_edit_admin(self, client_for, api_client, manager_user, admin_user):
        response = client_for(manager_user).put(
            f"{USERS_URL}{admin_user.id}",
            {"password": "taken-over-1", "email": "owned@acme.com", "role": "USER"},
            format="json",
        )

        assert response.status_code == 403
        stored = User.objects.get(id=admin_user.id)
        assert stored.role == "ADMIN"
        assert stored.email == "admin@acme.com"
        login = api_client.post(
            "/api/v1/auth/login",
            {"email": "admin@acme.com", "password": PASSWORD},
            format="json",
        )
        assert login.status_code == 200

    def test_manager_cannot_delete_admin(self, client_for, manager_user, admin_user):
        response = client_for(manager_user).delete(f"{USERS_URL}{admin_user.id}")

        assert response.status_code == 403
        assert User.objects.filter(id=admin_user.id).exists()

    def test_role_change_applies_to_existing_token(self, client_for, admin_user, regular_user):
        """The caller's role is read from the database on every request."""
        john = client_for(regular_user)
        assert john.get(USERS_URL).status_code == 403

        client_for(admin_user).put(
            f"{USERS_URL}{regular_user.id}", {"role": "MANAGER"}, format="json"
        )

        assert john.get(USERS_URL).status_code == 200

    def test_delete_user(self, client_for, admin_user, other_user):
        response = client_for(admin_user).delete(f"{USERS_URL}{other_user.id}")

        assert response.status_code == 200
        assert response.json() == {"message": "User deleted successfully"}
        assert not User.objects.filter(id=other_user.id).exists()

    def test_delete_self(self, client_for, admin_user):
        response = client_for(admin_user).delete(f"{USERS_URL}{admin_user.id}")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "CANNOT_DELETE_SELF"

    def test_delete_license_holder(self, client_for, admin_user, regular_user, active_license):
        response = client_for(admin_user).delete(f"{USERS_URL}{regular_user.id}")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "USER_HAS_ACTIVE_LICENSES"

    def test_delete_manager_of_others(self, client_for, admin_user, manager_user, regular_user):
        response = client_for(admin_user).delete(f"{USERS_URL}{manager_user.id}")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "USER_MANAGES_OTHERS"


@pytest.mark.django_db
@pytest.mark.integration
class TestUserLicensesAPI:
    """Integration tests for licenses managed from the user page."""

    def test_assign_license(self, client_for, admin_user, other_user, software):
        response = client_for(admin_user).post(
            f"{USERS_URL}{other_user.id}/licenses",
            {"software_id": str(software.id)},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "ACTIVE"
        assert data["software"]["name"] == "GitHub"

        listed = client_for(admin_user).get(f"{USERS_URL}{other_user.id}/licenses")
        assert [license["id"] for license in listed.json()] == [data["id"]]

    def test_assign_duplicate_license(self, client_for, admin_user, regular_user, active_license):
        response = client_for(admin_user).post(
            f"{USERS_URL}{regular_user.id}/licenses",
            {"software_id": str(active_license.software_id)},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "LICENSE_ALREADY_ACTIVE"

    def test_assign_unknown_software(self, client_for, admin_user, other_user):
        response = client_for(admin_user).post(
            f"{USERS_URL}{other_user.id}/licenses",
            {"software_id": str(uuid.uuid4())},
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SOFTWARE_NOT_FOUND"

    def test_remove_license(self, client_for, manager_user, regular_user, active_license):
        response = client_for(manager_user).delete(
            f"{USERS_URL}{regular_user.id}/licenses/{active_license.id}"
        )

        assert response.status_code == 200
        assert response.json()["status"] == "REVOKED"
