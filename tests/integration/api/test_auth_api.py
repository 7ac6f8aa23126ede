"""
Integration tests for authentication endpoints.
"""

import pytest

from organizations.application.services.token_service import TokenService
from organizations.infrastructure.models import Organization, User

PASSWORD = "correct-horse"


@pytest.mark.django_db
@pytest.mark.integration
class TestRegisterAPI:
    """Integration tests for organization sign-up."""

    def test_register(self, api_client):
        response = api_client.post(
            "/api/v1/auth/register",
            {
                "email": "Founder@Startup.io",
                "password": "s3cure-pass",
                "first_name": "Grace",
                "last_name": "Hopper",
                "organization_name": "Startup Inc",
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Registration successful"
        assert data["token"]
        assert data["refresh_token"]
        assert data["user"]["email"] == "founder@startup.io"
        assert data["user"]["role"] == "ADMIN"
        assert "password_hash" not in data["user"]
        assert data["organization"]["name"] == "Startup Inc"
        assert data["organization"]["domain"] == "startup.io"

        organization = Organization.objects.get(id=data["organization"]["id"])
        assert User.objects.filter(organization=organization).count() == 1

    def test_register_short_password(self, api_client):
        response = api_client.post(
            "/api/v1/auth/register",
            {
                "email": "founder@startup.io",
                "password": "short",
                "first_name": "Grace",
                "last_name": "Hopper",
                "organization_name": "Startup Inc",
            },
            format="json",
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "password" in error["details"]

    def test_register_existing_email(self, api_client, admin_user):
        response = api_client.post(
            "/api/v1/auth/register",
            {
                "email": "admin@acme.com",
                "password": "s3cure-pass",
                "first_name": "Ada",
                "last_name": "Again",
                "organization_name": "Acme Two",
            },
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "USER_ALREADY_EXISTS"
        assert not Organization.objects.filter(name="Acme Two").exists()


@pytest.mark.django_db
@pytest.mark.integration
class TestLoginAPI:
    """Integration tests for login and token refresh."""

    def test_login(self, api_client, admin_user):
        response = api_client.post(
            "/api/v1/auth/login",
            {"email": "ADMIN@acme.com", "password": PASSWORD},
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Login successful"
        assert data["user"]["id"] == str(admin_user.id)
        assert data["user"]["organization"]["name"] == "Acme Corp"
        claims = TokenService.decode_access_token(data["token"])
        assert claims["role"] == "ADMIN"

    @pytest.mark.parametrize(
        "email,password",
        [("admin@acme.com", "wrong-password"), ("nobody@acme.com", PASSWORD)],
    )
    def test_login_invalid_credentials(self, api_client, admin_user, email, password):
        """Unknown e-mail and wrong password look the same."""
        response = api_client.post(
            "/api/v1/auth/login", {"email": email, "password": password}, format="json"
        )

        assert response.status_code == 401
        assert response.json()["error"] == {
            "code": "INVALID_CREDENTIALS",
            "message": "Invalid credentials",
        }

    def test_refresh(self, api_client, admin_user):
        response = api_client.post(
            "/api/v1/auth/refresh",
            {"refresh_token": TokenService.generate_refresh_token(admin_user)},
            format="json",
        )

        assert response.status_code == 200
        claims = TokenService.decode_access_token(response.json()["token"])
        assert claims["user_id"] == str(admin_user.id)

    def test_refresh_with_access_token(self, api_client, admin_user):
        response = api_client.post(
            "/api/v1/auth/refresh",
            {"refresh_token": TokenService.generate_access_token(admin_user)},
            format="json",
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.django_db
@pytest.mark.integration
class TestCurrentUserAPI:
    """Integration tests for /auth/me."""

    def test_me(self, client_for, regular_user, active_license):
        response = client_for(regular_user).get("/api/v1/auth/me")

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "john@acme.com"
        assert data["organization"]["name"] == "Acme Corp"
        assert [license["id"] for license in data["licenses"]] == [str(active_license.id)]
        assert data["licenses"][0]["software"]["name"] == "Slack"

    def test_me_without_token(self, api_client):
        response = api_client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"

    def test_me_with_garbage_token(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")

        response = api_client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_TOKEN"

    def test_me_deleted_user(self, client_for, other_user):
        client = client_for(other_user)
        User.objects.filter(id=other_user.id).delete()

        response = client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "USER_NOT_FOUND"
