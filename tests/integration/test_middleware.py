"""
Integration tests for middleware and operational endpoints.
"""

import uuid

import pytest
from django.test import RequestFactory, override_settings

from core.domain.value_objects import Principal, Role
from core.middleware.observability import normalize_endpoint
from core.middleware.tenant import TenantMiddleware, get_current_tenant_id

LOGIN_URL = "/api/v1/auth/login"


def _unique_ip() -> str:
    suffix = uuid.uuid4().int
    return f"10.{suffix % 250}.{(suffix >> 8) % 250}.{(suffix >> 16) % 250}"


@pytest.mark.django_db
@pytest.mark.integration
class TestRateLimitMiddleware:
    """Tests for RateLimitMiddleware."""

    @override_settings(
        RATE_LIMIT_ENABLED=True, RATE_LIMIT_REQUESTS=2, RATE_LIMIT_WINDOW_SECONDS=3600
    )
    def test_login_rate_limited(self, api_client):
        ip = _unique_ip()
        body = {"email": "nobody@acme.com", "password": "wrong-password"}

        first = api_client.post(LOGIN_URL, body, format="json", REMOTE_ADDR=ip)
        assert first.status_code == 401
        assert first["X-RateLimit-Limit"] == "2"
        assert first["X-RateLimit-Remaining"] == "1"

        api_client.post(LOGIN_URL, body, format="json", REMOTE_ADDR=ip)
        blocked = api_client.post(LOGIN_URL, body, format="json", REMOTE_ADDR=ip)

        assert blocked.status_code == 429
        assert blocked.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
        assert int(blocked["Retry-After"]) >= 0
        assert blocked["X-RateLimit-Remaining"] == "0"

    @override_settings(
        RATE_LIMIT_ENABLED=True, RATE_LIMIT_REQUESTS=1, RATE_LIMIT_WINDOW_SECONDS=3600
    )
    def test_other_clients_unaffected(self, api_client):
        body = {"email": "nobody@acme.com", "password": "wrong-password"}
        blocked_ip = _unique_ip()
        api_client.post(LOGIN_URL, body, format="json", REMOTE_ADDR=blocked_ip)

        assert api_client.post(
            LOGIN_URL, body, format="json", REMOTE_ADDR=blocked_ip
        ).status_code == 429
        assert api_client.post(
            LOGIN_URL, body, format="json", REMOTE_ADDR=_unique_ip()
        ).status_code == 401

    @override_settings(
        RATE_LIMIT_ENABLED=True, RATE_LIMIT_REQUESTS=1, RATE_LIMIT_WINDOW_SECONDS=3600
    )
    def test_authenticated_endpoints_not_limited(self, client_for, regular_user):
        client = client_for(regular_user)
        ip = _unique_ip()

        for _ in range(3):
            response = client.get("/api/v1/auth/me", REMOTE_ADDR=ip)
            assert response.status_code == 200
            assert "X-RateLimit-Limit" not in response


@pytest.mark.django_db
@pytest.mark.integration
class TestObservabilityMiddleware:
    """Tests for ObservabilityMiddleware."""

    def test_correlation_id_echoed(self, api_client):
        response = api_client.get("/health/", HTTP_X_CORRELATION_ID="abc-123")

        assert response["X-Correlation-ID"] == "abc-123"

    def test_correlation_id_generated(self, api_client):
        response = api_client.get("/health/")

        assert uuid.UUID(response["X-Correlation-ID"])

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/api/v1/users/", "/api/v1/users/"),
            (
                "/api/v1/users/6f1c2a4e-8b9d-4c3e-a1f0-123456789abc/licenses",
                "/api/v1/users/{id}/licenses",
            ),
            ("/api/v1/items/42", "/api/v1/items/{id}"),
        ],
    )
    def test_normalize_endpoint(self, path, expected):
        assert normalize_endpoint(path) == expected


class TestTenantMiddleware:
    """Tests for TenantMiddleware."""

    def test_tenant_from_principal(self):
        organization_id = uuid.uuid4()
        seen = {}

        def get_response(request):
            seen["tenant"] = get_current_tenant_id()
            return "response"

        request = RequestFactory().get("/api/v1/software/")
        request.principal = Principal(
            user_id=uuid.uuid4(),
            email="john@acme.com",
            organization_id=organization_id,
            role=Role.USER,
        )

        assert TenantMiddleware(get_response)(request) == "response"
        assert seen["tenant"] == organization_id
        assert request.tenant_id == organization_id
        assert get_current_tenant_id() is None

    def test_no_principal(self):
        request = RequestFactory().get("/health/")

        TenantMiddleware(lambda request: None)(request)

        assert request.tenant_id is None


@pytest.mark.django_db
@pytest.mark.integration
class TestOperationalEndpoints:
    """Tests for health checks and metrics."""

    def test_health(self, api_client):
        response = api_client.get("/health/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "OK"
        assert data["environment"] == "test"

    def test_health_db(self, api_client):
        response = api_client.get("/health/db/")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "connected"}

    def test_ready(self, api_client):
        response = api_client.get("/ready/")

        assert response.status_code == 200
        assert response.json()["checks"] == {"database": True, "cache": True}

    def test_metrics(self, api_client):
        api_client.get("/health/")

        response = api_client.get("/metrics")

        assert response.status_code == 200
        assert b"http_requests_total" in response.content
