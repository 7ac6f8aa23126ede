"""
Unit tests for the API error envelope.
"""

from rest_framework.exceptions import MethodNotAllowed

from api.exceptions import custom_exception_handler
from core.domain.exceptions import PermissionDeniedError, RequestAlreadyPendingError


class TestCustomExceptionHandler:
    """Tests for custom_exception_handler."""

    def test_domain_exception(self):
        response = custom_exception_handler(RequestAlreadyPendingError(), {})

        assert response.status_code == 400
        assert response.data == {
            "error": {
                "code": "REQUEST_ALREADY_PENDING",
                "message": "You already have a pending request for this software",
            }
        }

    def test_permission_denied(self):
        response = custom_exception_handler(PermissionDeniedError(), {})

        assert response.status_code == 403
        assert response.data["error"]["code"] == "PERMISSION_DENIED"

    def test_framework_exception(self):
        response = custom_exception_handler(MethodNotAllowed("PATCH"), {})

        assert response.status_code == 405
        assert response.data["error"]["code"] == "METHOD_NOT_ALLOWED"
        assert response.data["error"]["message"] == 'Method "PATCH" not allowed.'
