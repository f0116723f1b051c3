"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    GarageConsoleError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)


class TestGarageConsoleError:
    def test_error_message(self):
        """GarageConsoleError should store message."""
        error = GarageConsoleError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_error_default_code(self):
        """GarageConsoleError should default code to class name."""
        error = GarageConsoleError("Test error")
        assert error.code == "GarageConsoleError"

    def test_error_custom_code_and_details(self):
        """GarageConsoleError should accept custom code and details."""
        error = GarageConsoleError("Test error", code="CUSTOM_ERROR", details={"key": "value"})
        assert error.code == "CUSTOM_ERROR"
        assert error.details == {"key": "value"}

    def test_error_to_dict(self):
        """GarageConsoleError should convert to dict."""
        error = GarageConsoleError("Test error", code="TEST_ERROR", details={"key": "value"})
        assert error.to_dict() == {
            "error": "TEST_ERROR",
            "message": "Test error",
            "details": {"key": "value"},
        }

    def test_default_http_status(self):
        """Unclassified errors should render as 500."""
        assert GarageConsoleError("boom").http_status == 500


class TestHttpStatuses:
    @pytest.mark.parametrize(
        "error_class, status",
        [
            (NotFoundError, 404),
            (ValidationError, 422),
            (ConflictError, 409),
            (AuthenticationError, 401),
            (AuthorizationError, 403),
        ],
    )
    def test_subclass_status(self, error_class, status):
        """Each base error should carry its HTTP status."""
        error = error_class("message")
        assert isinstance(error, GarageConsoleError)
        assert error.http_status == status


class TestExternalServiceError:
    def test_external_service_error_stores_service(self):
        """ExternalServiceError should store service name in attribute and details."""
        error = ExternalServiceError("Connection failed", service="supabase-auth")
        assert error.service == "supabase-auth"
        assert error.to_dict()["details"]["service"] == "supabase-auth"
        assert error.http_status == 502

    def test_external_service_error_preserves_other_details(self):
        """ExternalServiceError should preserve other details."""
        error = ExternalServiceError(
            "Connection failed",
            service="supabase-auth",
            details={"status_code": 500},
        )
        result = error.to_dict()

        assert result["details"]["service"] == "supabase-auth"
        assert result["details"]["status_code"] == 500
