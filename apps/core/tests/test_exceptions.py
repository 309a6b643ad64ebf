"""
Tests for the error envelope produced by ``cms_exception_handler``.
"""

import uuid

import pytest
import requests
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.exceptions import NotAuthenticated, Throttled

from apps.core.exceptions import (
    ConfigurationError,
    ErrorCode,
    UpstreamError,
    ValidationError,
    cms_exception_handler,
)


def handle(exc):
    return cms_exception_handler(exc, {})


class TestCMSExceptions:

    def test_validation_error_envelope(self):
        response = handle(ValidationError("slug is required", field="slug"))

        assert response.status_code == 400
        assert response.data["error"] == {
            "code": "VALIDATION_ERROR",
            "message": "slug is required",
            "field": "slug",
        }
        uuid.UUID(response.data["request_id"])

    def test_code_override_and_details(self):
        exc = ValidationError("Empty request body", code=ErrorCode.MISSING_FIELD, details={"content_type": ""})

        response = handle(exc)

        assert response.data["error"]["code"] == "MISSING_FIELD"
        # Empty details are left out of the envelope
        assert "details" not in response.data["error"]

    def test_configuration_error_is_500(self):
        response = handle(ConfigurationError("DEEPL_API_KEY not configured"))

        assert response.status_code == 500
        assert response.data["error"]["code"] == "CONFIGURATION_ERROR"

    def test_upstream_error_is_502(self):
        response = handle(UpstreamError("DeepL request failed", details={"status": 403, "body": "Forbidden"}))

        assert response.status_code == 502
        assert response.data["error"]["details"] == {"status": 403, "body": "Forbidden"}


class TestForeignExceptions:

    def test_django_validation_error_with_fields(self):
        response = handle(DjangoValidationError({"slug": ["Enter a valid slug."]}))

        assert response.status_code == 400
        assert response.data["error"]["details"] == {"slug": ["Enter a valid slug."]}

    def test_requests_timeout(self):
        response = handle(requests.Timeout("read timed out"))

        assert response.status_code == 504
        assert response.data["error"]["code"] == "NETWORK_TIMEOUT"

    def test_requests_connection_error(self):
        response = handle(requests.ConnectionError("refused"))

        assert response.status_code == 502
        assert response.data["error"]["code"] == "CONNECTION_REFUSED"

    def test_drf_not_authenticated(self):
        response = handle(NotAuthenticated())

        assert response.status_code == 401
        assert response.data["error"]["code"] == "AUTHENTICATION_REQUIRED"

    def test_throttled_keeps_retry_after(self):
        response = handle(Throttled(wait=30))

        assert response.status_code == 429
        assert response.data["error"]["code"] == "RATE_LIMITED"
        assert response["Retry-After"] == "30"

    def test_unhandled_exception_is_500(self, caplog):
        response = handle(RuntimeError("boom"))

        assert response.status_code == 500
        assert response.data["error"] == {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
        }
        assert "Unhandled exception: RuntimeError" in caplog.text


@pytest.mark.django_db
class TestEnvelopeOverHTTP:

    def test_not_found_uses_request_id(self, api_client):
        request_id = str(uuid.uuid4())

        response = api_client.get(f'/api/articles/{uuid.uuid4()}/', HTTP_X_REQUEST_ID=request_id)

        assert response.status_code == 404
        body = response.json()
        assert body["error"]["code"] == "NOT_FOUND"
        assert body["request_id"] == request_id
        assert response["X-Request-ID"] == request_id

    def test_anonymous_write_is_401(self, api_client):
        response = api_client.post('/api/tags/', {"name": "Quick", "slug": "quick"}, format='json')

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"
