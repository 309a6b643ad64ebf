"""
Standardized error handling for the LCDB content API.

Provides consistent error codes, exception classes, and response formatting.
"""

import logging
import uuid
from enum import Enum
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

import requests
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    PUBLICATION_CHECKLIST_FAILED = "PUBLICATION_CHECKLIST_FAILED"
    INVALID_FORMAT = "INVALID_FORMAT"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_VALUE = "INVALID_VALUE"

    # Authentication/Authorization (401/403)
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    RATE_LIMITED = "RATE_LIMITED"

    # Resource errors (404/409)
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # External service errors
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    NETWORK_TIMEOUT = "NETWORK_TIMEOUT"
    CONNECTION_REFUSED = "CONNECTION_REFUSED"

    # Server errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Error Response Schema
# =============================================================================

@dataclass
class ErrorDetail:
    """Detailed error information."""
    code: ErrorCode
    message: str
    field: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "code": self.code.value if isinstance(self.code, ErrorCode) else self.code,
            "message": self.message,
        }
        if self.field:
            result["field"] = self.field
        if self.details:
            result["details"] = self.details
        return result


@dataclass
class ErrorResponse:
    """Standardized error response."""
    error: ErrorDetail
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error.to_dict(),
            "request_id": self.request_id,
        }

    def to_response(self, status_code: int = 400) -> Response:
        return Response(self.to_dict(), status=status_code)


# =============================================================================
# Custom Exceptions
# =============================================================================

class CMSException(APIException):
    """Base exception for content API errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCode.INTERNAL_ERROR
    default_detail = "An error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[ErrorCode] = None,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message or self.default_detail
        self.error_code = code or self.error_code
        self.field = field
        self.error_details = details or {}

        if status_code:
            self.status_code = status_code

        super().__init__(detail=self.message)

    def get_error_response(self, request_id: Optional[str] = None) -> ErrorResponse:
        return ErrorResponse(
            error=ErrorDetail(
                code=self.error_code,
                message=self.message,
                field=self.field,
                details=self.error_details if self.error_details else None,
            ),
            request_id=request_id or str(uuid.uuid4()),
        )


class ValidationError(CMSException):
    """Validation error."""
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCode.VALIDATION_ERROR
    default_detail = "Validation failed"


class ConfigurationError(CMSException):
    """Server-side configuration is missing or invalid."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = ErrorCode.CONFIGURATION_ERROR
    default_detail = "Server is not configured for this operation"


class UpstreamError(CMSException):
    """A third-party provider rejected or failed the request."""
    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = ErrorCode.UPSTREAM_ERROR
    default_detail = "Upstream provider request failed"


# =============================================================================
# Exception Handler
# =============================================================================

def get_request_id(request) -> str:
    """Get or generate request ID from request."""
    if hasattr(request, 'request_id'):
        return request.request_id
    return str(uuid.uuid4())


def cms_exception_handler(exc, context):
    """
    Custom exception handler for the content API.

    Converts all exceptions to the standardized error response format.
    """
    request = context.get('request')
    request_id = get_request_id(request) if request else str(uuid.uuid4())

    if isinstance(exc, CMSException):
        logger.warning(
            "API Error: %s",
            exc.error_code.value,
            extra={
                "error_code": exc.error_code.value,
                "error_message": exc.message,
                "field": exc.field,
                "status_code": exc.status_code,
            }
        )
        return exc.get_error_response(request_id).to_response(exc.status_code)

    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, 'message_dict'):
            details = exc.message_dict
            message = "Validation failed"
        else:
            details = {"errors": exc.messages}
            message = exc.messages[0] if exc.messages else "Validation failed"

        error_response = ErrorResponse(
            error=ErrorDetail(
                code=ErrorCode.VALIDATION_ERROR,
                message=message,
                details=details,
            ),
            request_id=request_id,
        )
        return error_response.to_response(status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, Http404):
        error_response = ErrorResponse(
            error=ErrorDetail(
                code=ErrorCode.NOT_FOUND,
                message=str(exc) if str(exc) else "Resource not found",
            ),
            request_id=request_id,
        )
        return error_response.to_response(status.HTTP_404_NOT_FOUND)

    if isinstance(exc, requests.exceptions.Timeout):
        error_response = ErrorResponse(
            error=ErrorDetail(
                code=ErrorCode.NETWORK_TIMEOUT,
                message="Request timed out",
            ),
            request_id=request_id,
        )
        return error_response.to_response(status.HTTP_504_GATEWAY_TIMEOUT)

    if isinstance(exc, requests.exceptions.ConnectionError):
        error_response = ErrorResponse(
            error=ErrorDetail(
                code=ErrorCode.CONNECTION_REFUSED,
                message="Could not connect to remote server",
            ),
            request_id=request_id,
        )
        return error_response.to_response(status.HTTP_502_BAD_GATEWAY)

    # Use DRF's default handler for standard exceptions
    response = drf_exception_handler(exc, context)

    if response is not None:
        error_code = ErrorCode.VALIDATION_ERROR
        if response.status_code == 401:
            error_code = ErrorCode.AUTHENTICATION_REQUIRED
        elif response.status_code == 403:
            error_code = ErrorCode.PERMISSION_DENIED
        elif response.status_code == 404:
            error_code = ErrorCode.NOT_FOUND
        elif response.status_code == 429:
            error_code = ErrorCode.RATE_LIMITED
        elif response.status_code >= 500:
            error_code = ErrorCode.INTERNAL_ERROR

        if isinstance(response.data, dict):
            if 'detail' in response.data:
                message = str(response.data['detail'])
                details = None
            else:
                message = "Validation failed"
                details = response.data
        elif isinstance(response.data, list):
            message = str(response.data[0]) if response.data else "Error"
            details = {"errors": response.data}
        else:
            message = str(response.data)
            details = None

        error_response = ErrorResponse(
            error=ErrorDetail(
                code=error_code,
                message=message,
                details=details,
            ),
            request_id=request_id,
        )
        wrapped = error_response.to_response(response.status_code)
        for header in ('WWW-Authenticate', 'Retry-After'):
            if response.has_header(header):
                wrapped[header] = response[header]
        return wrapped

    logger.exception(
        "Unhandled exception: %s",
        type(exc).__name__,
        extra={
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        }
    )

    error_response = ErrorResponse(
        error=ErrorDetail(
            code=ErrorCode.INTERNAL_ERROR,
            message="An unexpected error occurred",
        ),
        request_id=request_id,
    )
    return error_response.to_response(status.HTTP_500_INTERNAL_SERVER_ERROR)

