"""
Request ID middleware.

Every request gets an id (taken from a valid incoming ``X-Request-ID`` header
or freshly generated). The id is stored thread-locally so log records, error
envelopes and Celery task headers can carry it, and it is echoed back on the
response.
"""

import uuid
import threading
import logging
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

_request_context = threading.local()


def get_request_id():
    """Current request id, or None outside a request/task."""
    return getattr(_request_context, 'request_id', None)


def set_request_context(request_id, user_id=None, path=None):
    _request_context.request_id = request_id
    _request_context.user_id = user_id
    _request_context.path = path


def clear_request_context():
    _request_context.request_id = None
    _request_context.user_id = None
    _request_context.path = None


class RequestIDMiddleware(MiddlewareMixin):
    """Attach a request id to the request, the thread context and the response."""

    REQUEST_ID_HEADER = 'HTTP_X_REQUEST_ID'
    RESPONSE_HEADER = 'X-Request-ID'

    def process_request(self, request):
        request_id = request.META.get(self.REQUEST_ID_HEADER)

        if request_id:
            try:
                uuid.UUID(request_id)
            except (ValueError, TypeError):
                request_id = str(uuid.uuid4())
        else:
            request_id = str(uuid.uuid4())

        user_id = None
        if hasattr(request, 'user') and request.user.is_authenticated:
            user_id = str(request.user.id)

        set_request_context(request_id, user_id=user_id, path=request.path)
        request.request_id = request_id
        return None

    def process_response(self, request, response):
        request_id = getattr(request, 'request_id', None)
        if request_id:
            response[self.RESPONSE_HEADER] = request_id

        clear_request_context()
        return response


class RequestIDFilter(logging.Filter):
    """Logging filter that adds ``request_id`` to every record."""

    def filter(self, record):
        record.request_id = get_request_id() or '-'
        return True


def celery_request_id_headers():
    """
    Headers to pass to Celery so the task logs under the caller's request id.

    Usage:
        task.apply_async(args=[...], headers=celery_request_id_headers())
    """
    request_id = get_request_id()
    if request_id:
        return {'request_id': request_id}
    return {}


def setup_celery_request_context(headers):
    """Restore the request id carried in Celery task headers."""
    request_id = headers.get('request_id')
    set_request_context(request_id or str(uuid.uuid4()))
