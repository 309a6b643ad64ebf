"""
Tests for health, metrics and auth endpoints, and the request id middleware.
"""

import uuid

import pytest

from apps.core.middleware import (
    RequestIDFilter,
    celery_request_id_headers,
    clear_request_context,
    get_request_id,
    set_request_context,
)
from apps.core.observability import metrics


@pytest.mark.django_db
class TestProbes:

    def test_livez(self, client):
        response = client.get('/livez/')

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    def test_readyz(self, client):
        response = client.get('/readyz/')

        assert response.status_code == 200
        assert response.json() == {"status": "ready"}

    def test_health(self, client):
        response = client.get('/health/')

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert set(body["checks"]) == {"database", "cache"}

    def test_unknown_health_check(self, client):
        response = client.get('/health/nope/')

        assert response.status_code == 503
        assert response.json()["message"] == "Unknown check: nope"

    def test_status_counts(self, client, media_with_alt):
        from apps.articles.models import Article
        Article.objects.create(title="Cake", slug="cake", ready_for_publication=True)
        Article.objects.create(title="Pie", slug="pie")

        body = client.get('/status/').json()

        assert body["stats"] == {"articles": 2, "ready_for_publication": 1, "media": 1}


@pytest.mark.django_db
class TestMetricsEndpoints:

    def test_in_process_metrics(self, client):
        metrics.increment('webhooks.dispatch', tags={'outcome': 'sent'})

        body = client.get('/metrics/').json()

        assert body["counters"] == {"webhooks.dispatch[outcome=sent]": 1}

    def test_prometheus_exposition(self, client):
        response = client.get('/metrics/prometheus/')

        assert response.status_code == 200
        assert response['Content-Type'].startswith('text/plain')
        assert b'lcdb_articles_ready' in response.content
        assert b'lcdb_webhook_dispatch_total' in response.content


class TestMetricsCollector:

    def test_counters_are_keyed_by_tags(self):
        metrics.increment('translation.requests', tags={'outcome': 'ok'})
        metrics.increment('translation.requests', tags={'outcome': 'ok'})
        metrics.increment('translation.requests', tags={'outcome': 'upstream_error'})

        assert metrics.get_counter('translation.requests', tags={'outcome': 'ok'}) == 2
        assert metrics.get_counter('translation.requests', tags={'outcome': 'upstream_error'}) == 1
        assert metrics.get_counter('translation.requests') == 0

    def test_timer_records_histogram(self):
        with metrics.timer('preview.render'):
            pass

        stats = metrics.get_all_metrics()["histograms"]["preview.render_duration_ms"]
        assert stats["count"] == 1


class TestRequestContext:

    def test_request_id_header_is_echoed(self, client, db):
        request_id = str(uuid.uuid4())

        response = client.get('/livez/', HTTP_X_REQUEST_ID=request_id)

        assert response['X-Request-ID'] == request_id

    def test_invalid_request_id_is_replaced(self, client, db):
        response = client.get('/livez/', HTTP_X_REQUEST_ID='not-a-uuid')

        generated = response['X-Request-ID']
        assert generated != 'not-a-uuid'
        uuid.UUID(generated)

    def test_context_is_cleared_after_response(self, client, db):
        client.get('/livez/')

        assert get_request_id() is None

    def test_celery_headers_and_log_filter(self):
        import logging

        set_request_context('abc')
        try:
            assert celery_request_id_headers() == {'request_id': 'abc'}
            record = logging.LogRecord('apps', logging.INFO, __file__, 1, 'msg', None, None)
            RequestIDFilter().filter(record)
            assert record.request_id == 'abc'
        finally:
            clear_request_context()

        assert celery_request_id_headers() == {}


@pytest.mark.django_db
class TestAuth:

    def test_login_returns_tokens_and_user(self, api_client, user):
        response = api_client.post(
            '/api/auth/login/', {"username": "editor", "password": "editor-pass-123"}, format='json'
        )

        assert response.status_code == 200
        body = response.json()
        assert body["access"] and body["refresh"]
        assert body["user"]["username"] == "editor"

    def test_login_with_wrong_password(self, api_client, user):
        response = api_client.post(
            '/api/auth/login/', {"username": "editor", "password": "wrong"}, format='json'
        )

        assert response.status_code == 401

    def test_me_with_bearer_token(self, api_client, user):
        access = api_client.post(
            '/api/auth/login/', {"username": "editor", "password": "editor-pass-123"}, format='json'
        ).json()["access"]
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {access}')

        response = api_client.get('/api/auth/me/')

        assert response.status_code == 200
        assert response.json()["email"] == "editor@example.com"

    def test_me_requires_authentication(self, api_client):
        assert api_client.get('/api/auth/me/').status_code == 401
