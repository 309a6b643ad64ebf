"""
Tests for the post-commit webhook wiring.
"""

import logging
from unittest.mock import patch

import pytest

from apps.articles.models import Article
from apps.core.middleware import clear_request_context, set_request_context
from apps.media.models import Media
from apps.taxonomy.models import Author, Category, Tag
from apps.webhooks.dispatcher import WebhookEvent
from apps.webhooks.tasks import dispatch_webhook


@pytest.fixture
def mock_apply():
    with patch('apps.webhooks.tasks.dispatch_webhook.apply_async') as mock:
        yield mock


def sent_event(mock_apply):
    return mock_apply.call_args[1]["args"][0]


@pytest.mark.django_db
class TestPostSaveWiring:

    @pytest.mark.parametrize("factory, collection, expected_slug", [
        (lambda: Article.objects.create(title="Cake", slug="cake"), "articles", "cake"),
        (lambda: Author.objects.create(name="Julia"), "authors", "Julia"),
        (lambda: Category.objects.create(name="Desserts", slug="desserts"), "categories", "desserts"),
        (lambda: Tag.objects.create(name="Chocolate", slug="chocolate"), "tags", "chocolate"),
        (lambda: Media.objects.create(alt="Photo"), "media", None),
    ])
    def test_create_enqueues_one_event(
        self, factory, collection, expected_slug, mock_apply, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            instance = factory()

        mock_apply.assert_called_once()
        assert sent_event(mock_apply) == {
            "collection": collection,
            "operation": "create",
            "id": str(instance.pk),
            "slug": expected_slug,
        }

    def test_update_operation(self, mock_apply, django_capture_on_commit_callbacks):
        category = Category.objects.create(name="Desserts", slug="desserts")

        with django_capture_on_commit_callbacks(execute=True):
            category.description = "Sweet things"
            category.save()

        assert sent_event(mock_apply)["operation"] == "update"

    def test_nothing_sent_before_commit(self, mock_apply, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            Tag.objects.create(name="Quick", slug="quick")

        assert len(callbacks) == 1
        mock_apply.assert_not_called()

    def test_request_id_travels_with_task(self, mock_apply, django_capture_on_commit_callbacks):
        set_request_context('3f2b8c1e-0000-4000-8000-000000000001')
        try:
            with django_capture_on_commit_callbacks(execute=True):
                Tag.objects.create(name="Quick", slug="quick")
        finally:
            clear_request_context()

        assert mock_apply.call_args[1]["headers"] == {
            'request_id': '3f2b8c1e-0000-4000-8000-000000000001',
        }

    def test_enqueue_failure_is_logged(self, mock_apply, django_capture_on_commit_callbacks, caplog):
        mock_apply.side_effect = ConnectionError("broker down")

        with caplog.at_level(logging.ERROR, logger="apps.webhooks.signals"):
            with django_capture_on_commit_callbacks(execute=True):
                Author.objects.create(name="Julia")

        assert "Could not enqueue webhook" in caplog.text


class TestDispatchTask:

    def test_task_builds_dispatcher_from_settings(self, settings):
        settings.FORCE_WEBHOOKS = False
        settings.WEBHOOKS_PRODUCTION = False

        with patch('apps.webhooks.tasks.WebhookDispatcher.dispatch') as mock_dispatch:
            dispatch_webhook({"collection": "tags", "operation": "update", "id": "t1", "slug": "quick"})

        mock_dispatch.assert_called_once_with(
            WebhookEvent(collection="tags", operation="update", id="t1", slug="quick")
        )

    def test_task_closes_its_session(self, settings):
        settings.FORCE_WEBHOOKS = True
        settings.ASTRO_WEBHOOK_URL = 'http://localhost:4321/api/rebuild'

        with patch('requests.Session.post') as mock_post, patch('requests.Session.close') as mock_close:
            mock_post.return_value.status_code = 200
            dispatch_webhook({"collection": "tags", "operation": "update", "id": "t1", "slug": "quick"})

        mock_post.assert_called_once()
        mock_close.assert_called_once_with()

    def test_worker_runs_without_a_beat_scheduler(self, settings):
        from config.celery import app

        assert app.conf.task_routes['apps.webhooks.tasks.*'] == {'queue': 'webhooks'}
        assert 'django_celery_beat' not in settings.INSTALLED_APPS
        assert not hasattr(settings, 'CELERY_BEAT_SCHEDULER')
