"""
Signal receivers turning committed collection changes into webhook tasks.

Each ``post_save`` registers a ``transaction.on_commit`` callback, so the
notification only goes out once the write is durable; rolled-back writes
never notify.
"""

import logging

from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from apps.articles.models import Article
from apps.media.models import Media
from apps.taxonomy.models import Author, Category, Tag

from apps.core.middleware import celery_request_id_headers

from .dispatcher import WebhookEvent

logger = logging.getLogger(__name__)


def enqueue_webhook(event: WebhookEvent) -> None:
    """Queue delivery after the current transaction commits."""
    from .tasks import dispatch_webhook

    headers = celery_request_id_headers()

    def _send():
        try:
            dispatch_webhook.apply_async(args=[event.to_dict()], headers=headers)
        except Exception as e:
            # Broker unavailable; the write already succeeded.
            logger.error(
                "Could not enqueue webhook for %s %s: %s", event.collection, event.id, e,
                extra={"collection": event.collection, "error_type": type(e).__name__},
            )

    transaction.on_commit(_send)


def _operation(created):
    return 'create' if created else 'update'


def _notify(collection, instance, created, slug):
    enqueue_webhook(WebhookEvent(
        collection=collection,
        operation=_operation(created),
        id=str(instance.pk),
        slug=slug or None,
    ))


@receiver(post_save, sender=Article, dispatch_uid='webhooks.article_saved')
def article_saved(sender, instance, created, raw=False, **kwargs):
    if raw:
        return
    _notify('articles', instance, created, instance.slug)


@receiver(post_save, sender=Author, dispatch_uid='webhooks.author_saved')
def author_saved(sender, instance, created, raw=False, **kwargs):
    if raw:
        return
    _notify('authors', instance, created, instance.name)


@receiver(post_save, sender=Category, dispatch_uid='webhooks.category_saved')
def category_saved(sender, instance, created, raw=False, **kwargs):
    if raw:
        return
    _notify('categories', instance, created, instance.slug or instance.name)


@receiver(post_save, sender=Tag, dispatch_uid='webhooks.tag_saved')
def tag_saved(sender, instance, created, raw=False, **kwargs):
    if raw:
        return
    _notify('tags', instance, created, instance.slug or instance.name)


@receiver(post_save, sender=Media, dispatch_uid='webhooks.media_saved')
def media_saved(sender, instance, created, raw=False, **kwargs):
    if raw:
        return
    _notify('media', instance, created, None)
