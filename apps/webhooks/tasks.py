"""
Celery task delivering webhook notifications outside the request cycle.
"""

import logging

import requests
from celery import shared_task

from .dispatcher import WebhookConfig, WebhookDispatcher, WebhookEvent

logger = logging.getLogger(__name__)


@shared_task(ignore_result=True)
def dispatch_webhook(event_data: dict):
    """Deliver one webhook. Failures are logged by the dispatcher, never retried."""
    event = WebhookEvent.from_dict(event_data)
    logger.debug("Delivering webhook for %s %s", event.collection, event.operation)
    with requests.Session() as session:
        WebhookDispatcher(WebhookConfig.from_settings(), session=session).dispatch(event)
