"""
Outbound webhook dispatch to the front-end build system.

A committed change becomes a ``WebhookEvent``. ``WebhookDispatcher`` decides
whether to send it and in which shape:

* remote destination (GitHub ``repository_dispatch``): the event is wrapped
  as ``{"event_type": "payload-update", "client_payload": {...}}`` and sent
  with the dispatch token;
* local destination (``localhost`` / loopback IP, for a test receiver): the
  event is posted flat, without credentials.

Dispatch is fire-and-forget: failures are logged and counted, never raised.
"""

import ipaddress
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

import requests
from django.conf import settings

from apps.core.metrics import increment_webhook_dispatch, observe_webhook_duration
from apps.core.observability import metrics

logger = logging.getLogger(__name__)

DEFAULT_WEBHOOK_URL = "https://api.github.com/repos/lcdb-dev/Front-End/dispatches"
DEFAULT_TIMEOUT = 10
DISPATCH_EVENT_TYPE = "payload-update"


@dataclass(frozen=True)
class WebhookConfig:
    """Dispatcher settings, resolved once and injected."""
    is_production: bool = False
    force_webhooks: bool = False
    webhook_url: str = DEFAULT_WEBHOOK_URL
    dispatch_token: str = ""
    timeout: float = DEFAULT_TIMEOUT

    @property
    def enabled(self) -> bool:
        return self.is_production or self.force_webhooks

    @classmethod
    def from_settings(cls) -> "WebhookConfig":
        return cls(
            is_production=bool(getattr(settings, 'WEBHOOKS_PRODUCTION', False)),
            force_webhooks=bool(getattr(settings, 'FORCE_WEBHOOKS', False)),
            webhook_url=getattr(settings, 'ASTRO_WEBHOOK_URL', '') or DEFAULT_WEBHOOK_URL,
            dispatch_token=getattr(settings, 'GITHUB_DISPATCH_TOKEN', '') or '',
            timeout=float(getattr(settings, 'WEBHOOK_TIMEOUT', DEFAULT_TIMEOUT)),
        )


@dataclass(frozen=True)
class WebhookEvent:
    """A committed change to one document."""
    collection: str
    operation: str
    id: Union[str, int]
    slug: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WebhookEvent":
        return cls(
            collection=data["collection"],
            operation=data["operation"],
            id=data["id"],
            slug=data.get("slug"),
        )


def is_local_destination(url: str) -> bool:
    """True for ``localhost`` or a loopback IP literal."""
    hostname = urlparse(url).hostname or ""
    if hostname == "localhost":
        return True
    try:
        return ipaddress.ip_address(hostname).is_loopback
    except ValueError:
        return False


class WebhookDispatcher:
    """
    Send webhook notifications for committed changes.

    Args:
        config: Resolved settings (``WebhookConfig.from_settings()``).
        session: HTTP session; a fresh ``requests.Session`` by default.
    """

    def __init__(self, config: WebhookConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    def build_request(self, event: WebhookEvent):
        """Return ``(body, headers)`` for the configured destination."""
        payload = event.to_dict()
        headers = {"Content-Type": "application/json"}

        if is_local_destination(self.config.webhook_url):
            return payload, headers

        headers["Accept"] = "application/vnd.github+json"
        headers["Authorization"] = f"token {self.config.dispatch_token}"
        return {"event_type": DISPATCH_EVENT_TYPE, "client_payload": payload}, headers

    def dispatch(self, event: WebhookEvent) -> None:
        """Send ``event``. Never raises."""
        label = event.slug or event.id

        if not self.config.enabled:
            logger.debug(
                "Webhook skipped in development for %s %s (set FORCE_WEBHOOKS=true to enable)",
                event.collection, event.operation,
            )
            self._count("skipped")
            return

        url = self.config.webhook_url
        local = is_local_destination(url)

        if not local and not self.config.dispatch_token:
            logger.warning("GITHUB_DISPATCH_TOKEN not set; skipping rebuild dispatch for %s", label)
            self._count("missing_token")
            return

        body, headers = self.build_request(event)

        try:
            with observe_webhook_duration(destination="local" if local else "remote"):
                response = self.session.post(url, json=body, headers=headers, timeout=self.config.timeout)
        except requests.RequestException as e:
            logger.error(
                "Webhook request error for %s %s: %s", event.collection, label, e,
                extra={"collection": event.collection, "error_type": type(e).__name__},
            )
            self._count("error")
            return

        if 200 <= response.status_code < 300:
            logger.info(
                "Webhook sent for %s %s: %s", event.collection, event.operation, label,
                extra={"collection": event.collection, "status_code": response.status_code},
            )
            self._count("sent")
            return

        logger.error(
            "Webhook failed with status %s for %s %s: %s",
            response.status_code, event.collection, label, response.text[:1000],
            extra={"collection": event.collection, "status_code": response.status_code},
        )
        self._count("failed")

    def _count(self, outcome: str) -> None:
        metrics.increment("webhooks.dispatch", tags={"outcome": outcome})
        increment_webhook_dispatch(outcome=outcome)
