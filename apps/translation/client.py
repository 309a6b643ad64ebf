"""
DeepL API client.

Texts are sent form-encoded (``auth_key``, ``target_lang`` and one ``text``
per item); the provider answers ``{"translations": [{"text": ...}, ...]}``.
"""

import logging
from typing import List, Optional

import requests
from django.conf import settings

from apps.core.exceptions import ConfigurationError, UpstreamError
from apps.core.metrics import increment_translation_request, observe_translation_duration
from apps.core.observability import metrics

logger = logging.getLogger(__name__)

DEFAULT_DEEPL_URL = 'https://api.deepl.com/v2/translate'
DEFAULT_TIMEOUT = 20

# Site language codes that differ from DeepL's upper-cased form.
LANGUAGE_MAP = {
    'en': 'EN',
    'fr': 'FR',
    'es': 'ES',
    'pt-br': 'PT-BR',
    'ar': 'AR',
}


def normalize_target_lang(value) -> Optional[str]:
    """Map a site language code to a DeepL ``target_lang``; None if empty."""
    if not value or not isinstance(value, str):
        return None
    lowered = value.lower()
    return LANGUAGE_MAP.get(lowered, value.upper())


class DeepLClient:
    """
    Thin wrapper around the DeepL translate endpoint.

    Raises:
        UpstreamError: DeepL answered non-2xx, sent an unreadable body, or
            could not be reached.
    """

    def __init__(self, api_key: str, api_url: str = DEFAULT_DEEPL_URL,
                 timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, session: Optional[requests.Session] = None) -> 'DeepLClient':
        api_key = getattr(settings, 'DEEPL_API_KEY', '')
        if not api_key:
            raise ConfigurationError("DEEPL_API_KEY not configured")
        return cls(
            api_key=api_key,
            api_url=getattr(settings, 'DEEPL_API_URL', '') or DEFAULT_DEEPL_URL,
            timeout=float(getattr(settings, 'DEEPL_TIMEOUT', DEFAULT_TIMEOUT)),
            session=session,
        )

    def translate(self, texts: List[str], target_lang: str) -> List[str]:
        params = [('auth_key', self.api_key), ('target_lang', target_lang)]
        params.extend(('text', text) for text in texts)

        try:
            with observe_translation_duration():
                response = self.session.post(self.api_url, data=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("DeepL request error: %s", e, extra={"error_type": type(e).__name__})
            _count("transport_error")
            raise UpstreamError("DeepL request failed", details={"error": str(e)})

        if not response.ok:
            logger.error(
                "DeepL request failed with status %s: %s", response.status_code, response.text[:500],
                extra={"status_code": response.status_code},
            )
            _count("upstream_error")
            raise UpstreamError(
                "DeepL request failed",
                details={"status": response.status_code, "body": response.text},
            )

        try:
            data = response.json()
        except ValueError:
            _count("upstream_error")
            raise UpstreamError("DeepL returned an invalid response", details={"body": response.text[:500]})

        translations = data.get('translations') if isinstance(data, dict) else None
        _count("ok")
        if not isinstance(translations, list):
            return []
        return [item.get('text') if isinstance(item, dict) else None for item in translations]


def _count(outcome):
    metrics.increment('translation.requests', tags={'outcome': outcome})
    increment_translation_request(outcome=outcome)
