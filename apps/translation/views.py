"""
Translation proxy endpoint.

POST /api/translate/
    JSON:  {"targetLang": "fr", "texts": ["Hello", "World"]}
           (``target`` and ``target_lang`` are accepted for ``targetLang``)
    Form:  targetLang=fr&text=Hello&text=World
    200:   {"translations": ["Bonjour", "Monde"]}

OPTIONS /api/translate/ answers the CORS preflight with 204. Every response,
errors included, carries the CORS headers.
"""

import json
import logging

import requests
from django.http import QueryDict
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.exceptions import ErrorCode, ValidationError
from apps.core.throttling import TranslateEndpointThrottle

from .client import DeepLClient, normalize_target_lang

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'POST, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Max-Age': '86400',
}


def _clean_texts(values):
    texts = []
    for value in values:
        text = '' if value is None else str(value)
        text = text.strip()
        if text:
            texts.append(text)
    return texts


def parse_translation_request(raw: str, content_type: str):
    """
    Return ``(target_lang, texts)`` from a JSON or form-encoded body.

    Raises:
        ValidationError: The body is empty or is not valid JSON.
    """
    if not raw.strip():
        raise ValidationError(
            "Empty request body",
            code=ErrorCode.MISSING_FIELD,
            details={"content_type": content_type},
        )

    if 'application/x-www-form-urlencoded' in content_type or 'targetLang=' in raw:
        params = QueryDict(raw)
        target_lang = normalize_target_lang(params.get('targetLang', ''))
        return target_lang, _clean_texts(params.getlist('text') or params.getlist('texts'))

    try:
        body = json.loads(raw)
    except ValueError:
        raise ValidationError(
            "Invalid JSON body",
            code=ErrorCode.INVALID_FORMAT,
            details={"content_type": content_type, "body_preview": raw[:200]},
        )

    if not isinstance(body, dict):
        body = {}

    target_lang = normalize_target_lang(
        body.get('targetLang') or body.get('target') or body.get('target_lang')
    )
    texts = body.get('texts')
    return target_lang, _clean_texts(texts) if isinstance(texts, list) else []


class TranslateView(APIView):
    """Public proxy to DeepL for the front end."""

    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [TranslateEndpointThrottle]

    def finalize_response(self, request, response, *args, **kwargs):
        response = super().finalize_response(request, response, *args, **kwargs)
        for header, value in CORS_HEADERS.items():
            response[header] = value
        return response

    def options(self, request, *args, **kwargs):
        return Response(status=status.HTTP_204_NO_CONTENT)

    def post(self, request):
        with requests.Session() as session:
            return self._translate(request, DeepLClient.from_settings(session=session))

    def _translate(self, request, client):
        raw = request.body.decode('utf-8', errors='replace')
        target_lang, texts = parse_translation_request(raw, request.content_type or '')

        if not target_lang:
            raise ValidationError("targetLang is required", code=ErrorCode.MISSING_FIELD, field='targetLang')

        if not texts:
            raise ValidationError("texts must be a non-empty array", code=ErrorCode.INVALID_VALUE, field='texts')

        translations = client.translate(texts, target_lang)
        logger.info(
            "Translated %d text(s) to %s", len(texts), target_lang,
            extra={"target_lang": target_lang, "text_count": len(texts)},
        )
        return Response({"translations": translations})
