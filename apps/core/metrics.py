"""
Prometheus metrics for the LCDB content backend.

Metrics included:
- lcdb_publication_checklist_total: checklist evaluations by outcome
- lcdb_publication_checklist_issues: issues reported per failed evaluation
- lcdb_webhook_dispatch_total: webhook dispatches by outcome
- lcdb_webhook_dispatch_duration_seconds: outbound webhook call duration
- lcdb_translation_requests_total: DeepL proxy calls by outcome
- lcdb_translation_duration_seconds: DeepL call duration
- lcdb_articles_ready: articles currently marked ready for publication

Cardinality Guidelines:
- Labels are bounded enums (outcome, destination)
- Never label with slugs, ids, URLs or language codes from requests

Usage:
    from apps.core.metrics import increment_webhook_dispatch
    increment_webhook_dispatch(outcome='sent')

Exposed at /metrics/prometheus/ (``metrics_view``).
"""

import time
from contextlib import contextmanager
import logging

from prometheus_client import Counter, Gauge, Histogram, generate_latest, CONTENT_TYPE_LATEST

logger = logging.getLogger(__name__)


# ============================================================================
# Metric Definitions
# ============================================================================

publication_checklist_total = Counter(
    'lcdb_publication_checklist_total',
    'Publication checklist evaluations',
    ['outcome']  # outcome: passed/failed
)

publication_checklist_issues = Histogram(
    'lcdb_publication_checklist_issues',
    'Issues reported per failed checklist evaluation',
    buckets=[1, 2, 3, 5, 10, 25, 50]
)

webhook_dispatch_total = Counter(
    'lcdb_webhook_dispatch_total',
    'Webhook dispatch attempts',
    ['outcome']  # outcome: sent/failed/error/skipped/missing_token
)

webhook_dispatch_duration_seconds = Histogram(
    'lcdb_webhook_dispatch_duration_seconds',
    'Outbound webhook request duration',
    ['destination'],  # destination: local/remote
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0]
)

translation_requests_total = Counter(
    'lcdb_translation_requests_total',
    'Translation proxy calls to DeepL',
    ['outcome']  # outcome: ok/upstream_error/transport_error
)

translation_duration_seconds = Histogram(
    'lcdb_translation_duration_seconds',
    'DeepL request duration',
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 20.0]
)

articles_ready = Gauge(
    'lcdb_articles_ready',
    'Articles marked ready for publication'
)


# ============================================================================
# Helper Functions
# ============================================================================

def increment_publication_checklist(outcome='passed', issue_count=0):
    """Count a checklist evaluation; failed ones also record the issue count."""
    publication_checklist_total.labels(outcome=outcome).inc()
    if issue_count:
        publication_checklist_issues.observe(issue_count)


def increment_webhook_dispatch(outcome='sent'):
    webhook_dispatch_total.labels(outcome=outcome).inc()


def increment_translation_request(outcome='ok'):
    translation_requests_total.labels(outcome=outcome).inc()


# ============================================================================
# Context Managers
# ============================================================================

@contextmanager
def observe_webhook_duration(destination='remote'):
    """Time an outbound webhook request."""
    start = time.time()
    try:
        yield
    finally:
        webhook_dispatch_duration_seconds.labels(destination=destination).observe(time.time() - start)


@contextmanager
def observe_translation_duration():
    """Time a DeepL request."""
    start = time.time()
    try:
        yield
    finally:
        translation_duration_seconds.observe(time.time() - start)


# ============================================================================
# Metrics View
# ============================================================================

def metrics_view(request):
    """
    Django view to expose Prometheus metrics.

    Returns metrics in Prometheus text format.
    """
    from django.db import DatabaseError
    from django.http import HttpResponse
    from apps.articles.models import Article

    # Update gauge metrics before generating output
    try:
        articles_ready.set(Article.objects.filter(ready_for_publication=True).count())
    except DatabaseError as e:
        logger.warning("Could not refresh articles_ready gauge: %s", e)

    return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
