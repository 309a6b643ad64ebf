"""
Pre-save hooks for articles.

``validate_article_publication_checklist`` runs before an article write is
persisted (DRF serializer ``validate`` and ``Article.clean`` for the admin).
It merges the stored document with the incoming changes, evaluates the
publication checklist and aborts the write with every issue at once.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from apps.core.exceptions import ErrorCode, ValidationError
from apps.core.metrics import increment_publication_checklist
from apps.core.observability import metrics

from .checklist import MediaLookup, PublicationChecklistValidator, ValidationIssue

logger = logging.getLogger(__name__)


class PublicationChecklistError(ValidationError):
    """The article is marked ready for publication but fails the checklist."""

    error_code = ErrorCode.PUBLICATION_CHECKLIST_FAILED
    default_detail = "Article is not ready for publication"

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = list(issues)
        super().__init__(
            message=self.default_detail,
            field=self.issues[0].path if self.issues else None,
            details={
                "collection": "articles",
                "issues": [issue.to_dict() for issue in self.issues],
            },
        )


def merge_documents(original_doc: Optional[Mapping[str, Any]], data: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Stored document overlaid with incoming changes (incoming keys win)."""
    merged: Dict[str, Any] = {}
    if isinstance(original_doc, Mapping):
        merged.update(original_doc)
    if isinstance(data, Mapping):
        merged.update(data)
    return merged


def validate_article_publication_checklist(
    data: Optional[Mapping[str, Any]],
    original_doc: Optional[Mapping[str, Any]] = None,
    media_lookup: Optional[MediaLookup] = None,
):
    """
    Run the publication checklist against ``original_doc`` + ``data``.

    Args:
        data: Incoming changes, keyed by document field names.
        original_doc: The stored document for updates, None for creates.
        media_lookup: Media resolver; defaults to the database lookup.

    Returns:
        ``data`` unchanged when the article passes (or is not marked ready).

    Raises:
        PublicationChecklistError: with all issues in ``details["issues"]``.
    """
    merged = merge_documents(original_doc, data)
    if merged.get("readyForPublication") is not True:
        return data

    with metrics.timer("articles.publication_checklist"):
        issues = PublicationChecklistValidator(media_lookup).validate(merged)
    if issues:
        metrics.increment("articles.publication_checklist", tags={"outcome": "failed"})
        increment_publication_checklist(outcome="failed", issue_count=len(issues))
        logger.info(
            "Publication checklist failed for %s with %d issue(s)",
            merged.get("slug") or "<no slug>", len(issues),
            extra={"slug": merged.get("slug"), "issue_count": len(issues)},
        )
        raise PublicationChecklistError(issues)

    metrics.increment("articles.publication_checklist", tags={"outcome": "passed"})
    increment_publication_checklist(outcome="passed")
    return data
