"""
Publication readiness checklist for articles.

``PublicationChecklistValidator`` inspects a merged article document (the
stored article plus incoming changes, keyed by the editor's field names) and
returns every rule violation as a ``ValidationIssue``. It never mutates the
document and only runs when ``readyForPublication`` is exactly ``True``.
"""

import logging
import re
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

from .blocks import (
    BlockError,
    BlockType,
    ImageGalleryBlock,
    RecipeCardBlock,
    as_list,
    iter_blocks,
    require_all_block_types,
)
from .richtext import has_rich_text_content

logger = logging.getLogger(__name__)

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

# Returns the stored media record (a mapping with ``alt``) or None.
MediaLookup = Callable[[str], Optional[Mapping[str, Any]]]


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "message": self.message}


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_blank_reference(value: Any) -> bool:
    return value is None or value == ""


def get_media_id(value: Any) -> Optional[str]:
    """Extract a media id from a bare id or a mapping with ``id``."""
    if isinstance(value, dict):
        value = value.get("id")
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int, uuid.UUID)):
        return str(value)
    return None


def get_inline_alt(value: Any) -> Optional[str]:
    if isinstance(value, dict) and is_non_empty_string(value.get("alt")):
        return value["alt"].strip()
    return None


class PublicationChecklistValidator:
    """
    Evaluate the "ready for publication" rules for one article document.

    Args:
        media_lookup: Callable resolving a media id to its stored record.
            Defaults to the database lookup in ``apps.media.lookup``.

    Usage:
        issues = PublicationChecklistValidator().validate(document)
        if issues:
            ...
    """

    def __init__(self, media_lookup: Optional[MediaLookup] = None):
        if media_lookup is None:
            from apps.media.lookup import fetch_media_by_id
            media_lookup = fetch_media_by_id
        self.media_lookup = media_lookup

    def validate(self, draft: Mapping[str, Any]) -> List[ValidationIssue]:
        """Return all checklist violations for ``draft``; empty means valid."""
        if draft.get("readyForPublication") is not True:
            return []

        issues: List[ValidationIssue] = []
        # Alt text resolved per media id, for this call only.
        alt_cache: Dict[str, Optional[str]] = {}

        self._check_identity(draft, issues)

        content_blocks = as_list(draft.get("contentBlocks"))
        recipe_blocks = as_list(draft.get("recipeBlocks"))
        image_blocks = as_list(draft.get("imageBlocks"))

        has_modern_rich_text = has_rich_text_content(draft.get("contentV2"))
        has_modern_content = (
            has_modern_rich_text or bool(content_blocks) or bool(recipe_blocks) or bool(image_blocks)
        )
        has_legacy_content = is_non_empty_string(draft.get("content"))

        if not has_modern_content and not has_legacy_content:
            issues.append(ValidationIssue(
                "contentV2",
                "Add content before publication (Rich Text, blocks, or legacy content fallback).",
            ))
            return issues

        if not has_modern_content:
            # Legacy-only articles are exempt from the modern content rules.
            return issues

        if not is_non_empty_string(draft.get("excerpt")):
            issues.append(ValidationIssue(
                "excerpt", "Short excerpt is required for modern content articles."
            ))

        if not (has_modern_rich_text or content_blocks or recipe_blocks):
            issues.append(ValidationIssue(
                "contentV2", "Add at least one paragraph/section/recipe block before publication."
            ))

        featured_media = draft.get("featuredMedia")
        if _is_blank_reference(featured_media):
            issues.append(ValidationIssue(
                "featuredMedia", "Featured media is required for modern content publication."
            ))
        else:
            self._ensure_media_alt(featured_media, "featuredMedia", "Featured media", alt_cache, issues)

        seo_image = draft.get("seoImage")
        if not _is_blank_reference(seo_image):
            self._ensure_media_alt(seo_image, "seoImage", "SEO image", alt_cache, issues)

        for field_name in ("contentBlocks", "recipeBlocks", "imageBlocks"):
            for index, block in iter_blocks(draft.get(field_name), field_name):
                path = f"{field_name}.{index}"
                if isinstance(block, BlockError):
                    issues.append(ValidationIssue(f"{path}.blockType", str(block)))
                    continue
                check = self._block_checks[block.block_type]
                check(self, block, path, alt_cache, issues)

        return issues

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    def _check_identity(self, draft, issues):
        if not is_non_empty_string(draft.get("title")):
            issues.append(ValidationIssue("title", "Title is required before publication."))

        slug = draft.get("slug")
        if not is_non_empty_string(slug):
            issues.append(ValidationIssue("slug", "Slug is required before publication."))
        elif not SLUG_PATTERN.match(slug.strip()):
            issues.append(ValidationIssue(
                "slug", "Use a URL-safe slug (lowercase letters, numbers, and hyphens only)."
            ))

        if not draft.get("date"):
            issues.append(ValidationIssue("date", "Publication date is required before publication."))

    def _check_text_block(self, block, path, alt_cache, issues):
        # Introductions and notes have no publication rules of their own.
        return None

    def _check_recipe_card(self, block: RecipeCardBlock, path, alt_cache, issues):
        if not is_non_empty_string(block.title):
            issues.append(ValidationIssue(f"{path}.title", "Recipe card title is required."))

        if not is_non_empty_string(block.servings):
            issues.append(ValidationIssue(f"{path}.servings", "Recipe servings are required."))

        if not block.ingredients:
            issues.append(ValidationIssue(f"{path}.ingredients", "Add at least one ingredient."))

        for index, ingredient in enumerate(block.ingredients):
            if not is_non_empty_string(ingredient.quantity):
                issues.append(ValidationIssue(
                    f"{path}.ingredients.{index}.quantity", "Ingredient quantity is required."
                ))
            if not is_non_empty_string(ingredient.item):
                issues.append(ValidationIssue(
                    f"{path}.ingredients.{index}.item", "Ingredient name is required."
                ))

        if not block.steps:
            issues.append(ValidationIssue(f"{path}.steps", "Add at least one preparation step."))

        for index, step in enumerate(block.steps):
            if not is_non_empty_string(step.instruction):
                issues.append(ValidationIssue(
                    f"{path}.steps.{index}.instruction", "Step instruction is required."
                ))

    def _check_image_gallery(self, block: ImageGalleryBlock, path, alt_cache, issues):
        if not block.images:
            issues.append(ValidationIssue(
                f"{path}.images", "Add at least one image in each gallery block."
            ))
            return

        for index, row in enumerate(block.images):
            self._ensure_media_alt(
                row.image, f"{path}.images.{index}.image", "Gallery image", alt_cache, issues
            )

    _block_checks = require_all_block_types({
        BlockType.INTRODUCTION: _check_text_block,
        BlockType.EDITORIAL_NOTE: _check_text_block,
        BlockType.RECIPE_CARD: _check_recipe_card,
        BlockType.IMAGE_GALLERY: _check_image_gallery,
    }, "PublicationChecklistValidator")

    # -------------------------------------------------------------------------
    # Media alt text
    # -------------------------------------------------------------------------

    def _ensure_media_alt(self, value, path, label, alt_cache, issues):
        if _is_blank_reference(value):
            return

        if get_inline_alt(value):
            return

        media_id = get_media_id(value)
        if not media_id:
            issues.append(ValidationIssue(path, f"{label} must reference a Media item."))
            return

        if not self._load_media_alt(media_id, alt_cache):
            issues.append(ValidationIssue(path, f"{label} is missing alt text in Media."))

    def _load_media_alt(self, media_id: str, alt_cache: Dict[str, Optional[str]]) -> Optional[str]:
        if media_id in alt_cache:
            return alt_cache[media_id]

        try:
            media = self.media_lookup(media_id)
        except Exception as e:
            logger.warning(
                "Media lookup failed for %s: %s", media_id, e,
                extra={"media_id": media_id, "error_type": type(e).__name__},
            )
            alt_cache[media_id] = None
            return None

        alt = media.get("alt") if media else None
        alt_cache[media_id] = alt.strip() if is_non_empty_string(alt) else None
        return alt_cache[media_id]
