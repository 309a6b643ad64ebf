"""
HTML rendering for the authenticated article preview.

Blocks are rendered through a table keyed by ``BlockType`` that must cover
every variant; gallery images are resolved from the media library in one
query.
"""

import logging
import uuid

from django.utils.html import format_html, format_html_join
from django.utils.safestring import mark_safe

from apps.core.observability import metrics
from apps.media.models import Media

from .blocks import (
    BLOCK_FIELDS,
    BlockError,
    BlockType,
    EditorialNoteBlock,
    ImageGalleryBlock,
    IntroductionBlock,
    RecipeCardBlock,
    iter_blocks,
    require_all_block_types,
)
from .checklist import get_media_id
from .models import DOCUMENT_FIELDS
from .richtext import has_rich_text_content, render_rich_text

logger = logging.getLogger(__name__)


def _read_text(value, fallback=''):
    if value is None or value == '':
        return fallback
    return str(value)


def render_introduction(block: IntroductionBlock, media_map) -> str:
    return format_html(
        '<section class="preview-block"><h2>{}</h2>{}</section>',
        _read_text(block.title, 'Introduction'),
        render_rich_text(block.body),
    )


def render_editorial_note(block: EditorialNoteBlock, media_map) -> str:
    kicker = format_html('<p class="preview-kicker">{}</p>', block.tone.value) if block.tone else ''
    return format_html(
        '<section class="preview-block preview-note"><h3>{}</h3>{}{}</section>',
        _read_text(block.title, 'Notes'),
        kicker,
        render_rich_text(block.body),
    )


def render_recipe_card(block: RecipeCardBlock, media_map) -> str:
    meta = format_html(
        '<div class="preview-recipe-meta"><span>Prep: {} min</span><span>Cook: {} min</span>'
        '<span>Difficulty: {}</span><span>{}</span></div>',
        _read_text(block.preparation_time_minutes, '0'),
        _read_text(block.cooking_time_minutes, '0'),
        block.difficulty.value if block.difficulty else 'medium',
        _read_text(block.servings, 'Servings not set'),
    )

    ingredients = ''
    if block.ingredients:
        items = format_html_join(
            '', '<li><strong>{}</strong> {}{}</li>',
            (
                (
                    ingredient.quantity or '',
                    ingredient.item or '',
                    f" ({ingredient.notes})" if ingredient.notes else '',
                )
                for ingredient in block.ingredients
            ),
        )
        ingredients = format_html('<h3>Ingredients</h3><ul>{}</ul>', items)

    steps = ''
    if block.steps:
        items = format_html_join('', '<li>{}</li>', ((step.instruction or '',) for step in block.steps))
        steps = format_html('<h3>Steps</h3><ol>{}</ol>', items)

    return format_html(
        '<section class="preview-block preview-recipe"><h2>{}</h2>{}{}{}{}{}</section>',
        _read_text(block.title, 'Recipe card'),
        meta,
        ingredients,
        steps,
        render_rich_text(block.tips),
        render_rich_text(block.personal_notes),
    )


def render_image_gallery(block: ImageGalleryBlock, media_map) -> str:
    figures = []
    for row in block.images:
        media = media_map.get(get_media_id(row.image) or '')
        if media is None or not media.url:
            continue
        caption = format_html('<figcaption>{}</figcaption>', row.caption) if row.caption else ''
        figures.append(format_html('<figure><img alt="{}" src="{}">{}</figure>', media.alt, media.url, caption))

    return format_html(
        '<section class="preview-block"><h2>{}</h2><div class="preview-gallery">{}</div></section>',
        _read_text(block.title, 'Image gallery'),
        mark_safe(''.join(figures)),
    )


BLOCK_RENDERERS = require_all_block_types({
    BlockType.INTRODUCTION: render_introduction,
    BlockType.EDITORIAL_NOTE: render_editorial_note,
    BlockType.RECIPE_CARD: render_recipe_card,
    BlockType.IMAGE_GALLERY: render_image_gallery,
}, "article preview")


def _gallery_media(article):
    media_ids = set()
    for _, block in iter_blocks(article.image_blocks, 'imageBlocks'):
        if isinstance(block, ImageGalleryBlock):
            media_ids.update(filter(None, (get_media_id(row.image) for row in block.images)))

    pks = {}
    for media_id in media_ids:
        try:
            pks[media_id] = uuid.UUID(media_id)
        except ValueError:
            logger.warning("Skipping gallery media with malformed id %s", media_id)
    if not pks:
        return {}

    found = {media.pk: media for media in Media.objects.filter(pk__in=pks.values())}
    return {media_id: found[pk] for media_id, pk in pks.items() if pk in found}


def render_blocks(article, media_map) -> str:
    html = []
    for field_name in BLOCK_FIELDS:
        for index, block in iter_blocks(getattr(article, DOCUMENT_FIELDS[field_name]), field_name):
            if isinstance(block, BlockError):
                logger.warning("Preview skipped %s.%d: %s", field_name, index, block)
                continue
            html.append(BLOCK_RENDERERS[block.block_type](block, media_map))
    return mark_safe(''.join(html))


def build_preview_context(article):
    """Template context for ``articles/preview.html``."""
    featured_image = article.featured_image if isinstance(article.featured_image, dict) else {}
    featured = article.featured_media

    featured_url = (featured.url if featured else '') or featured_image.get('url') or ''
    featured_alt = (featured.alt if featured else '') or featured_image.get('alt') or article.title

    has_modern_content = has_rich_text_content(article.content_v2) or any(
        getattr(article, DOCUMENT_FIELDS[field_name]) for field_name in BLOCK_FIELDS
    )

    if has_modern_content:
        with metrics.timer('articles.preview_render'):
            body = format_html(
                '{}{}',
                render_rich_text(article.content_v2),
                render_blocks(article, _gallery_media(article)),
            )
    else:
        # Legacy content is stored HTML authored in the CMS.
        body = mark_safe(article.content or '')

    return {
        'article': article,
        'featured_url': featured_url,
        'featured_alt': featured_alt,
        'has_modern_content': has_modern_content,
        'body': body,
    }

