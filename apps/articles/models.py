"""
Article model for the LCDB content backend.
Stores editorial articles: legacy HTML content plus the modern rich-text
body and content blocks.
"""

from django.core.exceptions import NON_FIELD_ERRORS, ValidationError as DjangoValidationError
from django.db import models
from apps.core.models import BaseModel

from .blocks import BLOCK_FIELDS, block_schema_errors


# Document (editor) field name -> model field name.
DOCUMENT_FIELDS = {
    'title': 'title',
    'slug': 'slug',
    'lang': 'lang',
    'excerpt': 'excerpt',
    'content': 'content',
    'contentV2': 'content_v2',
    'contentBlocks': 'content_blocks',
    'recipeBlocks': 'recipe_blocks',
    'imageBlocks': 'image_blocks',
    'date': 'date',
    'modified': 'modified',
    'link': 'link',
    'featuredImage': 'featured_image',
    'featuredMedia': 'featured_media',
    'seoImage': 'seo_image',
    'readyForPublication': 'ready_for_publication',
}


class Article(BaseModel):
    """
    An article published on the front end.

    ``to_document()`` exposes the article under the editor's field names,
    which is the shape the publication checklist and webhooks work with.
    """

    title = models.CharField(
        max_length=500,
        blank=True,
        verbose_name='Title'
    )

    slug = models.CharField(
        max_length=255,
        unique=True,
        null=True,
        blank=True,
        verbose_name='Slug',
        help_text='URL-safe identifier: lowercase letters, numbers and hyphens'
    )

    lang = models.CharField(
        max_length=10,
        default='en',
        verbose_name='Language'
    )

    excerpt = models.TextField(
        blank=True,
        verbose_name='Short Excerpt'
    )

    # Legacy body, kept for articles imported before rich text existed
    content = models.TextField(
        blank=True,
        verbose_name='Full Content (HTML/Text)'
    )

    content_v2 = models.JSONField(
        null=True,
        blank=True,
        verbose_name='Content',
        help_text='Rich text document'
    )

    content_blocks = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Content Blocks',
        help_text='Introduction and editorial note blocks'
    )

    recipe_blocks = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Recipe Blocks'
    )

    image_blocks = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Image Galleries'
    )

    date = models.DateField(
        null=True,
        blank=True,
        db_index=True,
        verbose_name='Publication Date'
    )

    modified = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name='Last Modified'
    )

    link = models.URLField(
        max_length=1000,
        blank=True,
        verbose_name='Original Link'
    )

    # Legacy featured image group: url, width, height, alt, id
    featured_image = models.JSONField(
        default=dict,
        blank=True,
        verbose_name='Featured Image (legacy)'
    )

    featured_media = models.ForeignKey(
        'media.Media',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='featured_in_articles',
        verbose_name='Featured Media'
    )

    seo_image = models.ForeignKey(
        'media.Media',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='seo_for_articles',
        verbose_name='SEO Image'
    )

    author = models.ForeignKey(
        'taxonomy.Author',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='articles',
        verbose_name='Author'
    )

    categories = models.ManyToManyField(
        'taxonomy.Category',
        blank=True,
        related_name='articles',
        verbose_name='Categories'
    )

    tags = models.ManyToManyField(
        'taxonomy.Tag',
        blank=True,
        related_name='articles',
        verbose_name='Tags'
    )

    ready_for_publication = models.BooleanField(
        default=False,
        db_index=True,
        verbose_name='Ready for Publication',
        help_text='Enforces the publication checklist on save'
    )

    class Meta:
        db_table = 'articles'
        ordering = ['-date', '-created_at']

    def __str__(self):
        return self.title or self.slug or str(self.id)

    def to_document(self):
        """Return the article keyed by editor field names."""
        return {
            'title': self.title,
            'slug': self.slug,
            'lang': self.lang,
            'excerpt': self.excerpt,
            'content': self.content,
            'contentV2': self.content_v2,
            'contentBlocks': self.content_blocks or [],
            'recipeBlocks': self.recipe_blocks or [],
            'imageBlocks': self.image_blocks or [],
            'date': self.date.isoformat() if self.date else None,
            'modified': self.modified.isoformat() if self.modified else None,
            'link': self.link,
            'featuredImage': self.featured_image or {},
            'featuredMedia': str(self.featured_media_id) if self.featured_media_id else None,
            'seoImage': str(self.seo_image_id) if self.seo_image_id else None,
            'readyForPublication': self.ready_for_publication,
        }

    def clean(self):
        """
        Enforce the block schema and the publication checklist for admin forms.

        Issues are reported against the model field they belong to; nested
        block paths keep their full locator in the message.
        """
        from .hooks import PublicationChecklistError, validate_article_publication_checklist

        super().clean()

        schema_errors = {}
        for document_key in BLOCK_FIELDS:
            field_name = DOCUMENT_FIELDS[document_key]
            for path, messages in block_schema_errors(getattr(self, field_name), document_key).items():
                schema_errors.setdefault(field_name, []).extend(
                    f"{document_key}.{path}: {message}" for message in messages
                )
        if schema_errors:
            raise DjangoValidationError(schema_errors)

        try:
            validate_article_publication_checklist(self.to_document())
        except PublicationChecklistError as exc:
            errors = {}
            for issue in exc.issues:
                root, _, rest = issue.path.partition('.')
                field_name = DOCUMENT_FIELDS.get(root, NON_FIELD_ERRORS)
                message = f"{issue.path}: {issue.message}" if rest else issue.message
                errors.setdefault(field_name, []).append(message)
            raise DjangoValidationError(errors)
