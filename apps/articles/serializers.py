"""
Article serializers.

Fields use the editor's document names (``contentV2``, ``featuredMedia``...)
so API clients and the publication checklist share one vocabulary.
"""

import datetime

from django.db import models
from rest_framework import serializers

from apps.media.models import Media
from apps.taxonomy.models import Author, Category, Tag

from .blocks import block_schema_errors
from .hooks import validate_article_publication_checklist
from .models import Article, DOCUMENT_FIELDS


def _document_value(value):
    """Convert a validated field value back to its document form."""
    if isinstance(value, models.Model):
        return str(value.pk)
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return value


class ArticleSerializer(serializers.ModelSerializer):
    contentV2 = serializers.JSONField(source='content_v2', required=False, allow_null=True)
    contentBlocks = serializers.JSONField(source='content_blocks', required=False)
    recipeBlocks = serializers.JSONField(source='recipe_blocks', required=False)
    imageBlocks = serializers.JSONField(source='image_blocks', required=False)
    featuredImage = serializers.JSONField(source='featured_image', required=False)
    featuredMedia = serializers.PrimaryKeyRelatedField(
        source='featured_media', queryset=Media.objects.all(), required=False, allow_null=True
    )
    seoImage = serializers.PrimaryKeyRelatedField(
        source='seo_image', queryset=Media.objects.all(), required=False, allow_null=True
    )
    author = serializers.PrimaryKeyRelatedField(
        queryset=Author.objects.all(), required=False, allow_null=True
    )
    categories = serializers.SlugRelatedField(
        slug_field='slug', queryset=Category.objects.all(), many=True, required=False
    )
    tags = serializers.SlugRelatedField(
        slug_field='slug', queryset=Tag.objects.all(), many=True, required=False
    )
    readyForPublication = serializers.BooleanField(source='ready_for_publication', required=False)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Article
        fields = [
            'id',
            'title',
            'slug',
            'lang',
            'excerpt',
            'content',
            'contentV2',
            'contentBlocks',
            'recipeBlocks',
            'imageBlocks',
            'date',
            'modified',
            'link',
            'featuredImage',
            'featuredMedia',
            'seoImage',
            'author',
            'categories',
            'tags',
            'readyForPublication',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = ['id']

    def _validate_block_list(self, value, field_name):
        if value is None:
            return []
        if not isinstance(value, list):
            raise serializers.ValidationError("Expected a list of blocks.")
        errors = block_schema_errors(value, field_name)
        if errors:
            raise serializers.ValidationError(errors)
        return value

    def validate_slug(self, value):
        # Blank slugs become NULL; the unique constraint ignores NULLs.
        if value is None or not value.strip():
            return None
        return value

    def validate_contentBlocks(self, value):
        return self._validate_block_list(value, "contentBlocks")

    def validate_recipeBlocks(self, value):
        return self._validate_block_list(value, "recipeBlocks")

    def validate_imageBlocks(self, value):
        return self._validate_block_list(value, "imageBlocks")

    def validate_featuredImage(self, value):
        if value in (None, ''):
            return {}
        if not isinstance(value, dict):
            raise serializers.ValidationError("Expected an object with url, width, height, alt and id.")
        return value

    def validate(self, attrs):
        """Run the publication checklist before anything is saved."""
        original = self.instance.to_document() if self.instance else None
        incoming = {
            document_key: _document_value(attrs[field_name])
            for document_key, field_name in DOCUMENT_FIELDS.items()
            if field_name in attrs
        }
        validate_article_publication_checklist(incoming, original)
        return attrs
