"""
Admin interface for Article management.

Saving through the admin runs ``Article.clean()``, so the publication
checklist errors show up on the form fields they belong to.
"""

from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html
from .models import Article


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    list_display = [
        'title_short',
        'slug',
        'lang',
        'date',
        'ready_badge',
        'updated_at',
    ]

    list_filter = [
        'ready_for_publication',
        'lang',
        ('date', admin.DateFieldListFilter),
    ]

    search_fields = ['title', 'slug', 'excerpt']

    readonly_fields = ['id', 'created_at', 'updated_at', 'preview_link']

    raw_id_fields = ['featured_media', 'seo_image', 'author']

    filter_horizontal = ['categories', 'tags']

    date_hierarchy = 'date'

    fieldsets = (
        ('Basic Information', {
            'fields': ('id', 'title', 'slug', 'lang', 'date', 'modified', 'link', 'author')
        }),
        ('Content', {
            'fields': ('excerpt', 'content_v2', 'content_blocks', 'recipe_blocks', 'image_blocks')
        }),
        ('Media', {
            'fields': ('featured_media', 'seo_image', 'featured_image')
        }),
        ('Taxonomy', {
            'fields': ('categories', 'tags')
        }),
        ('Legacy Content', {
            'fields': ('content',),
            'classes': ('collapse',)
        }),
        ('Publication', {
            'fields': ('ready_for_publication', 'preview_link', 'created_at', 'updated_at')
        }),
    )

    def title_short(self, obj):
        title = obj.title or '(untitled)'
        if len(title) > 60:
            return title[:60] + '...'
        return title
    title_short.short_description = 'Title'

    def ready_badge(self, obj):
        color = '#28a745' if obj.ready_for_publication else '#6c757d'
        label = 'Ready' if obj.ready_for_publication else 'Draft'
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px;">{}</span>',
            color, label
        )
    ready_badge.short_description = 'Status'

    def preview_link(self, obj):
        if not obj.slug:
            return '-'
        url = reverse('preview:article-preview', args=[obj.slug])
        return format_html('<a href="{}" target="_blank">Open preview</a>', url)
    preview_link.short_description = 'Preview'
