"""
Admin interface for the media library.
"""

from django.contrib import admin
from django.utils.html import format_html
from .models import Media


@admin.register(Media)
class MediaAdmin(admin.ModelAdmin):
    list_display = ['preview', 'alt', 'created_at']
    search_fields = ['alt']
    readonly_fields = ['id', 'created_at', 'updated_at', 'preview']

    def preview(self, obj):
        if not obj.url:
            return '-'
        return format_html('<img src="{}" alt="{}" style="max-height: 48px;" />', obj.url, obj.alt)
    preview.short_description = 'Preview'
