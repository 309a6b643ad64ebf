"""
Custom DRF router to avoid the converter registration conflict.

DRF's DefaultRouter uses format_suffix_patterns, which registers the
'drf_format_suffix' converter. With one router per app this raises
ValueError: "Converter 'drf_format_suffix' is already registered."
"""

from rest_framework.routers import DefaultRouter


class SafeDefaultRouter(DefaultRouter):
    """DefaultRouter without format suffix patterns."""
    include_format_suffixes = False
