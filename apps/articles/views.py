"""
Article API and authenticated preview.
"""

import logging

from django.contrib.auth.decorators import login_required
from django.shortcuts import get_object_or_404, render
from django_filters import rest_framework as filters
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticatedOrReadOnly

from apps.core.throttling import BurstThrottle

from .models import Article
from .preview import build_preview_context
from .serializers import ArticleSerializer

logger = logging.getLogger(__name__)


class ArticleFilter(filters.FilterSet):
    """Filters for the article list."""
    slug = filters.CharFilter(field_name='slug')
    lang = filters.CharFilter(field_name='lang')
    ready = filters.BooleanFilter(field_name='ready_for_publication')
    category = filters.CharFilter(field_name='categories__slug')
    tag = filters.CharFilter(field_name='tags__slug')
    date_after = filters.DateFilter(field_name='date', lookup_expr='gte')
    date_before = filters.DateFilter(field_name='date', lookup_expr='lte')

    class Meta:
        model = Article
        fields = ['slug', 'lang']


class ArticleViewSet(viewsets.ModelViewSet):
    """
    CRUD for articles.

    GET    /api/articles/             - List (``?slug=``, ``?lang=``, ``?ready=true``...)
    POST   /api/articles/             - Create (publication checklist enforced)
    GET    /api/articles/{id}/        - Retrieve
    PATCH  /api/articles/{id}/        - Update (checklist runs on merged state)
    DELETE /api/articles/{id}/        - Delete
    """

    queryset = Article.objects.select_related(
        'author', 'featured_media', 'seo_image'
    ).prefetch_related('categories', 'tags').distinct()
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_classes = [BurstThrottle]
    serializer_class = ArticleSerializer
    filterset_class = ArticleFilter
    ordering_fields = ['date', 'created_at', 'updated_at', 'title']
    ordering = ['-date', '-created_at']


@login_required
def article_preview(request, slug):
    """GET /preview/article/<slug>/ - render the article as readers will see it."""
    article = get_object_or_404(
        Article.objects.select_related('featured_media'),
        slug=slug,
    )
    logger.debug("Rendering preview for %s", slug, extra={"slug": slug})
    return render(request, 'articles/preview.html', build_preview_context(article))
