"""
Taxonomy API URLs - mounted at /api/ in main urls.py.
"""

from django.urls import path, include
from config.routers import SafeDefaultRouter
from .views import AuthorViewSet, CategoryViewSet, TagViewSet

app_name = 'taxonomy'

router = SafeDefaultRouter()
router.register(r'authors', AuthorViewSet, basename='author')
router.register(r'categories', CategoryViewSet, basename='category')
router.register(r'tags', TagViewSet, basename='tag')

urlpatterns = [
    path('', include(router.urls)),
]
