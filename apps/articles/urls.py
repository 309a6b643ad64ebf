"""
Articles API URLs.

/api/articles/ (router) and /preview/article/<slug>/ (preview_urlpatterns).
"""

from django.urls import path, include
from config.routers import SafeDefaultRouter
from .views import ArticleViewSet, article_preview

app_name = 'articles'

router = SafeDefaultRouter()
router.register(r'', ArticleViewSet, basename='article')

urlpatterns = [
    path('', include(router.urls)),
]

preview_urlpatterns = [
    path('article/<str:slug>/', article_preview, name='article-preview'),
]
