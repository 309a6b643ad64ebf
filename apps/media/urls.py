"""
Media library API URLs.
"""

from django.urls import path, include
from config.routers import SafeDefaultRouter
from .views import MediaViewSet

app_name = 'media'

router = SafeDefaultRouter()
router.register(r'', MediaViewSet, basename='media')

urlpatterns = [
    path('', include(router.urls)),
]
