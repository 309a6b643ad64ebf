"""
URL configuration for the LCDB content backend.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from apps.core.urls import auth_urlpatterns
from apps.articles.urls import preview_urlpatterns

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/auth/', include((auth_urlpatterns, 'auth'))),
    path('api/articles/', include('apps.articles.urls')),
    path('api/media/', include('apps.media.urls')),
    path('api/translate/', include('apps.translation.urls')),
    # Authors, categories, tags
    path('api/', include('apps.taxonomy.urls')),
    path('preview/', include((preview_urlpatterns, 'preview'))),
    # Observability endpoints
    path('', include('apps.core.urls')),
]

# Serve uploaded media in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

admin.site.site_header = "LCDB Administration"
admin.site.site_title = "LCDB Admin Portal"
admin.site.index_title = "Content management"
