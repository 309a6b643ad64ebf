"""
Media library API.

GET    /api/media/        - List media (public)
POST   /api/media/        - Upload media (authenticated, multipart or JSON)
GET    /api/media/{id}/   - Media detail (public)
PATCH  /api/media/{id}/   - Update alt text / file (authenticated)
DELETE /api/media/{id}/   - Delete (authenticated)
"""

from rest_framework import viewsets
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticatedOrReadOnly

from .models import Media
from .serializers import MediaSerializer


class MediaViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticatedOrReadOnly]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    queryset = Media.objects.order_by('-created_at')
    serializer_class = MediaSerializer
