"""
Author, category and tag APIs.

Reads are public; create/update/delete require an authenticated editor.
"""

from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticatedOrReadOnly

from .models import Author, Category, Tag
from .serializers import AuthorSerializer, CategorySerializer, TagSerializer


class AuthorViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticatedOrReadOnly]
    queryset = Author.objects.order_by('name')
    serializer_class = AuthorSerializer


class CategoryViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticatedOrReadOnly]
    queryset = Category.objects.order_by('name')
    serializer_class = CategorySerializer
    lookup_field = 'slug'


class TagViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticatedOrReadOnly]
    queryset = Tag.objects.order_by('name')
    serializer_class = TagSerializer
    lookup_field = 'slug'
