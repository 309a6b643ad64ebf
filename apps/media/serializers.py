"""
Media serializers.
"""

from rest_framework import serializers
from .models import Media


class MediaSerializer(serializers.ModelSerializer):
    url = serializers.CharField(read_only=True)

    class Meta:
        model = Media
        fields = [
            'id',
            'alt',
            'file',
            'url',
            'width',
            'height',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'url', 'created_at', 'updated_at']

    def validate_alt(self, value):
        if not value.strip():
            raise serializers.ValidationError('Alt text is required.')
        return value.strip()
