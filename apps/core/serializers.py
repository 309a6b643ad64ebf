"""
Serializers for authentication and the current user.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Serializer for the authenticated editor."""

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'first_name',
            'last_name',
            'is_staff',
            'date_joined',
            'last_login',
        ]
        read_only_fields = ['id', 'is_staff', 'date_joined', 'last_login']


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Token serializer that adds username/email claims and returns the user.
    """

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['username'] = user.username
        token['email'] = user.email
        return token

    def validate(self, attrs):
        data = super().validate(attrs)
        data['user'] = UserSerializer(self.user).data
        return data
