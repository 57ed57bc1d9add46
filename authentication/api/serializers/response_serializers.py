"""
Response Serializers for Authentication API Documentation

These serializers only describe response shapes for OpenAPI schema generation.
"""

from rest_framework import serializers

from .auth_serializers import UserSerializer


class TokenPairSerializer(serializers.Serializer):
    access = serializers.CharField(help_text="Access token (send as Bearer)")
    refresh = serializers.CharField(help_text="Refresh token")


class RegisterDataSerializer(serializers.Serializer):
    user = UserSerializer()
    tokens = TokenPairSerializer()


class RegisterResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    data = RegisterDataSerializer()


class LoginDataSerializer(serializers.Serializer):
    access = serializers.CharField()
    refresh = serializers.CharField()
    user = UserSerializer()


class LoginResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    data = LoginDataSerializer()
