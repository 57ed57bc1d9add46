from authentication.api.serializers.auth_serializers import LoginSerializer, UserRegistrationSerializer, UserSerializer
from authentication.api.serializers.response_serializers import LoginResponseSerializer, RegisterResponseSerializer


__all__ = [
    "UserSerializer",
    "UserRegistrationSerializer",
    "LoginSerializer",
    "LoginResponseSerializer",
    "RegisterResponseSerializer",
]
