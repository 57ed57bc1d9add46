from .auth_views import LoginAPIView, RegisterAPIView


__all__ = [
    "LoginAPIView",
    "RegisterAPIView",
]
