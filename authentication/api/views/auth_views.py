import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from authentication.api.serializers import (
    LoginResponseSerializer,
    LoginSerializer,
    RegisterResponseSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)


logger = logging.getLogger(__name__)


class RegisterAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_register",
        summary="Register new user account",
        description="""
        **What it receives:**
        - `name`, `email`, `password` (required)
        - `phone` (optional)

        **What it returns:**
        - The created user and an access/refresh token pair
        """,
        request=UserRegistrationSerializer,
        responses={
            201: OpenApiResponse(response=RegisterResponseSerializer, description="Registration successful"),
            400: OpenApiResponse(description="Missing fields or email already registered"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        refresh = RefreshToken.for_user(user)
        logger.info(f"Registered user {user.id}")

        return Response(
            {
                "success": True,
                "message": "User registered successfully",
                "data": {
                    "user": UserSerializer(user).data,
                    "tokens": {"access": str(refresh.access_token), "refresh": str(refresh)},
                },
            },
            status=status.HTTP_201_CREATED,
        )


class LoginAPIView(TokenObtainPairView):
    serializer_class = LoginSerializer
    authentication_classes = []

    @extend_schema(
        operation_id="auth_login",
        summary="Obtain an access/refresh token pair",
        responses={
            200: OpenApiResponse(response=LoginResponseSerializer, description="Login successful"),
            401: OpenApiResponse(description="Invalid credentials"),
        },
        tags=["Authentication"],
    )
    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        response.data = {"success": True, "message": "Login successful", "data": response.data}
        return response
