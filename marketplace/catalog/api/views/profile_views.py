from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated

from infrastructure.container import container
from marketplace.api.responses import error_response, success_response
from marketplace.api.serializers import (
    ErrorResponseSerializer,
    ProfileUpdateRequestSerializer,
    UserProfileResponseSerializer,
    UserProfileSerializer,
)
from marketplace.services import ProfileService


class UserProfileViewSet(viewsets.ViewSet):
    """
    Public profiles plus self-service profile edits.
    """

    def get_permissions(self):
        if self.action == "retrieve":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_service(self) -> ProfileService:
        return container.profile_service()

    @extend_schema(
        operation_id="users_retrieve",
        summary="Get a user's public profile",
        description="Profile fields plus counts of active and sold products.",
        responses={
            200: UserProfileResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="User not found"),
        },
        tags=["Marketplace - Users"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_profile(pk)

        if not result.ok:
            return error_response(result)

        return success_response(UserProfileSerializer(result.value).data)

    @extend_schema(
        operation_id="users_me",
        summary="Get the current user's profile",
        responses={200: UserProfileResponseSerializer},
        tags=["Marketplace - Users"],
    )
    @action(detail=False, methods=["get"], url_path="profile/me")
    def me(self, request):
        result = self.get_service().get_own_profile(request.user)

        if not result.ok:
            return error_response(result)

        return success_response(UserProfileSerializer(result.value).data)

    @extend_schema(
        operation_id="users_update",
        summary="Update own profile",
        request=ProfileUpdateRequestSerializer,
        responses={
            200: UserProfileResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid fields"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not your profile"),
        },
        tags=["Marketplace - Users"],
    )
    def update(self, request, pk=None):
        result = self.get_service().update_profile(request.user, pk, request.data)

        if not result.ok:
            return error_response(result)

        return success_response(UserProfileSerializer(result.value).data, message="Profile updated successfully")

    @extend_schema(
        operation_id="users_become_seller",
        summary="Turn own account into a seller account",
        request=None,
        responses={
            200: UserProfileResponseSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not your profile"),
        },
        tags=["Marketplace - Users"],
    )
    @action(detail=True, methods=["put"], url_path="become-seller")
    def become_seller(self, request, pk=None):
        result = self.get_service().become_seller(request.user, pk)

        if not result.ok:
            return error_response(result)

        return success_response(UserProfileSerializer(result.value).data, message="You are now a seller")
