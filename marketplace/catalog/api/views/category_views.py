import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.permissions import AllowAny

from infrastructure.container import container
from marketplace.api.responses import error_response, success_response
from marketplace.api.serializers import (
    CategoryDetailResponseSerializer,
    CategoryListResponseSerializer,
    CategorySerializer,
    ErrorResponseSerializer,
)
from marketplace.services import CatalogService


logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(
        summary="List all categories",
        description="Retrieve every product category ordered by name.",
        responses={200: CategoryListResponseSerializer},
        tags=["Marketplace - Categories"],
    ),
    retrieve=extend_schema(
        summary="Get category details",
        description="Retrieve a single category by ID.",
        responses={
            200: CategoryDetailResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Category not found"),
        },
        tags=["Marketplace - Categories"],
    ),
)
class CategoryViewSet(viewsets.ViewSet):
    """
    ViewSet for categories - read-only operations using Service Layer
    """

    permission_classes = [AllowAny]

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    def list(self, request):
        result = self.get_service().list_categories()

        if not result.ok:
            return error_response(result)

        return success_response(CategorySerializer(result.value, many=True).data)

    def retrieve(self, request, pk=None):
        result = self.get_service().get_category(pk)

        if not result.ok:
            return error_response(result)

        return success_response(CategorySerializer(result.value).data)
