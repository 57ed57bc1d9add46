import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated

from infrastructure.container import container
from marketplace.api.responses import error_response, success_response
from marketplace.api.serializers import (
    ErrorResponseSerializer,
    ProductCreatedResponseSerializer,
    ProductDetailResponseSerializer,
    ProductDetailSerializer,
    ProductListResponseSerializer,
    ProductListSerializer,
    ProductWriteRequestSerializer,
    SellerProductSerializer,
    SuccessResponseSerializer,
)
from marketplace.services import CatalogService


logger = logging.getLogger(__name__)

LIST_FILTERS = ("category_id", "search", "min_price", "max_price", "condition", "seller_id", "sort")


class ProductViewSet(viewsets.ViewSet):
    """
    Product catalog. Browsing is public; writes require the owner's token.
    """

    def get_permissions(self):
        if self.action in ("list", "retrieve", "by_user"):
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    @extend_schema(
        operation_id="products_list",
        summary="Browse products",
        description="""
        **What it receives:**
        - Optional filters: category_id, search (name), min_price, max_price, condition, seller_id
        - Optional sort: newest (default), price_low, price_high, popular

        **What it returns:**
        - Up to 100 unsold products with seller name/rating and category name
        """,
        parameters=[
            OpenApiParameter(name="category_id", type=int),
            OpenApiParameter(name="search", type=str, description="Case-insensitive match on product name"),
            OpenApiParameter(name="min_price", type=float),
            OpenApiParameter(name="max_price", type=float),
            OpenApiParameter(name="condition", type=str, enum=["like_new", "good", "fair", "poor"]),
            OpenApiParameter(name="seller_id", type=str),
            OpenApiParameter(name="sort", type=str, enum=["newest", "price_low", "price_high", "popular"]),
        ],
        responses={200: ProductListResponseSerializer},
        tags=["Marketplace - Products"],
    )
    def list(self, request):
        filters = {key: request.query_params.get(key) for key in LIST_FILTERS if request.query_params.get(key)}
        result = self.get_service().list_products(filters)

        if not result.ok:
            return error_response(result)

        data = ProductListSerializer(result.value, many=True).data
        return success_response(data, count=len(data))

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product details",
        description="Counts a view, then returns the product with seller contact and the seller's latest reviews.",
        responses={
            200: ProductDetailResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_product(pk)

        if not result.ok:
            return error_response(result)

        return success_response(ProductDetailSerializer(result.value).data)

    @extend_schema(
        operation_id="products_create",
        summary="List a product for sale",
        request=ProductWriteRequestSerializer,
        responses={
            201: ProductCreatedResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or invalid fields"),
        },
        tags=["Marketplace - Products"],
    )
    def create(self, request):
        result = self.get_service().create_product(request.user, request.data)

        if not result.ok:
            return error_response(result)

        return success_response(
            {"product_id": result.value.id},
            message="Product listed successfully",
            status_code=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="products_update",
        summary="Update a product (owner only)",
        description="Only fields present in the body change. Existing orders keep their original totals.",
        request=ProductWriteRequestSerializer,
        responses={
            200: SuccessResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid fields"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def update(self, request, pk=None):
        result = self.get_service().update_product(request.user, pk, request.data)

        if not result.ok:
            return error_response(result)

        return success_response(message="Product updated successfully")

    @extend_schema(
        operation_id="products_delete",
        summary="Delete a product (owner only)",
        responses={
            200: SuccessResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Product has orders"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_product(request.user, pk)

        if not result.ok:
            return error_response(result)

        return success_response(message="Product deleted successfully")

    @extend_schema(
        operation_id="products_by_user",
        summary="List a seller's products",
        description="All products of the user, sold ones included, newest first.",
        responses={200: ProductListResponseSerializer},
        tags=["Marketplace - Products"],
    )
    @action(detail=False, methods=["get"], url_path=r"user/(?P<user_id>[^/.]+)")
    def by_user(self, request, user_id=None):
        result = self.get_service().list_seller_products(user_id)

        if not result.ok:
            return error_response(result)

        data = SellerProductSerializer(result.value, many=True).data
        return success_response(data, count=len(data))
