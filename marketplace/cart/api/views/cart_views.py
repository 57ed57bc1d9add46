from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated

from infrastructure.container import container
from marketplace.api.responses import error_response, invalid_request_response, success_response
from marketplace.api.serializers import (
    AddToCartRequestSerializer,
    CartResponseSerializer,
    CartSerializer,
    ErrorResponseSerializer,
    SuccessResponseSerializer,
    UpdateCartRequestSerializer,
)
from marketplace.services import CartService


class CartViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> CartService:
        return container.cart_service()

    @extend_schema(
        operation_id="cart_get",
        summary="Get user's shopping cart",
        description="""
        **What it receives:**
        - Authentication token (header)

        **What it returns:**
        - Cart rows for unsold products, newest first, with product details
        - `total`: sum of price x quantity
        """,
        responses={
            200: OpenApiResponse(response=CartResponseSerializer, description="Cart retrieved successfully"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Cart"],
    )
    def list(self, request):
        result = self.get_service().get_cart(request.user)

        if not result.ok:
            return error_response(result)

        return success_response(CartSerializer(result.value).data)

    @extend_schema(
        operation_id="cart_add_item",
        summary="Add item to cart",
        description="""
        **What it receives:**
        - `product_id` (UUID): Product to add
        - `quantity` (integer, optional): Quantity to add (default: 1)

        **What it returns:**
        - Success message. Adding a product already in the cart increases its quantity.
        """,
        request=AddToCartRequestSerializer,
        responses={
            201: OpenApiResponse(response=SuccessResponseSerializer, description="Item added"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid quantity or product sold"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Cart"],
    )
    def create(self, request):
        serializer = AddToCartRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer.errors)

        data = serializer.validated_data
        result = self.get_service().add_item(request.user, data["product_id"], data["quantity"])

        if not result.ok:
            return error_response(result)

        return success_response(
            {"id": result.value.id, "quantity": result.value.quantity},
            message="Item added to cart",
            status_code=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="cart_update_item",
        summary="Change quantity of a cart row",
        request=UpdateCartRequestSerializer,
        responses={
            200: OpenApiResponse(response=SuccessResponseSerializer, description="Cart updated"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid quantity"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not your cart row"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Cart item not found"),
        },
        tags=["Marketplace - Cart"],
    )
    def update(self, request, pk=None):
        serializer = UpdateCartRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer.errors)

        result = self.get_service().update_item(request.user, pk, serializer.validated_data["quantity"])

        if not result.ok:
            return error_response(result)

        return success_response(message="Cart updated")

    @extend_schema(
        operation_id="cart_remove_item",
        summary="Remove a cart row",
        responses={
            200: OpenApiResponse(response=SuccessResponseSerializer, description="Item removed"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not your cart row"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Cart item not found"),
        },
        tags=["Marketplace - Cart"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().remove_item(request.user, pk)

        if not result.ok:
            return error_response(result)

        return success_response(message="Item removed from cart")
