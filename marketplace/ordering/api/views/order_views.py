from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from infrastructure.container import container
from marketplace.api.responses import error_response, invalid_request_response, success_response
from marketplace.api.serializers import (
    CreateOrderRequestSerializer,
    CreateReviewRequestSerializer,
    ErrorResponseSerializer,
    OrderCreatedResponseSerializer,
    OrderDetailResponseSerializer,
    OrderDetailSerializer,
    OrderListResponseSerializer,
    OrderSummarySerializer,
    ReviewCreatedResponseSerializer,
    SuccessResponseSerializer,
    UpdateOrderStatusRequestSerializer,
)
from marketplace.services import OrderService


class OrderViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> OrderService:
        return container.order_service()

    @extend_schema(
        operation_id="orders_list",
        summary="List user's orders (as buyer or seller)",
        description="""
        **What it receives:**
        - Authentication token
        - Optional status filter (query param)

        **What it returns:**
        - Every order where the user is buyer or seller, newest first
        - Product name/images, seller name/avatar, buyer name and total_amount per order
        """,
        parameters=[
            OpenApiParameter(name="status", type=str, description="Filter by order status"),
        ],
        responses={
            200: OpenApiResponse(response=OrderListResponseSerializer, description="Orders retrieved successfully"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Unknown status filter"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Orders"],
    )
    def list(self, request):
        status_filter = request.query_params.get("status") or None
        result = self.get_service().list_orders(request.user, status_filter)

        if not result.ok:
            return error_response(result)

        return success_response(OrderSummarySerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="orders_retrieve",
        summary="Get order details",
        description="""
        **What it receives:**
        - `id` (UUID in URL): Order to retrieve
        - Authentication token (must be the order's buyer or seller)

        **What it returns:**
        - Order with product description, seller phone/address and buyer phone
        """,
        responses={
            200: OpenApiResponse(response=OrderDetailResponseSerializer, description="Order retrieved successfully"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not a party to the order"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_order(pk, request.user)

        if not result.ok:
            return error_response(result)

        return success_response(OrderDetailSerializer(result.value).data)

    @extend_schema(
        operation_id="orders_create",
        summary="Place an order for a product",
        description="""
        **What it receives:**
        - `product_id` (UUID): Product to buy
        - `seller_id` (UUID, optional): Must match the product owner when given
        - `quantity` (integer, default 1)
        - `payment_method`, `shipping_address`, `notes` (optional strings)

        **What it returns:**
        - `order_id` of the new pending order
        - Tracked stock is decremented in the same transaction
        """,
        request=CreateOrderRequestSerializer,
        responses={
            201: OpenApiResponse(response=OrderCreatedResponseSerializer, description="Order created successfully"),
            400: OpenApiResponse(
                response=ErrorResponseSerializer, description="Validation error or insufficient stock"
            ),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Orders"],
    )
    def create(self, request):
        serializer = CreateOrderRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer.errors)

        data = serializer.validated_data
        result = self.get_service().create_order(
            buyer=request.user,
            product_id=data["product_id"],
            quantity=data["quantity"],
            seller_id=data.get("seller_id"),
            payment_method=data.get("payment_method"),
            shipping_address=data.get("shipping_address", ""),
            notes=data.get("notes", ""),
        )

        if not result.ok:
            return error_response(result)

        return success_response(
            {"order_id": result.value.id}, message="Order created successfully", status_code=status.HTTP_201_CREATED
        )

    @extend_schema(
        operation_id="orders_update_status",
        summary="Change order status",
        description="""
        **What it receives:**
        - `status`: pending, confirmed, shipped, delivered or cancelled
        - Authentication token (buyer or seller of the order)

        **What it returns:**
        - Success message. Delivery marks the product sold; cancellation restocks it.
        """,
        request=UpdateOrderStatusRequestSerializer,
        responses={
            200: OpenApiResponse(response=SuccessResponseSerializer, description="Order status updated"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid status or transition"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not a party to the order"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=True, methods=["put"], url_path="status")
    def update_status(self, request, pk=None):
        serializer = UpdateOrderStatusRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer.errors)

        result = self.get_service().update_status(pk, request.user, serializer.validated_data["status"])

        if not result.ok:
            return error_response(result)

        return success_response(OrderSummarySerializer(result.value).data, message="Order status updated")

    @extend_schema(
        operation_id="orders_review",
        summary="Review a completed purchase",
        description="""
        **What it receives:**
        - `rating` (integer 1-5), `comment` (optional)
        - Authentication token (must be the order's buyer)

        **What it returns:**
        - `review_id`. The seller's rating and review count are recomputed.
        - 400 if the order was already reviewed
        """,
        request=CreateReviewRequestSerializer,
        responses={
            201: OpenApiResponse(response=ReviewCreatedResponseSerializer, description="Review created successfully"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid rating or already reviewed"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the buyer"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=True, methods=["post"])
    def review(self, request, pk=None):
        serializer = CreateReviewRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer.errors)

        data = serializer.validated_data
        result = self.get_service().create_review(pk, request.user, data["rating"], data.get("comment", ""))

        if not result.ok:
            return error_response(result)

        return success_response(
            {"review_id": result.value.id}, message="Review created successfully", status_code=status.HTTP_201_CREATED
        )
