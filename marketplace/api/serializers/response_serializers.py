"""
Response Serializers for Marketplace API Documentation

These serializers define the structure of API responses for OpenAPI schema generation.
They are NOT used for data validation, only for documentation in Swagger/ReDoc.
"""

from rest_framework import serializers

from marketplace.cart.api.serializers.cart_serializers import CartSerializer
from marketplace.catalog.api.serializers.category_serializers import CategorySerializer
from marketplace.catalog.api.serializers.product_serializers import ProductDetailSerializer, ProductListSerializer
from marketplace.catalog.api.serializers.user_serializers import UserProfileSerializer
from marketplace.ordering.api.serializers.order_serializers import OrderDetailSerializer, OrderSummarySerializer

# ===== Common Response Serializers =====


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    success = serializers.BooleanField(default=False)
    message = serializers.CharField(help_text="Human-readable error message")
    error = serializers.CharField(help_text="Error code identifier")
    errors = serializers.DictField(help_text="Field errors for invalid request bodies", required=False)


class SuccessResponseSerializer(serializers.Serializer):
    """Generic success response"""

    success = serializers.BooleanField(default=True)
    message = serializers.CharField(help_text="Success message")


# ===== Order Response Serializers =====


class OrderListResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = OrderSummarySerializer(many=True)


class OrderDetailResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = OrderDetailSerializer()


class OrderCreatedDataSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()


class OrderCreatedResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    message = serializers.CharField()
    data = OrderCreatedDataSerializer()


class ReviewCreatedDataSerializer(serializers.Serializer):
    review_id = serializers.IntegerField()


class ReviewCreatedResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    message = serializers.CharField()
    data = ReviewCreatedDataSerializer()


# ===== Catalog Response Serializers =====


class CategoryListResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = CategorySerializer(many=True)


class CategoryDetailResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = CategorySerializer()


class ProductListResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = ProductListSerializer(many=True)
    count = serializers.IntegerField(help_text="Number of products returned")


class ProductDetailResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = ProductDetailSerializer()


class ProductCreatedDataSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()


class ProductCreatedResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    message = serializers.CharField()
    data = ProductCreatedDataSerializer()


# ===== Cart Response Serializers =====


class CartResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = CartSerializer()


# ===== Profile Response Serializers =====


class UserProfileResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = UserProfileSerializer()
