from rest_framework import serializers

from marketplace.ordering.domain.models.order import Order


class OrderSummarySerializer(serializers.Serializer):
    """Renders an OrderSummary record"""

    id = serializers.UUIDField(read_only=True)
    buyer_id = serializers.UUIDField(read_only=True)
    seller_id = serializers.UUIDField(read_only=True)
    product_id = serializers.UUIDField(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    payment_method = serializers.CharField(read_only=True)
    shipping_address = serializers.CharField(read_only=True)
    notes = serializers.CharField(read_only=True)
    status = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    product_name = serializers.CharField(read_only=True)
    images = serializers.ListField(child=serializers.CharField(), read_only=True)
    seller_name = serializers.CharField(read_only=True)
    seller_avatar = serializers.CharField(read_only=True)
    buyer_name = serializers.CharField(read_only=True)


class OrderDetailSerializer(OrderSummarySerializer):
    """Renders an OrderDetail record"""

    description = serializers.CharField(read_only=True)
    seller_phone = serializers.CharField(read_only=True)
    seller_address = serializers.CharField(read_only=True)
    buyer_phone = serializers.CharField(read_only=True)


class CreateOrderRequestSerializer(serializers.Serializer):
    """Request body for placing an order"""

    product_id = serializers.UUIDField(help_text="Product to order")
    seller_id = serializers.UUIDField(
        required=False, allow_null=True, help_text="Product owner; defaults to the product's seller"
    )
    quantity = serializers.IntegerField(default=1, help_text="Quantity, at least 1")
    payment_method = serializers.CharField(max_length=50, required=False, allow_blank=True)
    shipping_address = serializers.CharField(required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class UpdateOrderStatusRequestSerializer(serializers.Serializer):
    status = serializers.CharField(help_text=f"One of: {', '.join(Order.valid_statuses())}")


class CreateReviewRequestSerializer(serializers.Serializer):
    rating = serializers.IntegerField(help_text="Rating from 1 to 5")
    comment = serializers.CharField(required=False, allow_blank=True, default="")
