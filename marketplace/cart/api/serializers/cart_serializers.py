from rest_framework import serializers


class CartLineSerializer(serializers.Serializer):
    """Renders a CartLine record"""

    id = serializers.IntegerField(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    product_id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    images = serializers.ListField(child=serializers.CharField(), read_only=True)
    condition = serializers.CharField(read_only=True)
    seller_id = serializers.UUIDField(read_only=True)
    seller_name = serializers.CharField(read_only=True)


class CartSerializer(serializers.Serializer):
    """Renders a CartView record"""

    items = CartLineSerializer(many=True, read_only=True)
    total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)


class AddToCartRequestSerializer(serializers.Serializer):
    """Request body for adding item to cart"""

    product_id = serializers.UUIDField(help_text="Product UUID to add")
    quantity = serializers.IntegerField(default=1, help_text="Quantity to add (default: 1)")


class UpdateCartRequestSerializer(serializers.Serializer):
    """Request body for updating cart item"""

    quantity = serializers.IntegerField(help_text="New quantity, at least 1")
