from django.contrib.auth import get_user_model
from rest_framework import serializers


User = get_user_model()


class ProductDetailSellerSerializer(serializers.ModelSerializer):
    """Seller contact and reputation shown on the product page"""

    class Meta:
        model = User
        fields = ["id", "name", "phone", "address", "city", "avatar", "rating", "total_reviews"]
        read_only_fields = fields


class UserProfileSerializer(serializers.Serializer):
    """Renders a UserProfile record"""

    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    phone = serializers.CharField(read_only=True)
    address = serializers.CharField(read_only=True)
    city = serializers.CharField(read_only=True)
    avatar = serializers.CharField(read_only=True)
    is_seller = serializers.BooleanField(read_only=True)
    rating = serializers.DecimalField(max_digits=3, decimal_places=2, read_only=True)
    total_reviews = serializers.IntegerField(read_only=True)
    date_joined = serializers.DateTimeField(read_only=True)
    active_products = serializers.IntegerField(read_only=True, allow_null=True)
    sold_products = serializers.IntegerField(read_only=True, allow_null=True)


class ProfileUpdateRequestSerializer(serializers.Serializer):
    """Request body for updating a profile (documentation only)"""

    name = serializers.CharField(max_length=150, required=False)
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    avatar = serializers.URLField(required=False, allow_blank=True)
