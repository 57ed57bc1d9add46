from rest_framework import serializers

from marketplace.catalog.domain.models.catalog import Product

from .review_serializers import SellerReviewSerializer
from .user_serializers import ProductDetailSellerSerializer


class ProductListSerializer(serializers.ModelSerializer):
    """Product card: listing fields plus seller name/rating and category name"""

    seller_id = serializers.UUIDField(read_only=True)
    category_id = serializers.IntegerField(read_only=True, allow_null=True)
    seller_name = serializers.CharField(source="seller.name", read_only=True)
    rating = serializers.DecimalField(source="seller.rating", max_digits=3, decimal_places=2, read_only=True)
    category_name = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "seller_id",
            "category_id",
            "name",
            "description",
            "price",
            "condition",
            "images",
            "location",
            "stock",
            "is_sold",
            "view_count",
            "created_at",
            "updated_at",
            "seller_name",
            "rating",
            "category_name",
        ]

    def get_category_name(self, obj):
        return obj.category.name if obj.category_id else None


class SellerProductSerializer(serializers.ModelSerializer):
    """Product row on a seller's own listing page, sold items included"""

    category_id = serializers.IntegerField(read_only=True, allow_null=True)
    category_name = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "category_id",
            "category_name",
            "name",
            "description",
            "price",
            "condition",
            "images",
            "location",
            "stock",
            "is_sold",
            "view_count",
            "created_at",
        ]

    def get_category_name(self, obj):
        return obj.category.name if obj.category_id else None


class ProductDetailSerializer(ProductListSerializer):
    """Product page: adds seller contact and the seller's latest reviews"""

    seller = ProductDetailSellerSerializer(read_only=True)
    reviews = SellerReviewSerializer(source="seller_reviews", many=True, read_only=True)

    class Meta(ProductListSerializer.Meta):
        fields = ProductListSerializer.Meta.fields + ["seller", "reviews"]


class ProductWriteRequestSerializer(serializers.Serializer):
    """Request body for creating or updating a product (documentation only)"""

    name = serializers.CharField(max_length=200, help_text="Product name")
    category_id = serializers.IntegerField(help_text="Category ID")
    price = serializers.DecimalField(max_digits=12, decimal_places=2, help_text="Price, greater than zero")
    condition = serializers.ChoiceField(choices=[choice[0] for choice in Product.CONDITION_CHOICES])
    description = serializers.CharField(required=False, allow_blank=True)
    images = serializers.ListField(child=serializers.URLField(), required=False, help_text="Image URLs")
    location = serializers.CharField(max_length=200, required=False, allow_blank=True)
    stock = serializers.IntegerField(
        min_value=0, required=False, allow_null=True, help_text="Remaining quantity; null means unlimited"
    )
