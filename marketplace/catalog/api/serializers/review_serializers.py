from rest_framework import serializers

from marketplace.ordering.domain.models.review import Review


class SellerReviewSerializer(serializers.ModelSerializer):
    buyer_id = serializers.UUIDField(read_only=True)
    buyer_name = serializers.CharField(source="buyer.name", read_only=True)

    class Meta:
        model = Review
        fields = ["id", "order_id", "buyer_id", "buyer_name", "rating", "comment", "created_at"]
