from rest_framework import serializers

from marketplace.catalog.domain.models.category import Category


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "icon", "created_at"]
        read_only_fields = ["id", "created_at"]
