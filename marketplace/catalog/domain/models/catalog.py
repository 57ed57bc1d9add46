import uuid
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.validators import MinValueValidator
from django.db import models

from .category import Category

User = get_user_model()


class Product(models.Model):
    CONDITION_CHOICES = [
        ("like_new", "Like New"),
        ("good", "Good"),
        ("fair", "Fair"),
        ("poor", "Poor"),
    ]

    # Basic Information
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    # Seller and Category
    seller = models.ForeignKey(User, on_delete=models.CASCADE, related_name="products")
    category = models.ForeignKey(Category, on_delete=models.SET_NULL, null=True, related_name="products")

    # Pricing and Inventory
    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))])
    stock = models.PositiveIntegerField(null=True, blank=True, help_text="Remaining quantity; empty means unlimited")
    is_sold = models.BooleanField(default=False)

    # Product Details
    condition = models.CharField(max_length=20, choices=CONDITION_CHOICES, default="good")
    images = models.JSONField(default=list, blank=True, help_text="Image URLs, primary first")
    location = models.CharField(max_length=200, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Metrics
    view_count = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["is_sold", "-created_at"], name="product_sold_created_idx"),
            models.Index(fields=["seller", "is_sold"], name="product_seller_sold_idx"),
            models.Index(fields=["category", "is_sold"], name="product_category_sold_idx"),
            models.Index(fields=["is_sold", "price"], name="product_sold_price_idx"),
            models.Index(fields=["is_sold", "-view_count"], name="product_sold_views_idx"),
        ]

    @property
    def tracks_stock(self) -> bool:
        return self.stock is not None

    def __str__(self):
        return self.name
