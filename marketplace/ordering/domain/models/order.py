import uuid

from django.contrib.auth import get_user_model
from django.db import models

from marketplace.catalog.domain.models.catalog import Product

User = get_user_model()


class Order(models.Model):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (PENDING, "Pending"),  # Default status on creation
        (CONFIRMED, "Confirmed"),
        (SHIPPED, "Shipped"),
        (DELIVERED, "Delivered"),  # Terminal, finalizes the sale of the product
        (CANCELLED, "Cancelled"),  # Terminal
    ]

    # Allowed moves of the order state machine
    TRANSITIONS = {
        PENDING: (CONFIRMED, CANCELLED),
        CONFIRMED: (SHIPPED, CANCELLED),
        SHIPPED: (DELIVERED, CANCELLED),
        DELIVERED: (),
        CANCELLED: (),
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    buyer = models.ForeignKey(User, on_delete=models.CASCADE, related_name="orders")
    seller = models.ForeignKey(User, on_delete=models.CASCADE, related_name="sales")
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="orders")

    # Order Details
    quantity = models.PositiveIntegerField(default=1)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)  # Snapshot of price x quantity
    payment_method = models.CharField(max_length=50, default="transfer")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)

    # Shipping Information
    shipping_address = models.TextField(blank=True)
    notes = models.TextField(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["buyer", "-created_at"], name="order_buyer_created_idx"),
            models.Index(fields=["seller", "-created_at"], name="order_seller_created_idx"),
            models.Index(fields=["product", "status"], name="order_product_status_idx"),
        ]

    @classmethod
    def valid_statuses(cls):
        return [choice[0] for choice in cls.STATUS_CHOICES]

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in self.TRANSITIONS.get(self.status, ())

    def is_party(self, user) -> bool:
        return user.id in (self.buyer_id, self.seller_id)

    @property
    def is_terminal(self) -> bool:
        return not self.TRANSITIONS.get(self.status)

    def __str__(self):
        return f"Order {str(self.id)[:8]} ({self.status})"
