from django.contrib.auth import get_user_model
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from .order import Order

User = get_user_model()


class Review(models.Model):
    """Buyer's review of a seller, at most one per order."""

    order = models.OneToOneField(Order, on_delete=models.CASCADE, related_name="review")
    buyer = models.ForeignKey(User, on_delete=models.CASCADE, related_name="reviews_written")
    seller = models.ForeignKey(User, on_delete=models.CASCADE, related_name="reviews_received")
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["seller", "-created_at"], name="review_seller_created_idx"),
        ]

    def __str__(self):
        return f"{self.rating}* review on order {str(self.order_id)[:8]}"
