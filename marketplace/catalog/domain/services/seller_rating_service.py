"""
SellerRatingService - seller reputation aggregate.

Recomputes User.rating and User.total_reviews from the full review history of
one seller. Safe to call repeatedly; the result only depends on stored reviews.
"""

from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Avg, Count

from marketplace.ordering.domain.models.review import Review
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.services.records import SellerRating

User = get_user_model()

TWO_PLACES = Decimal("0.01")


class SellerRatingService(BaseService):
    def __init__(self):
        super().__init__()
        marketplace_settings = getattr(settings, "MARKETPLACE", {})
        self.default_rating = Decimal(str(marketplace_settings.get("DEFAULT_SELLER_RATING", "5.00")))

    @BaseService.log_performance
    def recompute(self, seller_id) -> ServiceResult[SellerRating]:
        """
        Aggregate every review of the seller and persist mean and count.

        The seller row is locked for the duration so concurrent recomputes for
        the same seller serialize. Sellers without reviews get the default
        rating.
        """
        try:
            with transaction.atomic():
                try:
                    seller = User.objects.select_for_update().get(id=seller_id)
                except User.DoesNotExist:
                    return service_err(ErrorCodes.USER_NOT_FOUND, f"Seller {seller_id} not found")

                stats = Review.objects.filter(seller_id=seller_id).aggregate(avg=Avg("rating"), count=Count("id"))
                count = stats["count"] or 0
                if count:
                    rating = Decimal(str(stats["avg"])).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
                else:
                    rating = self.default_rating

                seller.rating = rating
                seller.total_reviews = count
                seller.save(update_fields=["rating", "total_reviews"])

            self.logger.info(f"Seller {seller_id} rating recomputed: {rating} over {count} reviews")
            return service_ok(SellerRating(seller_id=seller.id, rating=rating, total_reviews=count))

        except Exception as e:
            self.logger.error(f"Error recomputing rating for seller {seller_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
