from decimal import Decimal

from django.test import TestCase, override_settings

from marketplace.services import ErrorCodes, SellerRatingService
from marketplace.tests.factories import OrderFactory, ProductFactory, ReviewFactory, SellerFactory


class SellerRatingLogicTest(TestCase):
    def setUp(self):
        self.service = SellerRatingService()
        self.seller = SellerFactory(rating=Decimal("1.00"), total_reviews=9)

    def _review(self, rating):
        order = OrderFactory(product=ProductFactory(seller=self.seller))
        return ReviewFactory(order=order, rating=rating)

    def test_no_reviews_resets_to_default(self):
        result = self.service.recompute(self.seller.id)

        self.assertTrue(result.ok)
        self.assertEqual(result.value.rating, Decimal("5.00"))
        self.assertEqual(result.value.total_reviews, 0)
        self.seller.refresh_from_db()
        self.assertEqual(self.seller.rating, Decimal("5.00"))
        self.assertEqual(self.seller.total_reviews, 0)

    def test_mean_is_rounded_to_two_places(self):
        for rating in (5, 4, 4):
            self._review(rating)

        result = self.service.recompute(self.seller.id)

        self.assertEqual(result.value.rating, Decimal("4.33"))
        self.assertEqual(result.value.total_reviews, 3)

    def test_recompute_is_idempotent(self):
        self._review(2)
        self._review(5)

        first = self.service.recompute(self.seller.id).value
        second = self.service.recompute(self.seller.id).value

        self.assertEqual(first, second)
        self.seller.refresh_from_db()
        self.assertEqual(self.seller.rating, Decimal("3.50"))
        self.assertEqual(self.seller.total_reviews, 2)

    def test_only_own_reviews_count(self):
        self._review(1)
        other_seller = SellerFactory()
        ReviewFactory(order=OrderFactory(product=ProductFactory(seller=other_seller)), rating=5)

        result = self.service.recompute(self.seller.id)

        self.assertEqual(result.value.rating, Decimal("1.00"))
        self.assertEqual(result.value.total_reviews, 1)

    def test_unknown_seller(self):
        result = self.service.recompute("00000000-0000-0000-0000-000000000000")

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.USER_NOT_FOUND)

    @override_settings(MARKETPLACE={"DEFAULT_SELLER_RATING": "4.00"})
    def test_default_rating_from_settings(self):
        result = SellerRatingService().recompute(self.seller.id)

        self.assertEqual(result.value.rating, Decimal("4.00"))
