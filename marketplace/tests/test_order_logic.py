import threading
from decimal import Decimal
from unittest.mock import Mock, patch

from django.db import connection
from django.test import TestCase, TransactionTestCase

from marketplace.models import Order, Product, Review
from marketplace.services import (
    ErrorCodes,
    InventoryService,
    OrderService,
    SellerRatingService,
    service_err,
)
from marketplace.tests.factories import OrderFactory, ProductFactory, SellerFactory, UserFactory


class OrderCreationLogicTest(TestCase):
    def setUp(self):
        self.service = OrderService()
        self.seller = SellerFactory()
        self.buyer = UserFactory()
        self.product = ProductFactory(seller=self.seller, stock=1, price=Decimal("100000.00"))

    def test_single_unit_sells_out(self):
        result = self.service.create_order(self.buyer, self.product.id, quantity=1)

        self.assertTrue(result.ok)
        order = result.value
        self.assertEqual(order.total_price, Decimal("100000.00"))
        self.assertEqual(order.status, Order.PENDING)
        self.assertEqual(order.seller_id, self.seller.id)
        self.assertEqual(order.payment_method, "transfer")

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 0)
        self.assertTrue(self.product.is_sold)

        second = self.service.create_order(UserFactory(), self.product.id, quantity=1)
        self.assertFalse(second.ok)
        self.assertEqual(second.error, ErrorCodes.INSUFFICIENT_STOCK)
        self.assertEqual(Order.objects.count(), 1)

    def test_total_is_frozen_against_price_edits(self):
        self.product.stock = 10
        self.product.save()
        order = self.service.create_order(self.buyer, self.product.id, quantity=3).value

        Product.objects.filter(id=self.product.id).update(price=Decimal("1.00"))

        order.refresh_from_db()
        self.assertEqual(order.total_price, Decimal("300000.00"))

    def test_quantity_above_stock_writes_nothing(self):
        result = self.service.create_order(self.buyer, self.product.id, quantity=2)

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.INSUFFICIENT_STOCK)
        self.assertFalse(Order.objects.exists())
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 1)

    def test_unlimited_stock_product(self):
        product = ProductFactory(seller=self.seller, stock=None, price=Decimal("5000.00"))

        result = self.service.create_order(self.buyer, product.id, quantity=40)

        self.assertTrue(result.ok)
        product.refresh_from_db()
        self.assertIsNone(product.stock)
        self.assertFalse(product.is_sold)

    def test_seller_must_own_product(self):
        result = self.service.create_order(self.buyer, self.product.id, seller_id=SellerFactory().id)

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.SELLER_MISMATCH)

        matching = self.service.create_order(self.buyer, self.product.id, seller_id=str(self.seller.id))
        self.assertTrue(matching.ok)

    def test_buyer_cannot_order_own_product(self):
        result = self.service.create_order(self.seller, self.product.id)

        self.assertEqual(result.error, ErrorCodes.OWN_PRODUCT)

    def test_missing_product(self):
        self.assertEqual(
            self.service.create_order(self.buyer, "not-a-uuid").error,
            ErrorCodes.PRODUCT_NOT_FOUND,
        )

    def test_ledger_failure_rolls_back_order(self):
        inventory = Mock(spec=InventoryService)
        inventory.apply_delta.return_value = service_err(ErrorCodes.INSUFFICIENT_STOCK, "gone")
        service = OrderService(inventory_service=inventory)

        result = service.create_order(self.buyer, self.product.id, quantity=1)

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.INSUFFICIENT_STOCK)
        self.assertFalse(Order.objects.exists())

    def test_stale_stock_read_rolls_back_order(self):
        # The locked read still sees one unit; another buyer took it before the decrement
        stale = Product.objects.get(id=self.product.id)
        Product.objects.filter(id=self.product.id).update(stock=0)

        with patch("marketplace.ordering.domain.services.order_service.Product") as product_model:
            product_model.objects.select_for_update.return_value.get.return_value = stale
            result = self.service.create_order(self.buyer, self.product.id, quantity=1)

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.INSUFFICIENT_STOCK)
        self.assertFalse(Order.objects.exists())
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 0)

    def test_total_beyond_order_column_is_rejected(self):
        product = ProductFactory(seller=self.seller, stock=None, price=Decimal("9999999999.99"))

        result = self.service.create_order(self.buyer, product.id, quantity=5)

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.INVALID_QUANTITY)
        self.assertFalse(Order.objects.exists())

        listed = self.service.list_orders(self.buyer)
        self.assertTrue(listed.ok)
        self.assertEqual(listed.value, [])

    def test_total_at_order_column_limit_is_accepted(self):
        product = ProductFactory(seller=self.seller, stock=None, price=Decimal("9999999999.99"))

        result = self.service.create_order(self.buyer, product.id, quantity=1)

        self.assertTrue(result.ok)
        self.assertEqual(self.service.list_orders(self.seller).value[0].total_amount, Decimal("9999999999.99"))


class OrderStatusLogicTest(TestCase):
    def setUp(self):
        self.service = OrderService()
        self.seller = SellerFactory()
        self.buyer = UserFactory()
        self.product = ProductFactory(seller=self.seller, stock=5)
        self.order = self.service.create_order(self.buyer, self.product.id, quantity=2).value

    def _move(self, *statuses, user=None):
        for new_status in statuses:
            result = self.service.update_status(self.order.id, user or self.seller, new_status)
            self.assertTrue(result.ok, result.error_detail)
        return result

    def test_full_lifecycle_marks_product_sold(self):
        result = self._move(Order.CONFIRMED, Order.SHIPPED, Order.DELIVERED)

        self.assertEqual(result.value.status, Order.DELIVERED)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 3)
        self.assertTrue(self.product.is_sold)

    def test_buyer_may_drive_transitions(self):
        self._move(Order.CONFIRMED, user=self.buyer)

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.CONFIRMED)

    def test_skipping_steps_is_rejected(self):
        result = self.service.update_status(self.order.id, self.seller, Order.DELIVERED)

        self.assertEqual(result.error, ErrorCodes.INVALID_TRANSITION)
        self.product.refresh_from_db()
        self.assertFalse(self.product.is_sold)

    def test_terminal_states_are_final(self):
        self._move(Order.CANCELLED)

        result = self.service.update_status(self.order.id, self.seller, Order.PENDING)

        self.assertEqual(result.error, ErrorCodes.INVALID_TRANSITION)

    def test_cancellation_restocks(self):
        self._move(Order.CONFIRMED, Order.CANCELLED)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 5)
        self.assertFalse(self.product.is_sold)

    def test_non_party_is_forbidden(self):
        result = self.service.update_status(self.order.id, UserFactory(), Order.CONFIRMED)

        self.assertEqual(result.error, ErrorCodes.NOT_ORDER_PARTY)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.PENDING)

    def test_unknown_order(self):
        result = self.service.update_status("00000000-0000-0000-0000-000000000000", self.seller, Order.CONFIRMED)

        self.assertEqual(result.error, ErrorCodes.ORDER_NOT_FOUND)

    def test_list_and_get(self):
        OrderFactory()  # someone else's order

        buyer_orders = self.service.list_orders(self.buyer).value
        seller_orders = self.service.list_orders(self.seller).value
        self.assertEqual([o.id for o in buyer_orders], [self.order.id])
        self.assertEqual([o.id for o in seller_orders], [self.order.id])
        self.assertEqual(buyer_orders[0].total_amount, self.order.total_price)
        self.assertEqual(self.service.list_orders(self.buyer, Order.SHIPPED).value, [])

        detail = self.service.get_order(self.order.id, self.buyer).value
        self.assertEqual(detail.seller_phone, self.seller.phone)
        self.assertEqual(detail.description, self.product.description)

        self.assertEqual(self.service.get_order(self.order.id, UserFactory()).error, ErrorCodes.NOT_ORDER_PARTY)
        self.assertEqual(self.service.get_order("bogus", self.buyer).error, ErrorCodes.ORDER_NOT_FOUND)


class ReviewLogicTest(TestCase):
    def setUp(self):
        self.service = OrderService()
        self.seller = SellerFactory()
        self.buyer = UserFactory()
        self.order = OrderFactory(buyer=self.buyer, product=ProductFactory(seller=self.seller))

    def test_second_review_conflicts_and_keeps_rating(self):
        first = self.service.create_review(self.order.id, self.buyer, 5, "Mantap")
        self.assertTrue(first.ok)

        second = self.service.create_review(self.order.id, self.buyer, 3)
        self.assertFalse(second.ok)
        self.assertEqual(second.error, ErrorCodes.DUPLICATE_REVIEW)

        self.seller.refresh_from_db()
        self.assertEqual(self.seller.rating, Decimal("5.00"))
        self.assertEqual(self.seller.total_reviews, 1)
        self.assertEqual(Review.objects.count(), 1)

    def test_review_updates_seller_rating(self):
        other_order = OrderFactory(buyer=self.buyer, product=ProductFactory(seller=self.seller))

        self.service.create_review(self.order.id, self.buyer, 4)
        self.service.create_review(other_order.id, self.buyer, 1)

        self.seller.refresh_from_db()
        self.assertEqual(self.seller.rating, Decimal("2.50"))
        self.assertEqual(self.seller.total_reviews, 2)

    def test_only_buyer_may_review(self):
        result = self.service.create_review(self.order.id, self.seller, 5)

        self.assertEqual(result.error, ErrorCodes.NOT_ORDER_BUYER)
        self.assertFalse(Review.objects.exists())

    def test_rating_failure_rolls_back_review(self):
        rating = Mock(spec=SellerRatingService)
        rating.recompute.return_value = service_err(ErrorCodes.INTERNAL_ERROR, "boom")
        service = OrderService(rating_service=rating)

        result = service.create_review(self.order.id, self.buyer, 4)

        self.assertFalse(result.ok)
        self.assertFalse(Review.objects.exists())


class ConcurrentOrderTest(TransactionTestCase):
    """Parallel buyers against limited stock, each thread on its own connection."""

    workers = 6
    stock = 2

    def test_no_oversell(self):
        seller = SellerFactory()
        product = ProductFactory(seller=seller, stock=self.stock)
        buyers = [UserFactory() for _ in range(self.workers)]
        barrier = threading.Barrier(self.workers)
        results = []
        lock = threading.Lock()

        def place(buyer):
            try:
                barrier.wait()
                result = OrderService().create_order(buyer, product.id, quantity=1)
                with lock:
                    results.append(result)
            finally:
                connection.close()

        threads = [threading.Thread(target=place, args=(buyer,)) for buyer in buyers]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        successes = [r for r in results if r.ok]
        failures = [r for r in results if not r.ok]
        self.assertEqual(len(successes), self.stock)
        self.assertTrue(all(r.error == ErrorCodes.INSUFFICIENT_STOCK for r in failures))

        product.refresh_from_db()
        self.assertEqual(product.stock, 0)
        self.assertTrue(product.is_sold)
        self.assertEqual(Order.objects.filter(product=product).count(), self.stock)
