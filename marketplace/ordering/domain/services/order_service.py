"""
OrderService - Order Lifecycle Management

Handles order placement against a single product, the status state machine
and buyer reviews. Stock changes go through InventoryService and rating
changes through SellerRatingService; every multi-step write runs in one
database transaction.
"""

import logging
import uuid
from decimal import Decimal
from typing import List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import Q

from marketplace.cart.domain.services.inventory_service import InventoryService
from marketplace.catalog.domain.models.catalog import Product
from marketplace.catalog.domain.services.seller_rating_service import SellerRatingService
from marketplace.infra.observability.metrics import (
    order_status_transitions_total,
    order_value,
    orders_placed_total,
    reviews_submitted_total,
)
from marketplace.infra.observability.tracing import add_span_attributes, tracer
from marketplace.ordering.domain.models.order import Order
from marketplace.ordering.domain.models.review import Review
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.services.records import OrderDetail, OrderSummary

User = get_user_model()
logger = logging.getLogger(__name__)

# Largest values the Order.quantity and Order.total_price columns hold
MAX_ORDER_QUANTITY = 2147483647
MAX_ORDER_TOTAL = Decimal("9999999999.99")


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _same_id(left, right) -> bool:
    try:
        return uuid.UUID(str(left)) == uuid.UUID(str(right))
    except ValueError:
        return False


class OrderService(BaseService):
    """
    Service for managing order lifecycle.

    Status machine: pending -> confirmed -> shipped -> delivered, with
    cancellation allowed from any non-terminal state.
    """

    def __init__(
        self,
        inventory_service: InventoryService = None,
        rating_service: SellerRatingService = None,
    ):
        """
        Args:
            inventory_service: Stock ledger (injected)
            rating_service: Seller rating aggregator (injected)
        """
        super().__init__()
        self.inventory_service = inventory_service or InventoryService()
        self.rating_service = rating_service or SellerRatingService()
        self.default_payment_method = getattr(settings, "MARKETPLACE", {}).get("DEFAULT_PAYMENT_METHOD", "transfer")

    @BaseService.log_performance
    def list_orders(self, user: User, status: Optional[str] = None) -> ServiceResult[List[OrderSummary]]:
        """
        List orders where the user is buyer or seller, newest first.

        Args:
            user: Requesting user
            status: Optional status filter, must be a known status
        """
        if status and status not in Order.valid_statuses():
            return service_err(ErrorCodes.INVALID_STATUS, f"Unknown order status '{status}'")

        try:
            queryset = (
                Order.objects.filter(Q(buyer=user) | Q(seller=user))
                .select_related("product", "seller", "buyer")
                .order_by("-created_at")
            )
            if status:
                queryset = queryset.filter(status=status)

            orders = [OrderSummary.from_order(order) for order in queryset]
            self.logger.info(f"Listed {len(orders)} orders for user {user.id}")
            return service_ok(orders)

        except Exception as e:
            self.logger.error(f"Error listing orders for user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_order(self, order_id, user: User) -> ServiceResult[OrderDetail]:
        """
        Get order details. Only the buyer and the seller may see an order.

        Example:
            >>> result = order_service.get_order(order_id, user)
            >>> if result.ok:
            ...     detail = result.value
        """
        try:
            order = Order.objects.select_related("product", "seller", "buyer").get(id=order_id)
        except (Order.DoesNotExist, DjangoValidationError):
            return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")
        except Exception as e:
            self.logger.error(f"Error getting order {order_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

        if not order.is_party(user):
            return service_err(ErrorCodes.NOT_ORDER_PARTY, "Not authorized to view this order")

        return service_ok(OrderDetail.from_order(order))

    @BaseService.log_performance
    @transaction.atomic
    def create_order(
        self,
        buyer: User,
        product_id,
        quantity: int = 1,
        seller_id=None,
        payment_method: Optional[str] = None,
        shipping_address: str = "",
        notes: str = "",
    ) -> ServiceResult[Order]:
        """
        Place an order for one product and reserve its stock.

        The product row is locked for the whole transaction. total_price is
        frozen at price x quantity; later price edits never touch it. If the
        stock decrement fails the order row is rolled back with it.

        Returns:
            ServiceResult with the created Order, or one of
            invalid_quantity, product_not_found, seller_mismatch, own_product,
            insufficient_stock, internal_error
        """
        with tracer.start_as_current_span("order_create_transaction") as span:
            add_span_attributes(span, buyer_id=buyer.id, product_id=product_id, quantity=quantity)

            if not _is_positive_int(quantity):
                return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be a positive integer")
            if quantity > MAX_ORDER_QUANTITY:
                return service_err(ErrorCodes.INVALID_QUANTITY, f"Quantity must not exceed {MAX_ORDER_QUANTITY}")

            try:
                with tracer.start_as_current_span("lock_product"):
                    try:
                        product = Product.objects.select_for_update().get(id=product_id)
                    except (Product.DoesNotExist, DjangoValidationError):
                        return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

                if seller_id and not _same_id(seller_id, product.seller_id):
                    return service_err(ErrorCodes.SELLER_MISMATCH, "Seller does not own this product")
                if product.seller_id == buyer.id:
                    return service_err(ErrorCodes.OWN_PRODUCT, "You cannot order your own product")

                total_price = product.price * quantity
                if total_price > MAX_ORDER_TOTAL:
                    return service_err(
                        ErrorCodes.INVALID_QUANTITY,
                        f"Order total {total_price} exceeds the maximum of {MAX_ORDER_TOTAL}",
                    )

                if product.stock is not None and quantity > product.stock:
                    orders_placed_total.labels(status="insufficient_stock").inc()
                    return service_err(
                        ErrorCodes.INSUFFICIENT_STOCK,
                        f"Insufficient stock. Available: {product.stock}, Requested: {quantity}",
                    )

                with tracer.start_as_current_span("save_order"):
                    order = Order.objects.create(
                        buyer=buyer,
                        seller_id=product.seller_id,
                        product=product,
                        quantity=quantity,
                        total_price=total_price,
                        payment_method=payment_method or self.default_payment_method,
                        shipping_address=shipping_address or "",
                        notes=notes or "",
                        status=Order.PENDING,
                    )

                with tracer.start_as_current_span("reserve_inventory"):
                    stock_result = self.inventory_service.apply_delta(product.id, -quantity)
                    if not stock_result.ok:
                        transaction.set_rollback(True)
                        orders_placed_total.labels(status=stock_result.error).inc()
                        return service_err(stock_result.error, stock_result.error_detail)

                orders_placed_total.labels(status="success").inc()
                order_value.observe(float(order.total_price))

                self.logger.info(
                    f"Created order {order.id} for buyer {buyer.id}: product={product.id}, "
                    f"quantity={quantity}, total={order.total_price}"
                )
                add_span_attributes(span, order_id=order.id, order_total=order.total_price)

                return service_ok(order)

            except Exception as e:
                transaction.set_rollback(True)
                self.logger.error(f"Error creating order for buyer {buyer.id}: {e}", exc_info=True)
                span.record_exception(e)
                orders_placed_total.labels(status="failure").inc()
                return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def update_status(self, order_id, user: User, new_status: str) -> ServiceResult[OrderSummary]:
        """
        Move an order to a new status.

        Either party may drive the transition. Delivery marks the product sold
        whatever stock remains; cancellation returns the quantity to stock.
        """
        if new_status not in Order.valid_statuses():
            return service_err(ErrorCodes.INVALID_STATUS, f"Invalid status '{new_status}'")

        try:
            try:
                order = Order.objects.select_for_update().get(id=order_id)
            except (Order.DoesNotExist, DjangoValidationError):
                return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")

            if not order.is_party(user):
                return service_err(ErrorCodes.NOT_ORDER_PARTY, "Not authorized to update this order")

            old_status = order.status
            if not order.can_transition_to(new_status):
                return service_err(
                    ErrorCodes.INVALID_TRANSITION, f"Cannot change order status from {old_status} to {new_status}"
                )

            order.status = new_status
            order.save(update_fields=["status", "updated_at"])

            if new_status == Order.DELIVERED:
                side_effect = self.inventory_service.mark_sold(order.product_id)
            elif new_status == Order.CANCELLED:
                side_effect = self.inventory_service.apply_delta(order.product_id, order.quantity)
            else:
                side_effect = None

            if side_effect is not None and not side_effect.ok:
                transaction.set_rollback(True)
                return service_err(side_effect.error, side_effect.error_detail)

            order_status_transitions_total.labels(from_status=old_status, to_status=new_status).inc()
            self.logger.info(f"Order {order.id} status {old_status} -> {new_status} by user {user.id}")

            return service_ok(OrderSummary.from_order(order))

        except Exception as e:
            transaction.set_rollback(True)
            self.logger.error(f"Error updating status of order {order_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def create_review(self, order_id, buyer: User, rating: int, comment: str = "") -> ServiceResult[Review]:
        """
        Record the buyer's review of an order and refresh the seller rating.

        At most one review exists per order: the pre-check catches the common
        case and the unique constraint on Review.order catches a concurrent
        duplicate.
        """
        if not _is_positive_int(rating) or rating > 5:
            return service_err(ErrorCodes.INVALID_RATING, "Rating must be between 1 and 5")

        try:
            try:
                order = Order.objects.select_for_update().get(id=order_id)
            except (Order.DoesNotExist, DjangoValidationError):
                return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")

            if order.buyer_id != buyer.id:
                return service_err(ErrorCodes.NOT_ORDER_BUYER, "Only the buyer can review this order")

            if Review.objects.filter(order_id=order.id).exists():
                reviews_submitted_total.labels(status="duplicate").inc()
                return service_err(ErrorCodes.DUPLICATE_REVIEW, "Review already exists")

            try:
                with transaction.atomic():
                    review = Review.objects.create(
                        order=order,
                        buyer=buyer,
                        seller_id=order.seller_id,
                        rating=rating,
                        comment=comment or "",
                    )
            except IntegrityError:
                reviews_submitted_total.labels(status="duplicate").inc()
                return service_err(ErrorCodes.DUPLICATE_REVIEW, "Review already exists")

            rating_result = self.rating_service.recompute(order.seller_id)
            if not rating_result.ok:
                transaction.set_rollback(True)
                reviews_submitted_total.labels(status="failure").inc()
                return service_err(rating_result.error, rating_result.error_detail)

            reviews_submitted_total.labels(status="success").inc()
            self.logger.info(f"Review {review.id} created for order {order.id} (rating={rating})")
            return service_ok(review)

        except Exception as e:
            transaction.set_rollback(True)
            reviews_submitted_total.labels(status="failure").inc()
            self.logger.error(f"Error creating review for order {order_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
