"""
CartService - Shopping Cart Operations

One row per (user, product); adding a product already in the cart bumps its
quantity. Sold products drop out of the cart view but their rows are kept.
"""

import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import F

from marketplace.cart.domain.models.cart import CartItem
from marketplace.cart.domain.services.inventory_service import InventoryService
from marketplace.catalog.domain.models.catalog import Product
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.services.records import CartLine, CartView

User = get_user_model()
logger = logging.getLogger(__name__)


def _valid_quantity(quantity) -> bool:
    return isinstance(quantity, int) and not isinstance(quantity, bool) and quantity >= 1


class CartService(BaseService):
    """
    Service for shopping cart operations.
    """

    def __init__(self, inventory_service: InventoryService = None):
        """
        Args:
            inventory_service: Stock ledger for availability checks (injected)
        """
        super().__init__()
        self.inventory_service = inventory_service or InventoryService()

    @BaseService.log_performance
    def get_cart(self, user: User) -> ServiceResult[CartView]:
        """
        Get the user's cart, newest rows first, with the running total.

        Example:
            >>> result = cart_service.get_cart(user)
            >>> if result.ok:
            ...     print(result.value.total)
        """
        try:
            items = (
                CartItem.objects.filter(user=user, product__is_sold=False)
                .select_related("product", "product__seller")
                .order_by("-added_at")
            )
            return service_ok(CartView(items=[CartLine.from_item(item) for item in items]))
        except Exception as e:
            self.logger.error(f"Error getting cart for user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def add_item(self, user: User, product_id, quantity: int = 1) -> ServiceResult[CartItem]:
        """
        Add a product to the cart or increase its quantity.

        Returns:
            ServiceResult with the CartItem, or invalid_quantity,
            product_not_found, product_sold, insufficient_stock
        """
        if not _valid_quantity(quantity):
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be a positive integer")

        try:
            product = Product.objects.only("id", "is_sold").get(id=product_id)
        except (Product.DoesNotExist, DjangoValidationError):
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        if product.is_sold:
            return service_err(ErrorCodes.PRODUCT_SOLD, "Product already sold")

        existing = CartItem.objects.filter(user=user, product=product).values_list("quantity", flat=True).first()
        availability = self.inventory_service.check_availability(product.id, (existing or 0) + quantity)
        if not availability.ok:
            return availability
        if not availability.value:
            return service_err(ErrorCodes.INSUFFICIENT_STOCK, "Not enough stock for the requested quantity")

        try:
            item = self._merge_item(user, product, quantity)
            self.logger.info(f"Cart of user {user.id}: product {product.id} now x{item.quantity}")
            return service_ok(item)
        except Exception as e:
            self.logger.error(f"Error adding product {product_id} to cart: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def update_item(self, user: User, item_id, quantity: int) -> ServiceResult[CartItem]:
        if not _valid_quantity(quantity):
            return service_err(ErrorCodes.INVALID_QUANTITY, "Invalid quantity")

        item_or_error = self._get_own_item(user, item_id)
        if isinstance(item_or_error, ServiceResult):
            return item_or_error

        item = item_or_error
        item.quantity = quantity
        item.save(update_fields=["quantity"])
        return service_ok(item)

    @BaseService.log_performance
    def remove_item(self, user: User, item_id) -> ServiceResult[bool]:
        item_or_error = self._get_own_item(user, item_id)
        if isinstance(item_or_error, ServiceResult):
            return item_or_error

        item_or_error.delete()
        return service_ok(True)

    def _get_own_item(self, user: User, item_id):
        try:
            item = CartItem.objects.get(id=item_id)
        except (CartItem.DoesNotExist, ValueError, DjangoValidationError):
            return service_err(ErrorCodes.CART_ITEM_NOT_FOUND, "Cart item not found")

        if item.user_id != user.id:
            return service_err(ErrorCodes.NOT_CART_OWNER, "Not authorized")
        return item

    def _merge_item(self, user: User, product: Product, quantity: int) -> CartItem:
        updated = CartItem.objects.filter(user=user, product=product).update(quantity=F("quantity") + quantity)
        if not updated:
            try:
                with transaction.atomic():
                    return CartItem.objects.create(user=user, product=product, quantity=quantity)
            except IntegrityError:
                # Row created concurrently; fall back to incrementing it
                CartItem.objects.filter(user=user, product=product).update(quantity=F("quantity") + quantity)
        return CartItem.objects.get(user=user, product=product)
