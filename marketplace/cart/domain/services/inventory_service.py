"""
InventoryService - Stock Ledger

Owns Product.stock and Product.is_sold once a product exists. Decrements are a
single conditional UPDATE verified by affected-row count, so concurrent orders
can never drive stock below zero.
"""

import logging
from typing import Optional

from django.db import transaction
from django.db.models import F

from marketplace.catalog.domain.models.catalog import Product
from marketplace.infra.observability.metrics import stock_conflicts_total
from marketplace.ordering.domain.models.order import Order
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.services.records import StockChange

logger = logging.getLogger(__name__)


class InventoryService(BaseService):
    """
    Service for product stock tracking.

    A product with stock=None has unlimited stock: deltas are no-ops and never
    mark it sold.
    """

    @BaseService.log_performance
    def apply_delta(self, product_id, quantity_delta: int) -> ServiceResult[StockChange]:
        """
        Apply a signed change to tracked stock.

        Negative deltas succeed only if enough stock remains; positive deltas
        return stock (order cancellation).

        Returns:
            ServiceResult with StockChange, or product_not_found / insufficient_stock
        """
        try:
            with transaction.atomic():
                try:
                    product = Product.objects.select_for_update().get(id=product_id)
                except Product.DoesNotExist:
                    return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

                if product.stock is None or quantity_delta == 0:
                    return service_ok(StockChange(product.id, product.stock, product.stock, product.is_sold))

                old_stock = product.stock

                if quantity_delta < 0:
                    needed = -quantity_delta
                    updated = Product.objects.filter(id=product_id, stock__gte=needed).update(
                        stock=F("stock") - needed
                    )
                    if updated == 0:
                        stock_conflicts_total.inc()
                        return service_err(
                            ErrorCodes.INSUFFICIENT_STOCK,
                            f"Insufficient stock for product {product.name}. "
                            f"Available: {old_stock}, Requested: {needed}",
                        )
                else:
                    Product.objects.filter(id=product_id).update(stock=F("stock") + quantity_delta)

                product.refresh_from_db(fields=["stock"])
                is_sold = product.stock <= 0 or self._has_delivered_order(product_id)
                Product.objects.filter(id=product_id).update(is_sold=is_sold)

                self.logger.info(
                    f"Stock changed: product={product_id}, delta={quantity_delta}, "
                    f"stock: {old_stock} -> {product.stock}, is_sold={is_sold}"
                )
                return service_ok(StockChange(product.id, old_stock, product.stock, is_sold))

        except Exception as e:
            self.logger.error(f"Error applying stock delta for product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def set_stock(self, product_id, stock: Optional[int]) -> ServiceResult[StockChange]:
        """
        Overwrite stock with an owner-supplied level (None switches to unlimited).

        A product with a delivered order stays sold.
        """
        if stock is not None and stock < 0:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Stock cannot be negative")

        try:
            with transaction.atomic():
                try:
                    product = Product.objects.select_for_update().get(id=product_id)
                except Product.DoesNotExist:
                    return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

                old_stock = product.stock
                is_sold = (stock is not None and stock <= 0) or self._has_delivered_order(product_id)
                Product.objects.filter(id=product_id).update(stock=stock, is_sold=is_sold)

            self.logger.info(f"Stock set: product={product_id}, stock: {old_stock} -> {stock}, is_sold={is_sold}")
            return service_ok(StockChange(product.id, old_stock, stock, is_sold))

        except Exception as e:
            self.logger.error(f"Error setting stock for product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def mark_sold(self, product_id) -> ServiceResult[StockChange]:
        """Flag a product as sold regardless of remaining stock (delivery path)."""
        try:
            product = Product.objects.only("id", "stock").get(id=product_id)
            Product.objects.filter(id=product_id).update(is_sold=True)
            self.logger.info(f"Product {product_id} marked sold")
            return service_ok(StockChange(product.id, product.stock, product.stock, True))

        except Product.DoesNotExist:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")
        except Exception as e:
            self.logger.error(f"Error marking product {product_id} sold: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def check_availability(self, product_id, quantity: int = 1) -> ServiceResult[bool]:
        """
        Check if a product can currently be bought in the given quantity.

        Example:
            >>> result = inventory_service.check_availability(product_id, 2)
            >>> if result.ok and result.value:
            ...     print("Product is in stock!")
        """
        if quantity <= 0:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be positive")

        try:
            product = Product.objects.only("id", "stock", "is_sold").get(id=product_id)
        except Product.DoesNotExist:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        available = not product.is_sold and (product.stock is None or product.stock >= quantity)
        self.logger.debug(
            f"Availability check for product {product_id}: "
            f"requested={quantity}, stock={product.stock}, result={available}"
        )
        return service_ok(available)

    @staticmethod
    def _has_delivered_order(product_id) -> bool:
        return Order.objects.filter(product_id=product_id, status=Order.DELIVERED).exists()
