"""
CatalogService - Categories & Product CRUD

Handles category lookup, product browsing with filters, product detail with
view counting, and owner-only product management. Stock and is_sold are only
set here at creation time; afterwards they
belong to InventoryService, including owner restocks.
"""

import logging
import re
import uuid
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import F, ProtectedError

from marketplace.cart.domain.services.inventory_service import InventoryService
from marketplace.catalog.domain.models.catalog import Product
from marketplace.catalog.domain.models.category import Category
from marketplace.infra.observability.tracing import tracer
from marketplace.ordering.domain.models.review import Review
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

User = get_user_model()
logger = logging.getLogger(__name__)

CONDITIONS = [choice[0] for choice in Product.CONDITION_CHOICES]
MAX_PRICE = Decimal("9999999999.99")
TWO_PLACES = Decimal("0.01")

SORT_ORDERS = {
    "newest": ("-created_at",),
    "price_low": ("price", "-created_at"),
    "price_high": ("-price", "-created_at"),
    "popular": ("-view_count", "-created_at"),
}


def _parse_decimal(value) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def _parse_int(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r"-?\d+", value.strip()):
        return int(value.strip())
    return None


def _parse_uuid(value) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _normalize_images(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(url).strip() for url in value if url and str(url).strip()]


class CatalogService(BaseService):
    """
    Service for managing product catalog operations.

    Responsibilities:
    - List and fetch categories
    - List products with filters (never sold ones)
    - Get product details and count the view
    - Create, update and delete products (owner only)
    - List all products of a seller
    """

    def __init__(self, inventory_service: InventoryService = None):
        """
        Args:
            inventory_service: Stock ledger used for owner restocks (injected)
        """
        super().__init__()
        self.inventory_service = inventory_service or InventoryService()
        marketplace_settings = getattr(settings, "MARKETPLACE", {})
        self.list_limit = marketplace_settings.get("PRODUCT_LIST_LIMIT", 100)
        self.recent_reviews = marketplace_settings.get("SELLER_RECENT_REVIEWS", 5)

    @BaseService.log_performance
    def list_categories(self) -> ServiceResult[List[Category]]:
        try:
            return service_ok(list(Category.objects.order_by("name")))
        except Exception as e:
            self.logger.error(f"Error listing categories: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_category(self, category_id) -> ServiceResult[Category]:
        parsed_id = _parse_int(category_id)
        if parsed_id is None:
            return service_err(ErrorCodes.CATEGORY_NOT_FOUND, f"Category {category_id} not found")
        try:
            return service_ok(Category.objects.get(id=parsed_id))
        except Category.DoesNotExist:
            return service_err(ErrorCodes.CATEGORY_NOT_FOUND, f"Category {category_id} not found")
        except Exception as e:
            self.logger.error(f"Error getting category {category_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def list_products(self, filters: Optional[Dict[str, Any]] = None) -> ServiceResult[List[Product]]:
        """
        List unsold products.

        Args:
            filters: Optional dict with category_id, search, min_price,
                max_price, condition, seller_id and sort (newest, price_low,
                price_high, popular). Malformed numeric filters are ignored.

        Example:
            >>> result = catalog_service.list_products({"search": "camera", "sort": "price_low"})
            >>> if result.ok:
            ...     products = result.value
        """
        with tracer.start_as_current_span("catalog_list_products") as span:
            filters = filters or {}
            span.set_attribute("filters.count", len(filters))

            try:
                queryset = Product.objects.select_related("seller", "category").filter(is_sold=False)

                category_id = _parse_int(filters.get("category_id"))
                if category_id is not None:
                    queryset = queryset.filter(category_id=category_id)

                search = (filters.get("search") or "").strip()
                if search:
                    queryset = queryset.filter(name__icontains=search)
                    span.set_attribute("filter.search", search)

                min_price = _parse_decimal(filters.get("min_price"))
                if min_price is not None:
                    queryset = queryset.filter(price__gte=min_price)

                max_price = _parse_decimal(filters.get("max_price"))
                if max_price is not None:
                    queryset = queryset.filter(price__lte=max_price)

                condition = filters.get("condition")
                if condition:
                    queryset = queryset.filter(condition=condition)

                seller_id = _parse_uuid(filters.get("seller_id")) if filters.get("seller_id") else None
                if seller_id is not None:
                    queryset = queryset.filter(seller_id=seller_id)

                sort = filters.get("sort") or "newest"
                queryset = queryset.order_by(*SORT_ORDERS.get(sort, SORT_ORDERS["newest"]))

                products = list(queryset[: self.list_limit])
                span.set_attribute("results.count", len(products))
                return service_ok(products)

            except Exception as e:
                self.logger.error(f"Error listing products: {e}", exc_info=True)
                span.record_exception(e)
                return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_product(self, product_id, track_view: bool = True) -> ServiceResult[Product]:
        """
        Get product details by ID.

        The returned product carries `seller_reviews`, the most recent reviews
        received by its seller.
        """
        try:
            if track_view:
                Product.objects.filter(id=product_id).update(view_count=F("view_count") + 1)

            product = Product.objects.select_related("seller", "category").get(id=product_id)
            product.seller_reviews = list(
                Review.objects.filter(seller_id=product.seller_id).order_by("-created_at")[: self.recent_reviews]
            )

            self.logger.info(f"Retrieved product: {product.name} (id={product_id})")
            return service_ok(product)

        except (Product.DoesNotExist, DjangoValidationError):
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")
        except Exception as e:
            self.logger.error(f"Error getting product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def create_product(self, user: User, data: Dict[str, Any]) -> ServiceResult[Product]:
        """
        List a new product owned by the requesting user.

        Example:
            >>> result = catalog_service.create_product(
            ...     seller,
            ...     {"name": "Kamera", "category_id": 1, "price": "750000", "condition": "good", "stock": 1},
            ... )
        """
        missing = [key for key in ("name", "category_id", "price", "condition") if data.get(key) in (None, "")]
        if missing:
            return service_err(ErrorCodes.INVALID_PRODUCT_DATA, f"Missing required fields: {', '.join(missing)}")

        cleaned, error = self._clean_product_data(data)
        if error:
            return error

        try:
            product = Product.objects.create(
                seller=user,
                name=cleaned["name"],
                category=cleaned["category"],
                price=cleaned["price"],
                condition=cleaned["condition"],
                description=cleaned.get("description", ""),
                images=cleaned.get("images", []),
                location=cleaned.get("location", ""),
                stock=cleaned.get("stock"),
                is_sold=cleaned.get("stock") == 0,
            )
            self.logger.info(f"Created product: {product.name} (id={product.id}) by seller {user.id}")
            return service_ok(product)

        except Exception as e:
            self.logger.error(f"Error creating product: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def update_product(self, user: User, product_id, data: Dict[str, Any]) -> ServiceResult[Product]:
        """
        Update an existing product (owner only).

        Only fields present in data change. Orders keep their own frozen
        total_price, so price edits never reach existing orders.
        """
        try:
            try:
                product = Product.objects.select_for_update().get(id=product_id)
            except (Product.DoesNotExist, DjangoValidationError):
                return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

            if product.seller_id != user.id:
                return service_err(ErrorCodes.NOT_PRODUCT_OWNER, "You do not own this product")

            cleaned, error = self._clean_product_data(data)
            if error:
                return error

            restock = "stock" in cleaned
            new_stock = cleaned.pop("stock", None)

            for field_name, value in cleaned.items():
                setattr(product, field_name, value)
            product.save(update_fields=[*cleaned.keys(), "updated_at"])

            if restock:
                stock_result = self.inventory_service.set_stock(product.id, new_stock)
                if not stock_result.ok:
                    transaction.set_rollback(True)
                    return service_err(stock_result.error, stock_result.error_detail)
                product.refresh_from_db(fields=["stock", "is_sold"])

            self.logger.info(f"Updated product {product_id}, fields={sorted(cleaned)}, restock={restock}")
            return service_ok(product)

        except Exception as e:
            transaction.set_rollback(True)
            self.logger.error(f"Error updating product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def delete_product(self, user: User, product_id) -> ServiceResult[bool]:
        """
        Delete a product (owner only).

        Products referenced by orders cannot be deleted.
        """
        try:
            product = Product.objects.get(id=product_id)
        except (Product.DoesNotExist, DjangoValidationError):
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        if product.seller_id != user.id:
            return service_err(ErrorCodes.NOT_PRODUCT_OWNER, "You do not own this product")

        try:
            with transaction.atomic():
                product.delete()
        except ProtectedError:
            return service_err(ErrorCodes.PRODUCT_HAS_ORDERS, "Product has orders and cannot be deleted")
        except Exception as e:
            self.logger.error(f"Error deleting product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

        self.logger.info(f"Deleted product {product_id} by user {user.id}")
        return service_ok(True)

    @BaseService.log_performance
    def list_seller_products(self, seller_id) -> ServiceResult[List[Product]]:
        """All products of a seller, sold ones included, newest first."""
        parsed_id = _parse_uuid(seller_id)
        if parsed_id is None:
            return service_ok([])
        try:
            products = Product.objects.select_related("category").filter(seller_id=parsed_id).order_by("-created_at")
            return service_ok(list(products))
        except Exception as e:
            self.logger.error(f"Error listing products of seller {seller_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    def _clean_product_data(self, data: Dict[str, Any]) -> Tuple[Dict[str, Any], Optional[ServiceResult]]:
        """Validate the writable product fields present in data."""
        cleaned: Dict[str, Any] = {}

        def invalid(message):
            return cleaned, service_err(ErrorCodes.INVALID_PRODUCT_DATA, message)

        if "name" in data:
            name = str(data["name"] or "").strip()
            if not name:
                return invalid("Name cannot be empty")
            cleaned["name"] = name[:200]

        if "category_id" in data:
            category_id = _parse_int(data["category_id"])
            category = Category.objects.filter(id=category_id).first() if category_id is not None else None
            if category is None:
                return invalid(f"Category {data['category_id']} does not exist")
            cleaned["category"] = category

        if "price" in data:
            price = _parse_decimal(data["price"])
            if price is None or price <= 0 or price > MAX_PRICE:
                return invalid("Invalid price value")
            cleaned["price"] = price.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

        if "condition" in data:
            if data["condition"] not in CONDITIONS:
                return invalid("Invalid condition value")
            cleaned["condition"] = data["condition"]

        if "stock" in data:
            if data["stock"] is None:
                cleaned["stock"] = None
            else:
                stock = _parse_int(data["stock"])
                if stock is None or stock < 0:
                    return invalid("Invalid stock value")
                cleaned["stock"] = stock

        if "description" in data:
            cleaned["description"] = data["description"] or ""
        if "location" in data:
            cleaned["location"] = data["location"] or ""
        if "images" in data:
            cleaned["images"] = _normalize_images(data["images"])

        return cleaned, None
