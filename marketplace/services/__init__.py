"""
Marketplace Service Layer

Business logic for the marketplace app, organized into domain services.

Services:
- CatalogService: Categories, product browsing and CRUD
- CartService: Shopping cart operations
- OrderService: Order lifecycle and reviews
- InventoryService: Stock ledger
- SellerRatingService: Seller rating aggregate
- ProfileService: User profiles

Usage:
    from infrastructure.container import container

    result = container.order_service().list_orders(user)
    if result.ok:
        orders = result.value
    else:
        error = result.error
"""

from .base import BaseService, ErrorCodes, ErrorKinds, ServiceResult, service_err, service_ok
from marketplace.cart.domain.services.cart_service import CartService
from marketplace.cart.domain.services.inventory_service import InventoryService
from marketplace.catalog.domain.services.catalog_service import CatalogService
from marketplace.catalog.domain.services.profile_service import ProfileService
from marketplace.catalog.domain.services.seller_rating_service import SellerRatingService
from marketplace.ordering.domain.services.order_service import OrderService

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Helper functions
    "service_ok",
    "service_err",
    # Error codes
    "ErrorCodes",
    "ErrorKinds",
    # Services
    "CatalogService",
    "CartService",
    "InventoryService",
    "OrderService",
    "ProfileService",
    "SellerRatingService",
]
