"""
Dependency Injection Container
================================

Simple service locator that builds marketplace services with their
collaborators passed through constructors. Instances are created lazily and
cached for the life of the process.

Usage:
    from infrastructure.container import container

    orders = container.order_service()
    resolver = container.identity_resolver()
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for domain services and the identity resolver.

    Implements lazy initialization and caching of service instances.
    Singleton: every ServiceContainer() call returns the same object.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._reset_instances()
            self._initialized = True
            logger.info("Service container initialized")

    def _reset_instances(self):
        self._identity_resolver = None
        self._inventory_service = None
        self._rating_service = None
        self._order_service = None
        self._catalog_service = None
        self._cart_service = None
        self._profile_service = None

    def identity_resolver(self):
        """Get the bearer credential resolver."""
        if self._identity_resolver is None:
            from authentication.infra.auth_providers.jwt_resolver import JWTIdentityResolver

            self._identity_resolver = JWTIdentityResolver()
            logger.debug("Created JWTIdentityResolver")
        return self._identity_resolver

    def inventory_service(self):
        """Get InventoryService instance."""
        if self._inventory_service is None:
            from marketplace.services import InventoryService

            self._inventory_service = InventoryService()
            logger.debug("Created InventoryService")
        return self._inventory_service

    def rating_service(self):
        """Get SellerRatingService instance."""
        if self._rating_service is None:
            from marketplace.services import SellerRatingService

            self._rating_service = SellerRatingService()
            logger.debug("Created SellerRatingService")
        return self._rating_service

    def order_service(self):
        """Get OrderService instance."""
        if self._order_service is None:
            from marketplace.services import OrderService

            # OrderService depends on InventoryService and SellerRatingService
            self._order_service = OrderService(
                inventory_service=self.inventory_service(),
                rating_service=self.rating_service(),
            )
            logger.debug("Created OrderService")
        return self._order_service

    def catalog_service(self):
        """Get CatalogService instance."""
        if self._catalog_service is None:
            from marketplace.services import CatalogService

            self._catalog_service = CatalogService(inventory_service=self.inventory_service())
            logger.debug("Created CatalogService")
        return self._catalog_service

    def cart_service(self):
        """Get CartService instance."""
        if self._cart_service is None:
            from marketplace.services import CartService

            self._cart_service = CartService(inventory_service=self.inventory_service())
            logger.debug("Created CartService")
        return self._cart_service

    def profile_service(self):
        """Get ProfileService instance."""
        if self._profile_service is None:
            from marketplace.services import ProfileService

            self._profile_service = ProfileService()
            logger.debug("Created ProfileService")
        return self._profile_service

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing or when switching between environments.
        """
        self._reset_instances()
        logger.info("Service container reset")


# Global singleton instance
container = ServiceContainer()
