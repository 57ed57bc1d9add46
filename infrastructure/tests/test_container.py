"""
Service Container Tests
========================

Unit tests for dependency injection container.
"""

from django.test import TestCase

from authentication.infra.auth_providers.base import IdentityResolver
from infrastructure.container import ServiceContainer, container
from marketplace.services import (
    CartService,
    CatalogService,
    InventoryService,
    OrderService,
    ProfileService,
    SellerRatingService,
)


class ServiceContainerTest(TestCase):
    """Test ServiceContainer implementation."""

    def setUp(self):
        # Reset container before each test
        container.reset()

    def test_container_is_singleton(self):
        """Test that ServiceContainer is a singleton."""
        container1 = ServiceContainer()
        container2 = ServiceContainer()

        self.assertIs(container1, container2)
        self.assertIs(container1, container)

    def test_services_are_cached(self):
        for factory_method, service_class in (
            (container.inventory_service, InventoryService),
            (container.rating_service, SellerRatingService),
            (container.order_service, OrderService),
            (container.catalog_service, CatalogService),
            (container.cart_service, CartService),
            (container.profile_service, ProfileService),
        ):
            service = factory_method()
            self.assertIsInstance(service, service_class)
            self.assertIs(service, factory_method())

    def test_shared_inventory_ledger(self):
        """Order, catalog and cart services share one InventoryService."""
        inventory = container.inventory_service()

        self.assertIs(container.order_service().inventory_service, inventory)
        self.assertIs(container.catalog_service().inventory_service, inventory)
        self.assertIs(container.cart_service().inventory_service, inventory)
        self.assertIs(container.order_service().rating_service, container.rating_service())

    def test_identity_resolver(self):
        self.assertIsInstance(container.identity_resolver(), IdentityResolver)

    def test_reset_clears_instances(self):
        """Test that reset clears all cached instances."""
        order_service = container.order_service()

        container.reset()

        self.assertIsNot(order_service, container.order_service())
