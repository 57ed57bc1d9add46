from marketplace.cart.domain.models import CartItem
from marketplace.catalog.domain.models import Category, Product
from marketplace.ordering.domain.models import Order, Review


__all__ = [
    "Category",
    "Product",
    "CartItem",
    "Order",
    "Review",
]
