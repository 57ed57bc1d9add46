from .order import Order
from .review import Review


__all__ = [
    "Order",
    "Review",
]
