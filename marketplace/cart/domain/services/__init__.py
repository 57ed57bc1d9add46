from .cart_service import CartService
from .inventory_service import InventoryService

__all__ = [
    "CartService",
    "InventoryService",
]
