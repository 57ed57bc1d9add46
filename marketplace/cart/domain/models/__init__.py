from .cart import CartItem


__all__ = [
    "CartItem",
]
