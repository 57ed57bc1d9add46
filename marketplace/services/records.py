"""
Typed read models returned by marketplace services.

Views render these with plain DRF serializers; services never hand raw
querysets across the API boundary for the order and cart flows.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID


@dataclass
class OrderSummary:
    id: UUID
    buyer_id: UUID
    seller_id: UUID
    product_id: UUID
    quantity: int
    total_price: Decimal
    payment_method: str
    shipping_address: str
    notes: str
    status: str
    created_at: datetime
    product_name: str
    images: List[str]
    seller_name: str
    seller_avatar: str
    buyer_name: str

    @property
    def total_amount(self) -> Decimal:
        return self.total_price

    @classmethod
    def _base_fields(cls, order) -> dict:
        product = order.product
        return {
            "id": order.id,
            "buyer_id": order.buyer_id,
            "seller_id": order.seller_id,
            "product_id": order.product_id,
            "quantity": order.quantity,
            "total_price": order.total_price,
            "payment_method": order.payment_method,
            "shipping_address": order.shipping_address,
            "notes": order.notes,
            "status": order.status,
            "created_at": order.created_at,
            "product_name": product.name,
            "images": list(product.images or []),
            "seller_name": order.seller.name,
            "seller_avatar": order.seller.avatar,
            "buyer_name": order.buyer.name,
        }

    @classmethod
    def from_order(cls, order) -> "OrderSummary":
        """Build from an Order with product, seller and buyer loaded."""
        return cls(**cls._base_fields(order))


@dataclass
class OrderDetail(OrderSummary):
    description: str = ""
    seller_phone: str = ""
    seller_address: str = ""
    buyer_phone: str = ""

    @classmethod
    def from_order(cls, order) -> "OrderDetail":
        return cls(
            **cls._base_fields(order),
            description=order.product.description,
            seller_phone=order.seller.phone,
            seller_address=order.seller.address,
            buyer_phone=order.buyer.phone,
        )


@dataclass
class StockChange:
    """Result of a ledger write. Stock values are None for unlimited products."""

    product_id: UUID
    old_stock: Optional[int]
    new_stock: Optional[int]
    is_sold: bool


@dataclass
class SellerRating:
    seller_id: UUID
    rating: Decimal
    total_reviews: int


@dataclass
class CartLine:
    id: int
    quantity: int
    product_id: UUID
    name: str
    price: Decimal
    images: List[str]
    condition: str
    seller_id: UUID
    seller_name: str

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    @classmethod
    def from_item(cls, item) -> "CartLine":
        product = item.product
        return cls(
            id=item.id,
            quantity=item.quantity,
            product_id=product.id,
            name=product.name,
            price=product.price,
            images=list(product.images or []),
            condition=product.condition,
            seller_id=product.seller_id,
            seller_name=product.seller.name,
        )


@dataclass
class CartView:
    items: List[CartLine] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((line.line_total for line in self.items), Decimal("0"))


@dataclass
class UserProfile:
    id: UUID
    name: str
    email: str
    phone: str
    address: str
    city: str
    avatar: str
    is_seller: bool
    rating: Decimal
    total_reviews: int
    date_joined: datetime
    active_products: Optional[int] = None
    sold_products: Optional[int] = None

    @classmethod
    def from_user(cls, user, active_products: Optional[int] = None, sold_products: Optional[int] = None):
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            phone=user.phone,
            address=user.address,
            city=user.city,
            avatar=user.avatar,
            is_seller=user.is_seller,
            rating=user.rating,
            total_reviews=user.total_reviews,
            date_joined=user.date_joined,
            active_products=active_products,
            sold_products=sold_products,
        )
