# Marketplace API Serializers

from marketplace.cart.api.serializers.cart_serializers import (
    AddToCartRequestSerializer,
    CartLineSerializer,
    CartSerializer,
    UpdateCartRequestSerializer,
)
from marketplace.catalog.api.serializers.category_serializers import CategorySerializer
from marketplace.catalog.api.serializers.product_serializers import (
    ProductDetailSerializer,
    ProductListSerializer,
    ProductWriteRequestSerializer,
    SellerProductSerializer,
)
from marketplace.catalog.api.serializers.user_serializers import ProfileUpdateRequestSerializer, UserProfileSerializer
from marketplace.ordering.api.serializers.order_serializers import (
    CreateOrderRequestSerializer,
    CreateReviewRequestSerializer,
    OrderDetailSerializer,
    OrderSummarySerializer,
    UpdateOrderStatusRequestSerializer,
)

# Import response serializers for API documentation
from .response_serializers import (
    CartResponseSerializer,
    CategoryDetailResponseSerializer,
    CategoryListResponseSerializer,
    ErrorResponseSerializer,
    OrderCreatedResponseSerializer,
    OrderDetailResponseSerializer,
    OrderListResponseSerializer,
    ProductCreatedResponseSerializer,
    ProductDetailResponseSerializer,
    ProductListResponseSerializer,
    ReviewCreatedResponseSerializer,
    SuccessResponseSerializer,
    UserProfileResponseSerializer,
)


__all__ = [
    "AddToCartRequestSerializer",
    "CartLineSerializer",
    "CartSerializer",
    "UpdateCartRequestSerializer",
    "CategorySerializer",
    "ProductDetailSerializer",
    "ProductListSerializer",
    "ProductWriteRequestSerializer",
    "SellerProductSerializer",
    "ProfileUpdateRequestSerializer",
    "UserProfileSerializer",
    "CreateOrderRequestSerializer",
    "CreateReviewRequestSerializer",
    "OrderDetailSerializer",
    "OrderSummarySerializer",
    "UpdateOrderStatusRequestSerializer",
    "CartResponseSerializer",
    "CategoryDetailResponseSerializer",
    "CategoryListResponseSerializer",
    "ErrorResponseSerializer",
    "OrderCreatedResponseSerializer",
    "OrderDetailResponseSerializer",
    "OrderListResponseSerializer",
    "ProductCreatedResponseSerializer",
    "ProductDetailResponseSerializer",
    "ProductListResponseSerializer",
    "ReviewCreatedResponseSerializer",
    "SuccessResponseSerializer",
    "UserProfileResponseSerializer",
]
