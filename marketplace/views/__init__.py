from marketplace.cart.api.views.cart_views import CartViewSet
from marketplace.catalog.api.views.category_views import CategoryViewSet
from marketplace.catalog.api.views.product_views import ProductViewSet
from marketplace.catalog.api.views.profile_views import UserProfileViewSet
from marketplace.ordering.api.views.order_views import OrderViewSet

__all__ = [
    "CartViewSet",
    "CategoryViewSet",
    "OrderViewSet",
    "ProductViewSet",
    "UserProfileViewSet",
]
