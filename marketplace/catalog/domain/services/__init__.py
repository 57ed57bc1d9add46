from .catalog_service import CatalogService
from .profile_service import ProfileService
from .seller_rating_service import SellerRatingService


__all__ = [
    "CatalogService",
    "ProfileService",
    "SellerRatingService",
]
