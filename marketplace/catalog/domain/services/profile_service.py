"""
ProfileService - public seller/buyer profiles.
"""

from typing import Any, Dict

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Count, Q

from marketplace.catalog.domain.models.catalog import Product
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.services.records import UserProfile

User = get_user_model()

EDITABLE_FIELDS = ("name", "phone", "address", "city", "avatar")


class ProfileService(BaseService):
    @BaseService.log_performance
    def get_profile(self, user_id) -> ServiceResult[UserProfile]:
        """Public profile with counts of active and sold listings."""
        try:
            user = User.objects.get(id=user_id)
        except (User.DoesNotExist, DjangoValidationError):
            return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")

        counts = Product.objects.filter(seller_id=user.id).aggregate(
            active=Count("id", filter=Q(is_sold=False)),
            sold=Count("id", filter=Q(is_sold=True)),
        )
        return service_ok(UserProfile.from_user(user, counts["active"] or 0, counts["sold"] or 0))

    @BaseService.log_performance
    def get_own_profile(self, user: User) -> ServiceResult[UserProfile]:
        return service_ok(UserProfile.from_user(user))

    @BaseService.log_performance
    def update_profile(self, user: User, user_id, data: Dict[str, Any]) -> ServiceResult[UserProfile]:
        """
        Update contact fields of the caller's own profile.

        Unknown keys are ignored; name cannot be blanked.
        """
        if str(user.id) != str(user_id):
            return service_err(ErrorCodes.NOT_PROFILE_OWNER, "Not authorized")

        updates = {key: data[key] for key in EDITABLE_FIELDS if key in data}
        if "name" in updates and not str(updates["name"] or "").strip():
            return service_err(ErrorCodes.VALIDATION_ERROR, "Name cannot be empty")

        for field_name, value in updates.items():
            setattr(user, field_name, str(value or "").strip())
        if updates:
            user.save(update_fields=list(updates))

        self.logger.info(f"Profile {user.id} updated: fields={sorted(updates)}")
        return service_ok(UserProfile.from_user(user))

    @BaseService.log_performance
    def become_seller(self, user: User, user_id) -> ServiceResult[UserProfile]:
        if str(user.id) != str(user_id):
            return service_err(ErrorCodes.NOT_PROFILE_OWNER, "Not authorized")

        if not user.is_seller:
            user.is_seller = True
            user.save(update_fields=["is_seller"])
            self.logger.info(f"User {user.id} is now a seller")
        return service_ok(UserProfile.from_user(user))
