import logging
from typing import Optional

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from .base import IdentityResolver


logger = logging.getLogger(__name__)


class JWTIdentityResolver(IdentityResolver):
    """Resolves simplejwt access tokens to the user id stored in their claims."""

    def resolve(self, credential: str) -> Optional[str]:
        if not credential:
            return None
        try:
            token = AccessToken(credential)
        except TokenError as e:
            logger.debug(f"Rejected bearer token: {e}")
            return None

        user_id = token.get(api_settings.USER_ID_CLAIM)
        if user_id is None:
            logger.warning("Access token is missing the user id claim")
            return None
        return str(user_id)
