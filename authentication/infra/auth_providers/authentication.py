import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from drf_spectacular.extensions import OpenApiAuthenticationExtension
from drf_spectacular.plumbing import build_bearer_security_scheme_object
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from infrastructure.container import container


User = get_user_model()
logger = logging.getLogger(__name__)


class BearerIdentityAuthentication(BaseAuthentication):
    """
    DRF authentication backed by the configured IdentityResolver.

    Reads ``Authorization: Bearer <token>``, asks the resolver for the user id
    and loads that user. Requests without a bearer header stay anonymous.
    """

    keyword = b"bearer"

    def authenticate(self, request):
        auth = get_authorization_header(request).split()

        if not auth or auth[0].lower() != self.keyword:
            return None

        if len(auth) != 2:
            raise exceptions.AuthenticationFailed("Invalid token header")

        try:
            token = auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed("Invalid token header") from None

        user_id = container.identity_resolver().resolve(token)
        if user_id is None:
            raise exceptions.AuthenticationFailed("Invalid token")

        try:
            user = User.objects.get(id=user_id)
        except (User.DoesNotExist, ValidationError):
            logger.warning(f"Token resolved to unknown user {user_id}")
            raise exceptions.AuthenticationFailed("User not found") from None

        if not user.is_active:
            raise exceptions.AuthenticationFailed("User is inactive")

        return user, token

    def authenticate_header(self, request):
        return 'Bearer realm="api"'


class BearerIdentityAuthenticationScheme(OpenApiAuthenticationExtension):
    target_class = "authentication.infra.auth_providers.authentication.BearerIdentityAuthentication"
    name = "bearerAuth"

    def get_security_definition(self, auto_schema):
        return build_bearer_security_scheme_object(header_name="Authorization", token_prefix="Bearer", bearer_format="JWT")
