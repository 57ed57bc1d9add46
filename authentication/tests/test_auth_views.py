from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from authentication.infra.auth_providers.jwt_resolver import JWTIdentityResolver
from marketplace.tests.factories import UserFactory


User = get_user_model()


class RegisterLoginTest(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_register_returns_user_and_tokens(self):
        response = self.client.post(
            reverse("register"),
            {"name": "Dewi", "email": "Dewi@Example.com", "password": "rahasia-kuat-123", "phone": "0812"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data["data"]
        self.assertEqual(data["user"]["email"], "dewi@example.com")
        self.assertFalse(data["user"]["is_seller"])
        self.assertIn("access", data["tokens"])
        self.assertTrue(User.objects.filter(email="dewi@example.com").exists())

    def test_register_rejects_duplicate_email(self):
        UserFactory(email="ada@example.com")

        response = self.client.post(
            reverse("register"),
            {"name": "Ada", "email": "ADA@example.com", "password": "rahasia-kuat-123"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])
        self.assertIn("email", response.data["errors"])

    def test_register_requires_fields(self):
        response = self.client.post(reverse("register"), {"email": "x@example.com"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("name", response.data["errors"])
        self.assertIn("password", response.data["errors"])

    def test_login_and_use_bearer_token(self):
        user = UserFactory(email="login@example.com")

        response = self.client.post(
            reverse("login"), {"email": "login@example.com", "password": "defaultpassword"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        access = response.data["data"]["access"]
        self.assertEqual(response.data["data"]["user"]["id"], str(user.id))

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        response = self.client.get(reverse("marketplace:user-me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["email"], "login@example.com")

    def test_login_wrong_password(self):
        UserFactory(email="salah@example.com")

        response = self.client.post(
            reverse("login"), {"email": "salah@example.com", "password": "bukan"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])

    def test_garbage_bearer_token_is_rejected(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

        response = self.client.get(reverse("marketplace:user-me"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"], "authentication_failed")


class JWTIdentityResolverTest(TestCase):
    def setUp(self):
        self.resolver = JWTIdentityResolver()

    def test_resolves_user_id(self):
        user = UserFactory()
        token = AccessToken.for_user(user)

        self.assertEqual(self.resolver.resolve(str(token)), str(user.id))

    def test_invalid_credentials(self):
        self.assertIsNone(self.resolver.resolve(""))
        self.assertIsNone(self.resolver.resolve("abc.def.ghi"))
