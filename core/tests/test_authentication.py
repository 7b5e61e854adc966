from datetime import datetime, timedelta, timezone

import jwt
from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient

User = get_user_model()

SECRET = "test-identity-secret"


def make_token(sub="idp-123", expires_in=timedelta(hours=1), **claims):
    payload = {
        "sub": sub,
        "aud": "authenticated",
        "exp": datetime.now(timezone.utc) + expires_in,
        **claims,
    }
    return jwt.encode(payload, SECRET, algorithm="HS256")


@override_settings(IDENTITY_JWT_SECRET=SECRET, IDENTITY_JWT_AUDIENCE="authenticated")
class IdentityTokenAuthenticationTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("users-me")

    def _get(self, token):
        return self.client.get(self.url, HTTP_AUTHORIZATION=f"Bearer {token}")

    def test_first_request_creates_user(self):
        response = self._get(make_token(email="dana@example.com", name="Dana"))

        self.assertEqual(response.status_code, 200)
        user = User.objects.get(external_id="idp-123")
        self.assertEqual(user.email, "dana@example.com")
        self.assertEqual(response.data["display_name"], "Dana")

    def test_existing_email_is_linked(self):
        user = User.objects.create_user(username="dana", email="dana@example.com", password="x")

        self._get(make_token(email="dana@example.com"))

        user.refresh_from_db()
        self.assertEqual(user.external_id, "idp-123")
        self.assertEqual(User.objects.count(), 1)

    def test_claims_refresh_profile(self):
        self._get(make_token(email="dana@example.com", name="Dana"))
        self._get(make_token(email="dana@example.com", name="Dana Scully"))

        self.assertEqual(User.objects.get(external_id="idp-123").name, "Dana Scully")

    def test_expired_token_rejected(self):
        response = self._get(make_token(expires_in=timedelta(seconds=-10)))
        self.assertEqual(response.status_code, 401)

    def test_bad_signature_is_unauthenticated(self):
        token = jwt.encode({"sub": "x", "aud": "authenticated"}, "wrong-secret", algorithm="HS256")
        response = self._get(token)

        self.assertEqual(response.status_code, 401)
        self.assertFalse(User.objects.exists())
