from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from users.models import UNKNOWN_USER_NAME, display_name

User = get_user_model()


class DisplayNameTestCase(TestCase):
    def test_prefers_name(self):
        user = User(username="a", email="ann@example.com", name="Ann Lee")
        self.assertEqual(display_name(user), "Ann Lee")

    def test_falls_back_to_email_local_part(self):
        user = User(username="a", email="ann@example.com", name="  ")
        self.assertEqual(user.display_name, "ann")

    def test_unknown_user(self):
        self.assertEqual(display_name(User(username="a")), UNKNOWN_USER_NAME)
        self.assertEqual(display_name(None), UNKNOWN_USER_NAME)


class MeViewTestCase(TestCase):
    def test_me_returns_profile(self):
        user = User.objects.create_user(username="ann", email="ann@example.com", password="x")
        client = APIClient()
        client.force_authenticate(user=user)

        response = client.get(reverse("users-me"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["email"], "ann@example.com")
        self.assertEqual(response.data["display_name"], "ann")
