from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from feed.models import GlobalPost, PostComment, PostLike
from projects.models import Project
from projects.services import CreateProject

User = get_user_model()


class FeedAPITestCase(TestCase):
    def setUp(self):
        self.client = APIClient()

        self.alice = User.objects.create_user(
            username="alice", email="alice@example.com", password="pass", name="Alice Rivera"
        )
        self.bob = User.objects.create_user(username="bob", email="bob@example.com", password="pass")

        self.client.force_authenticate(user=self.alice)
        self.post = GlobalPost.objects.create(author=self.alice, content="Hello world")

    def _action_url(self, action, post_id=None):
        return reverse("post-interaction", args=[post_id or self.post.pk, action])

    def test_create_post(self):
        response = self.client.post(
            reverse("post-list"), {"content": "Hiring!", "type": "announcement"}, format="json"
        )

        self.assertEqual(
            response.status_code,
            201,
            f"Status: {response.status_code}, Content: {getattr(response, 'data', response.content)}",
        )
        self.assertEqual(response.data["author"]["name"], "Alice Rivera")
        self.assertEqual(response.data["like_count"], 0)

    def test_toggle_like_twice_restores_likes(self):
        first = self.client.post(self._action_url("like"))
        self.assertEqual(first.data, {"liked": True, "like_count": 1})

        second = self.client.post(self._action_url("like"))
        self.assertEqual(second.data, {"liked": False, "like_count": 0})
        self.assertFalse(PostLike.objects.exists())

    def test_like_unknown_post(self):
        response = self.client.post(self._action_url("like", post_id=999999))
        self.assertEqual(response.status_code, 404)

    def test_empty_comment_rejected(self):
        response = self.client.post(self._action_url("comment"), {"content": "   "}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertFalse(PostComment.objects.exists())

    def test_unknown_action(self):
        self.assertEqual(self.client.post(self._action_url("share")).status_code, 400)

    def test_list_includes_comments_and_like_state(self):
        self.client.force_authenticate(user=self.bob)
        self.client.post(self._action_url("like"))
        self.client.post(self._action_url("comment"), {"content": "first"}, format="json")
        self.client.post(self._action_url("comment"), {"content": "second"}, format="json")

        response = self.client.get(reverse("post-list"))

        item = response.data[0]
        self.assertEqual(item["like_count"], 1)
        self.assertTrue(item["is_liked"])
        self.assertEqual([c["content"] for c in item["comments"]], ["first", "second"])
        self.assertEqual(item["comments"][0]["author"]["name"], "bob")

    def test_list_is_public_and_newest_first(self):
        GlobalPost.objects.create(author=self.bob, content="Later")

        self.client.force_authenticate(user=None)
        response = self.client.get(reverse("post-list"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual([p["content"] for p in response.data], ["Later", "Hello world"])
        self.assertFalse(response.data[0]["is_liked"])


class GlobalSearchTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()

        self.alice = User.objects.create_user(
            username="alice", email="alice@example.com", password="pass", name="Alice Rivera"
        )
        self.client.force_authenticate(user=self.alice)

        CreateProject(self.alice, title="Design System", tags=["ui"]).execute()
        CreateProject(self.alice, title="Backend", description="APIs", tags=["Design-Ops"]).execute()
        CreateProject(self.alice, title="Secret Design", visibility=Project.VISIBILITY_PRIVATE).execute()

    def _search(self, **params):
        return self.client.get(reverse("global-search"), params)

    def test_projects_match_title_description_and_tags(self):
        response = self._search(q="DESIGN", type="projects")

        self.assertEqual(response.status_code, 200)
        self.assertEqual({p["title"] for p in response.data["projects"]}, {"Design System", "Backend"})
        self.assertNotIn("users", response.data)

    def test_users_match_name_and_email(self):
        by_name = self._search(q="rivera", type="users")
        by_email = self._search(q="ALICE@", type="users")

        self.assertEqual([u["email"] for u in by_name.data["users"]], ["alice@example.com"])
        self.assertEqual([u["email"] for u in by_email.data["users"]], ["alice@example.com"])

    def test_all_returns_both_sections(self):
        response = self._search(q="alice")
        self.assertEqual(set(response.data), {"projects", "users"})

    def test_invalid_type(self):
        self.assertEqual(self._search(q="x", type="tasks").status_code, 400)
