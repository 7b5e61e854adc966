from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from boards.services import CreateTask
from chat.services import SendMessage
from feed.services import CreatePost
from polls.services import CreatePoll
from projects.services import AddMember, CreateProject

User = get_user_model()


class AnonymousReadTestCase(TestCase):
    """
    Without a caller only the public project list and the global feed are readable.
    """

    def setUp(self):
        self.alice = User.objects.create_user(username="alice", email="alice@example.com", password="pass")
        self.bob = User.objects.create_user(username="bob", email="bob@example.com", password="pass")

        self.project = CreateProject(self.alice, title="Open Roadmap").execute()
        AddMember(self.alice, self.project.pk, email=self.bob.email, role="editor").execute()

        CreateTask(self.bob, self.project.pk, title="Draft roadmap", priority="high").execute()
        SendMessage(self.alice, self.project.pk, "secret plan @bob@example.com").execute()
        CreatePoll(self.bob, self.project.pk, "Ship it?", ["Yes", "No"]).execute()
        CreatePost(self.alice, "Hello world").execute()

        self.client = APIClient()

    def test_public_project_list_is_open(self):
        response = self.client.get(reverse("project-list"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual([p["title"] for p in response.data], ["Open Roadmap"])

    def test_feed_list_is_open(self):
        response = self.client.get(reverse("post-list"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 1)

    def test_detail_is_null(self):
        response = self.client.get(reverse("project-detail", args=[self.project.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.data)

    def test_project_scoped_lists_are_empty(self):
        for name in ("project-tasks", "project-messages", "project-polls"):
            response = self.client.get(reverse(name, kwargs={"project_id": self.project.pk}))
            self.assertEqual(response.status_code, 200, name)
            self.assertEqual(response.data, [], name)

        response = self.client.get(reverse("project-activity", args=[self.project.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, [])

    def test_presence_requires_identity(self):
        response = self.client.get(reverse("project-presence", args=[self.project.pk]))
        self.assertEqual(response.status_code, 401)

    def test_signed_in_outsider_still_reads_public_project(self):
        outsider = User.objects.create_user(username="out", email="out@example.com", password="pass")
        self.client.force_authenticate(user=outsider)

        response = self.client.get(reverse("project-messages", kwargs={"project_id": self.project.pk}))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([m["content"] for m in response.data], ["secret plan @bob@example.com"])
