from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from chat.models import Message
from core.models import ActivityLogEntry
from core.sanitizers import MAX_MESSAGE_LENGTH
from notifications.models import Notification
from projects.models import Project
from projects.services import AddMember, CreateProject

User = get_user_model()


class ChatAPITestCase(TestCase):
    def setUp(self):
        self.client = APIClient()

        self.alice = User.objects.create_user(username="alice", email="alice@example.com", password="pass")
        self.bob = User.objects.create_user(username="bob", email="bob@example.com", password="pass")
        self.outsider = User.objects.create_user(username="out", email="out@example.com", password="pass")

        self.project = CreateProject(
            self.alice, title="Chat", visibility=Project.VISIBILITY_PRIVATE
        ).execute()
        self.messages_url = reverse("project-messages", args=[self.project.pk])

        self.client.force_authenticate(user=self.alice)

    def _mentions(self, user):
        return Notification.objects.filter(user=user, type=Notification.TYPE_MENTION)

    def test_send_marks_sender_as_reader(self):
        response = self.client.post(self.messages_url, {"content": "hello"}, format="json")

        self.assertEqual(
            response.status_code,
            201,
            f"Status: {response.status_code}, Content: {getattr(response, 'data', response.content)}",
        )
        message = Message.objects.get(pk=response.data["id"])
        self.assertEqual(list(message.read_by.all()), [self.alice])
        self.assertTrue(response.data["is_read"])

    def test_mention_of_member_notifies_once(self):
        AddMember(self.alice, self.project.pk, email=self.bob.email, role="viewer").execute()

        self.client.post(
            self.messages_url, {"content": "ping @bob@example.com and @bob@example.com!"}, format="json"
        )

        self.assertEqual(self._mentions(self.bob).count(), 1)

    def test_mention_of_non_member_is_ignored(self):
        response = self.client.post(self.messages_url, {"content": "ping @bob@example.com"}, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(self._mentions(self.bob).count(), 0)

    def test_self_mention_is_ignored(self):
        self.client.post(self.messages_url, {"content": "note to @alice@example.com"}, format="json")
        self.assertEqual(self._mentions(self.alice).count(), 0)

    def test_over_long_message_is_rejected_whole(self):
        AddMember(self.alice, self.project.pk, email=self.bob.email, role="viewer").execute()
        content = "x" * MAX_MESSAGE_LENGTH + " @bob@example.com"

        response = self.client.post(self.messages_url, {"content": content}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("content", response.data["errors"])
        self.assertFalse(Message.objects.exists())
        self.assertEqual(self._mentions(self.bob).count(), 0)

    def test_message_at_length_limit_is_stored_intact(self):
        content = "y" * MAX_MESSAGE_LENGTH

        response = self.client.post(self.messages_url, {"content": content}, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(Message.objects.get().content, content)

    def test_non_member_cannot_send(self):
        self.client.force_authenticate(user=self.outsider)
        response = self.client.post(self.messages_url, {"content": "let me in"}, format="json")

        self.assertEqual(response.status_code, 403)
        self.assertFalse(Message.objects.exists())

    def test_system_alert_cannot_be_sent(self):
        response = self.client.post(
            self.messages_url, {"content": "fake", "type": "system_alert"}, format="json"
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(Message.objects.exists())

    def test_file_message_logs_upload(self):
        response = self.client.post(
            self.messages_url,
            {"type": "file", "file_url": "https://files.example.com/spec.pdf", "file_name": "spec.pdf"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertTrue(
            ActivityLogEntry.objects.filter(project=self.project, action="file_uploaded").exists()
        )

    def test_reply_must_stay_in_project(self):
        other = CreateProject(self.alice, title="Other").execute()
        foreign = Message.objects.create(project=other, sender=self.alice, content="elsewhere")

        response = self.client.post(
            self.messages_url, {"content": "re", "reply_to": foreign.pk}, format="json"
        )
        self.assertEqual(response.status_code, 400)

    def test_list_returns_newest_page_oldest_first(self):
        for i in range(5):
            Message.objects.create(project=self.project, sender=self.alice, content=f"m{i}")

        response = self.client.get(self.messages_url, {"limit": 3})

        self.assertEqual(response.status_code, 200)
        self.assertEqual([m["content"] for m in response.data], ["m2", "m3", "m4"])

    def test_private_messages_hidden_from_outsider(self):
        Message.objects.create(project=self.project, sender=self.alice, content="secret")

        self.client.force_authenticate(user=self.outsider)
        response = self.client.get(self.messages_url)

        self.assertEqual(response.data, [])

    def test_invalid_limit(self):
        response = self.client.get(self.messages_url, {"limit": "zero"})
        self.assertEqual(response.status_code, 400)

    def test_mark_read_only_grows(self):
        AddMember(self.alice, self.project.pk, email=self.bob.email, role="viewer").execute()
        first = Message.objects.create(project=self.project, sender=self.alice, content="one")
        second = Message.objects.create(project=self.project, sender=self.alice, content="two")
        first.read_by.add(self.alice)

        self.client.force_authenticate(user=self.bob)
        url = reverse("messages-read")

        response = self.client.post(url, {"message_ids": [first.pk, second.pk]}, format="json")
        self.assertEqual(response.data["marked_read"], 2)

        again = self.client.post(url, {"message_ids": [first.pk, second.pk]}, format="json")
        self.assertEqual(again.data["marked_read"], 0)

        self.assertEqual(set(first.read_by.all()), {self.alice, self.bob})

    def test_mark_read_skips_non_member_projects(self):
        message = Message.objects.create(project=self.project, sender=self.alice, content="secret")

        self.client.force_authenticate(user=self.outsider)
        response = self.client.post(
            reverse("messages-read"), {"message_ids": [message.pk, 987654]}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["marked_read"], 0)
        self.assertFalse(message.read_by.filter(pk=self.outsider.pk).exists())
