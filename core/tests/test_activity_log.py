from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from boards.models import Task
from chat.models import Message
from core.models import ActivityLogEntry, ActivityLogError
from core.services import ActivityService
from feed.models import GlobalPost
from polls.models import PollOption, PollVote
from projects.models import Membership, Project
from projects.services import CreateProject

User = get_user_model()


class ActivityLogTestCase(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="alice", email="alice@example.com", password="x")
        self.project = CreateProject(self.user, title="Log").execute()
        self.entry = ActivityService.log_activity(
            self.project, self.user, "task_created", target=42, details="Created task"
        )

    def test_entry_is_written(self):
        self.assertEqual(self.entry.target_entity, "42")
        self.assertEqual(self.entry.metadata, {})

    def test_entries_cannot_be_updated(self):
        self.entry.details = "rewritten"
        with self.assertRaises(ActivityLogError):
            self.entry.save()

    def test_entries_cannot_be_deleted(self):
        with self.assertRaises(ActivityLogError):
            self.entry.delete()
        self.assertTrue(ActivityLogEntry.objects.filter(pk=self.entry.pk).exists())

    def test_timeline_is_newest_first(self):
        later = ActivityService.log_activity(self.project, self.user, "poll_created", target=7)
        timeline = list(ActivityService.project_timeline(self.project, 10))
        self.assertEqual(timeline[0], later)


class ErrorEnvelopeTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username="alice", email="alice@example.com", password="x")
        self.client.force_authenticate(user=self.user)

    def test_validation_errors_are_wrapped(self):
        response = self.client.post(reverse("project-list"), {}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["status_code"], 400)
        self.assertEqual(response.data["code"], "invalid_argument")
        self.assertIn("title", response.data["errors"])

    def test_not_found_is_wrapped(self):
        response = self.client.post(
            reverse("project-status", args=[123456]), {"status": "archived"}, format="json"
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["code"], "not_found")

    def test_unauthenticated_is_401(self):
        self.client.force_authenticate(user=None)
        response = self.client.post(reverse("project-list"), {"title": "X"}, format="json")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["code"], "unauthenticated")


class HealthCheckTestCase(TestCase):
    def test_health(self):
        response = APIClient().get(reverse("health-check"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], "ok")
        self.assertTrue(response.data["db"])
        self.assertEqual(response.data["presence"]["heartbeat_seconds"], 30)


class SeedDataTestCase(TestCase):
    def test_seed_builds_demo_workspace(self):
        call_command("seed_data", stdout=StringIO())

        project = Project.objects.get(title="Campus Hackathon Platform")
        self.assertEqual(Membership.objects.filter(project=project).count(), 3)
        self.assertEqual(Task.objects.filter(project=project).count(), 3)
        self.assertEqual(Message.objects.filter(project=project).count(), 2)
        self.assertEqual(PollVote.objects.count(), sum(PollOption.objects.values_list("votes", flat=True)))
        self.assertEqual(GlobalPost.objects.count(), 1)

    def test_seed_is_rerunnable(self):
        call_command("seed_data", stdout=StringIO())
        call_command("seed_data", stdout=StringIO())

        self.assertEqual(Project.objects.filter(title="Campus Hackathon Platform").count(), 1)
