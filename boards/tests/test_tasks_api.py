from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from boards.models import Task
from core.models import ActivityLogEntry
from notifications.models import Notification
from projects.models import Project
from projects.services import AddMember, CreateProject

User = get_user_model()


class TaskAPITestCase(TestCase):
    def setUp(self):
        self.client = APIClient()

        self.alice = User.objects.create_user(username="alice", email="alice@example.com", password="pass")
        self.bob = User.objects.create_user(username="bob", email="bob@example.com", password="pass")
        self.vera = User.objects.create_user(username="vera", email="vera@example.com", password="pass")
        self.outsider = User.objects.create_user(username="out", email="out@example.com", password="pass")

        # alice: owner/admin, bob: editor, vera: viewer
        self.project = CreateProject(
            self.alice, title="Board", visibility=Project.VISIBILITY_PRIVATE
        ).execute()
        AddMember(self.alice, self.project.pk, email=self.bob.email, role="editor").execute()
        AddMember(self.alice, self.project.pk, email=self.vera.email, role="viewer").execute()

        self.tasks_url = reverse("project-tasks", args=[self.project.pk])

    def _assigned(self, user):
        return Notification.objects.filter(user=user, type=Notification.TYPE_TASK_ASSIGNED)

    def test_private_tasks_empty_for_outsider(self):
        Task.objects.create(project=self.project, title="Hidden", created_by=self.alice)

        self.client.force_authenticate(user=self.outsider)
        response = self.client.get(self.tasks_url)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, [])

    def test_members_see_tasks_with_profiles(self):
        Task.objects.create(project=self.project, title="Visible", created_by=self.alice, assigned_to=self.bob)

        self.client.force_authenticate(user=self.vera)
        response = self.client.get(self.tasks_url)

        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["created_by"]["name"], "alice")
        self.assertEqual(response.data[0]["assigned_to"]["email"], "bob@example.com")

    def test_status_filter(self):
        Task.objects.create(project=self.project, title="A", created_by=self.alice)
        Task.objects.create(project=self.project, title="B", created_by=self.alice, status="done")

        self.client.force_authenticate(user=self.alice)
        response = self.client.get(self.tasks_url, {"status": "done"})

        self.assertEqual([t["title"] for t in response.data], ["B"])

    def test_editor_creates_task(self):
        self.client.force_authenticate(user=self.bob)
        response = self.client.post(
            self.tasks_url, {"title": "Write copy", "priority": "high"}, format="json"
        )

        self.assertEqual(
            response.status_code,
            201,
            f"Status: {response.status_code}, Content: {getattr(response, 'data', response.content)}",
        )
        task = Task.objects.get(title="Write copy")
        self.assertEqual(task.created_by, self.bob)
        self.assertEqual(task.status, Task.STATUS_TODO)
        self.assertTrue(
            ActivityLogEntry.objects.filter(project=self.project, action="task_created").exists()
        )

    def test_viewer_cannot_create_task(self):
        self.client.force_authenticate(user=self.vera)
        response = self.client.post(self.tasks_url, {"title": "Nope", "priority": "low"}, format="json")

        self.assertEqual(response.status_code, 403)
        self.assertFalse(Task.objects.exists())

    def test_non_member_assignee_rejected(self):
        self.client.force_authenticate(user=self.bob)
        response = self.client.post(
            self.tasks_url,
            {"title": "Orphan", "priority": "low", "assigned_to": self.outsider.pk},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "invalid_argument")
        self.assertFalse(Task.objects.exists())
        self.assertFalse(Notification.objects.filter(type=Notification.TYPE_TASK_ASSIGNED).exists())
        self.assertFalse(ActivityLogEntry.objects.filter(action="task_created").exists())

    def test_create_notifies_assignee_but_not_self(self):
        self.client.force_authenticate(user=self.bob)
        self.client.post(
            self.tasks_url,
            {"title": "For alice", "priority": "medium", "assigned_to": self.alice.pk},
            format="json",
        )
        self.client.post(
            self.tasks_url,
            {"title": "For me", "priority": "medium", "assigned_to": self.bob.pk},
            format="json",
        )

        self.assertEqual(self._assigned(self.alice).count(), 1)
        self.assertEqual(self._assigned(self.bob).count(), 0)

    def test_reassignment_notifies_new_assignee_once(self):
        # bob creates an unassigned task, alice reassigns it to bob
        self.client.force_authenticate(user=self.bob)
        created = self.client.post(self.tasks_url, {"title": "Pick me", "priority": "low"}, format="json")
        task_id = created.data["id"]

        self.client.force_authenticate(user=self.alice)
        response = self.client.post(
            reverse("task-assignment", args=[task_id]),
            {"assigned_to": self.bob.pk},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self._assigned(self.bob).count(), 1)

        # Same assignee again: no second notification
        self.client.post(
            reverse("task-assignment", args=[task_id]),
            {"assigned_to": self.bob.pk},
            format="json",
        )
        self.assertEqual(self._assigned(self.bob).count(), 1)

    def test_unassign(self):
        task = Task.objects.create(project=self.project, title="T", created_by=self.alice, assigned_to=self.bob)

        self.client.force_authenticate(user=self.alice)
        response = self.client.post(
            reverse("task-assignment", args=[task.pk]), {"assigned_to": None}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.data["assigned_to"])

    def test_status_update_logs_completion(self):
        task = Task.objects.create(project=self.project, title="Finish", created_by=self.alice)

        self.client.force_authenticate(user=self.bob)
        response = self.client.post(reverse("task-status", args=[task.pk]), {"status": "done"}, format="json")

        self.assertEqual(response.status_code, 200)
        entry = ActivityLogEntry.objects.get(project=self.project, action="task_completed")
        self.assertEqual(entry.metadata, {"oldValue": "todo", "newValue": "done"})

    def test_viewer_cannot_update_status(self):
        task = Task.objects.create(project=self.project, title="Locked", created_by=self.alice)

        self.client.force_authenticate(user=self.vera)
        response = self.client.post(reverse("task-status", args=[task.pk]), {"status": "done"}, format="json")

        self.assertEqual(response.status_code, 403)
        task.refresh_from_db()
        self.assertEqual(task.status, Task.STATUS_TODO)

    def test_unknown_task_is_not_found(self):
        self.client.force_authenticate(user=self.alice)
        response = self.client.post(reverse("task-status", args=[99999]), {"status": "done"}, format="json")
        self.assertEqual(response.status_code, 404)
