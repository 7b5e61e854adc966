# notifications/models.py
from django.db import models
from django.conf import settings


class Notification(models.Model):
    TYPE_MENTION = "mention"
    TYPE_TASK_ASSIGNED = "task_assigned"
    TYPE_PROJECT_INVITE = "project_invite"
    TYPE_POLL_CREATED = "poll_created"
    TYPE_DEADLINE_REMINDER = "deadline_reminder"

    TYPE_CHOICES = [
        (TYPE_MENTION, "Mention"),
        (TYPE_TASK_ASSIGNED, "Task Assigned"),
        (TYPE_PROJECT_INVITE, "Project Invite"),
        (TYPE_POLL_CREATED, "Poll Created"),
        (TYPE_DEADLINE_REMINDER, "Deadline Reminder"),
    ]

    # Recipient
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    type = models.CharField(max_length=32, choices=TYPE_CHOICES)
    title = models.CharField(max_length=255)
    message = models.TextField(blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    # Optional linking to the project / entity that caused it
    related_project = models.ForeignKey(
        "projects.Project",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications",
    )
    related_entity_id = models.CharField(max_length=64, blank=True)
    action_url = models.CharField(max_length=512, blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "is_read"], name="notif_user_read_idx"),
            models.Index(fields=["type"], name="notif_type_idx"),
        ]

    def __str__(self):
        return f"{self.user} - {self.type} - {self.title}"
