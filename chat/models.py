from django.db import models
from django.conf import settings


class Message(models.Model):
    TYPE_TEXT = "text"
    TYPE_FILE = "file"
    TYPE_IMAGE = "image"
    TYPE_SYSTEM_ALERT = "system_alert"

    TYPE_CHOICES = [
        (TYPE_TEXT, "Text"),
        (TYPE_FILE, "File"),
        (TYPE_IMAGE, "Image"),
        (TYPE_SYSTEM_ALERT, "System alert"),
    ]

    # Types a client may send; system alerts are server-generated
    CLIENT_TYPES = (TYPE_TEXT, TYPE_FILE, TYPE_IMAGE)

    project = models.ForeignKey(
        "projects.Project",
        on_delete=models.CASCADE,
        related_name="messages",
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    content = models.TextField(blank=True)
    type = models.CharField(max_length=16, choices=TYPE_CHOICES, default=TYPE_TEXT)

    # Upload storage is external; only the reference is kept
    file_url = models.URLField(max_length=1024, blank=True)
    file_name = models.CharField(max_length=255, blank=True)

    reply_to = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="replies",
    )

    # Grows only; the sender is added at creation
    read_by = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="read_messages",
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["project", "-created_at"], name="message_project_time_idx"),
        ]

    def __str__(self):
        return f"{self.sender} @ {self.project}: {self.content[:40]}"
