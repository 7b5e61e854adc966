from django.db import models
from django.conf import settings


class PresenceRecord(models.Model):
    """
    Liveness per user. Heartbeats keep it online; the periodic sweep
    decays stale records to offline.
    """
    STATUS_ONLINE = "online"
    STATUS_AWAY = "away"  # accepted from clients, never set by the server
    STATUS_OFFLINE = "offline"

    STATUS_CHOICES = [
        (STATUS_ONLINE, "Online"),
        (STATUS_AWAY, "Away"),
        (STATUS_OFFLINE, "Offline"),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="presence",
    )
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_OFFLINE)
    last_seen = models.DateTimeField()
    current_project = models.ForeignKey(
        "projects.Project",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="present_users",
    )

    class Meta:
        indexes = [
            models.Index(fields=["status", "last_seen"], name="presence_status_seen_idx"),
        ]

    def __str__(self):
        return f"{self.user} ({self.status})"
