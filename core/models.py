#  collab/core/models.py
from django.db import models
from django.conf import settings

from .constants import ACTIVITY_CHOICES


class ActivityLogError(Exception):
    pass


class ActivityLogEntry(models.Model):
    """
    Append-only project timeline.
    Written by the mutation pipeline as a side effect of the primary change;
    never updated or deleted afterwards.
    """
    project = models.ForeignKey(
        "projects.Project",
        on_delete=models.CASCADE,
        related_name="activity",
    )

    # Who did it?
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="activities",
    )

    # What happened?
    action = models.CharField(max_length=32, choices=ACTIVITY_CHOICES, db_index=True)

    # To what? (id of the affected entity)
    target_entity = models.CharField(max_length=64)

    details = models.TextField(blank=True)

    # Snapshot of old/new values at time of logging
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name_plural = "Activity log entries"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["project", "-created_at"], name="activity_project_time_idx"),
            models.Index(fields=["actor", "-created_at"], name="activity_actor_time_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ActivityLogError("Activity log entries are append-only")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ActivityLogError("Activity log entries are append-only")

    def __str__(self):
        return f"{self.actor} - {self.action} - {self.created_at}"
