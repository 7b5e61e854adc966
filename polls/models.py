from django.db import models
from django.conf import settings
from django.utils import timezone


class Poll(models.Model):
    """
    A project decision.
    Vote counts live on PollOption; voters live in PollVote. After every
    vote, the option counts add up to the number of PollVote rows.
    """
    project = models.ForeignKey(
        "projects.Project",
        on_delete=models.CASCADE,
        related_name="polls",
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="created_polls",
    )
    question = models.CharField(max_length=500)
    deadline = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["project", "is_active"], name="poll_project_active_idx"),
        ]

    def is_open(self, now=None) -> bool:
        now = now or timezone.now()
        return self.is_active and (self.deadline is None or self.deadline > now)

    def __str__(self):
        return self.question


class PollOption(models.Model):
    poll = models.ForeignKey(Poll, on_delete=models.CASCADE, related_name="options")
    key = models.CharField(max_length=32)  # option_0, option_1, ...
    text = models.CharField(max_length=255)
    votes = models.PositiveIntegerField(default=0)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]
        unique_together = ("poll", "key")

    def __str__(self):
        return f"{self.key}: {self.text}"


class PollVote(models.Model):
    """One row per voter per poll."""
    poll = models.ForeignKey(Poll, on_delete=models.CASCADE, related_name="votes")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="poll_votes",
    )
    option = models.ForeignKey(PollOption, on_delete=models.CASCADE, related_name="ballots")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("poll", "user")

    def __str__(self):
        return f"{self.user} -> {self.option}"
