from django.db import models
from django.conf import settings


class GlobalPost(models.Model):
    """
    Platform-wide status update or announcement, outside any project.
    """
    TYPE_STATUS = "status"
    TYPE_ANNOUNCEMENT = "announcement"

    TYPE_CHOICES = [
        (TYPE_STATUS, "Status"),
        (TYPE_ANNOUNCEMENT, "Announcement"),
    ]

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="global_posts",
    )
    content = models.TextField()
    type = models.CharField(max_length=16, choices=TYPE_CHOICES, default=TYPE_STATUS)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["-created_at"], name="post_created_idx"),
        ]

    def __str__(self):
        return f"{self.author} - {self.type}"


class PostLike(models.Model):
    post = models.ForeignKey(GlobalPost, on_delete=models.CASCADE, related_name="likes")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="post_likes",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("post", "user")

    def __str__(self):
        return f"{self.user} likes {self.post_id}"


class PostComment(models.Model):
    post = models.ForeignKey(GlobalPost, on_delete=models.CASCADE, related_name="comments")
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="post_comments",
    )
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"{self.author} on {self.post_id}"
