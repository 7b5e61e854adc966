# users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models

UNKNOWN_USER_NAME = "Unknown User"


def display_name(user) -> str:
    """
    Name shown for a user anywhere in the API.

    Falls back from the profile name to the local part of the email,
    and to "Unknown User" when neither is set.
    """
    if user is None:
        return UNKNOWN_USER_NAME

    name = (getattr(user, "name", "") or "").strip()
    if name:
        return name

    email = getattr(user, "email", "") or ""
    local_part = email.split("@")[0]
    if local_part:
        return local_part

    return UNKNOWN_USER_NAME


class User(AbstractUser):
    """
    Identity is owned by the external identity provider.
    Profile fields are refreshed from token claims, never edited through the API.
    """
    name = models.CharField(max_length=255, blank=True, help_text="Display name")
    avatar = models.CharField(max_length=1024, blank=True, null=True)

    # Subject claim from the identity provider
    external_id = models.CharField(
        max_length=255,
        unique=True,
        null=True,
        blank=True,
        help_text="Stable user id issued by the identity provider",
    )

    class Meta(AbstractUser.Meta):
        indexes = [
            models.Index(fields=["email"], name="user_email_idx"),
        ]

    @property
    def display_name(self) -> str:
        return display_name(self)

    def __str__(self):
        return self.display_name
