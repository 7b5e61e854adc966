# collab/presence/services.py
from datetime import timedelta
import logging

from django.conf import settings
from django.utils import timezone

from core.exceptions import InvalidArgument
from core.pipeline import Mutation
from projects.models import Membership
from projects.policies import visible_project
from .models import PresenceRecord

logger = logging.getLogger("collab.presence")


class UpdatePresence(Mutation):
    """
    Upsert the caller's presence with last_seen=now.
    """

    def __init__(self, actor, status, current_project=None):
        super().__init__(actor)
        self.status = status
        self.current_project_id = current_project
        self.current_project = None

    def validate(self):
        if self.status not in dict(PresenceRecord.STATUS_CHOICES):
            raise InvalidArgument("Invalid presence status")

        if self.current_project_id is not None:
            self.current_project = visible_project(self.current_project_id, self.actor)
            if self.current_project is None:
                raise InvalidArgument("Unknown project")

    def apply(self):
        record, _ = PresenceRecord.objects.update_or_create(
            user=self.actor,
            defaults={
                "status": self.status,
                "last_seen": timezone.now(),
                "current_project": self.current_project,
            },
        )
        return record


class Heartbeat(UpdatePresence):
    def __init__(self, actor, current_project=None):
        super().__init__(actor, PresenceRecord.STATUS_ONLINE, current_project)


def project_presence(project_id, user):
    """
    One entry per member; members without a record read as offline.
    """
    project = visible_project(project_id, user)
    if project is None:
        return []

    memberships = list(
        Membership.objects
        .filter(project=project)
        .select_related("user")
        .order_by("joined_at", "id")
    )
    records = {
        record.user_id: record
        for record in PresenceRecord.objects.filter(
            user_id__in=[m.user_id for m in memberships]
        )
    }

    result = []
    for membership in memberships:
        record = records.get(membership.user_id)
        result.append({
            "user": membership.user,
            "status": record.status if record else PresenceRecord.STATUS_OFFLINE,
            "last_seen": record.last_seen if record else None,
            "is_in_project": bool(record and record.current_project_id == project.pk),
        })
    return result


def cleanup_offline(now=None):
    """
    Mark every non-offline record not seen within the stale window as offline.
    Returns the number of records changed.
    """
    now = now or timezone.now()
    cutoff = now - timedelta(seconds=settings.PRESENCE_STALE_AFTER_SECONDS)

    swept = (
        PresenceRecord.objects
        .filter(last_seen__lt=cutoff)
        .exclude(status=PresenceRecord.STATUS_OFFLINE)
        .update(status=PresenceRecord.STATUS_OFFLINE)
    )
    if swept:
        logger.info("Presence sweep marked %s users offline", swept)
    return swept
