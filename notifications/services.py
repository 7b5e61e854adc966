# notifications/services.py
import logging

from .models import Notification

logger = logging.getLogger("collab.notifications")


class NotificationService:
    @staticmethod
    def notify(recipient, type, title, message, project=None, entity=None):
        """
        Insert one notification. Runs inside the caller's transaction.
        """
        entity_id = getattr(entity, "pk", entity)
        notification = Notification.objects.create(
            user=recipient,
            type=type,
            title=title,
            message=message,
            related_project=project,
            related_entity_id="" if entity_id is None else str(entity_id),
            action_url=f"/projects/{project.pk}" if project is not None else "",
        )
        logger.debug("Notification %s queued for user %s", type, recipient.pk)
        return notification


def get_notifications(user, unread_only=False, limit=30):
    qs = (
        Notification.objects
        .filter(user=user)
        .select_related("related_project")
        .order_by("-created_at", "-id")
    )

    unread_count = qs.filter(is_read=False).count()

    if unread_only:
        qs = qs.filter(is_read=False)

    return {
        "unread_count": unread_count,
        "notifications": list(qs[:limit]),
    }


def mark_notifications_read(user, ids=None):
    qs = Notification.objects.filter(user=user, is_read=False)

    if ids is not None:
        qs = qs.filter(id__in=ids)

    updated = qs.update(is_read=True)
    return updated
