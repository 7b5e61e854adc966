import logging

from .models import ActivityLogEntry

logger = logging.getLogger("collab.activity")


class ActivityService:
    @staticmethod
    def log_activity(project, actor, action, target, details="", metadata=None):
        """
        Appends an entry to the project timeline.

        Called from inside a mutation's transaction, so the entry commits
        or rolls back together with the change it describes.
        """
        if metadata is None:
            metadata = {}

        target_id = getattr(target, "pk", target)

        activity = ActivityLogEntry.objects.create(
            project=project,
            actor=actor,
            action=action,
            target_entity=str(target_id),
            details=details,
            metadata=metadata,
        )
        logger.debug("Activity %s queued for project %s", action, project.pk)
        return activity

    @staticmethod
    def project_timeline(project, limit):
        return (
            ActivityLogEntry.objects
            .filter(project=project)
            .select_related("actor")
            .order_by("-created_at", "-id")[:limit]
        )
