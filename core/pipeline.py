# collab/core/pipeline.py
"""
Mutation pipeline.

Every state-changing operation is a Mutation subclass. execute() runs the
steps in a fixed order inside one transaction:

    identity -> load + access -> authorize -> validate -> apply -> fan_out

Nothing is written before validate() has passed. Activity entries and
notifications are written by fan_out() in the same transaction as the
primary change, so a rolled-back mutation leaves no trace.
"""
import logging

from django.db import transaction

from core.exceptions import NotFound
from core.identity import require_identity
from core.services import ActivityService
from notifications.services import NotificationService
from projects.policies import require, resolve_access

logger = logging.getLogger("collab")


def locked(queryset, pk, label="Object"):
    """
    Fetch one row with a write lock held until the transaction ends.
    Concurrent mutations of the same row are serialized behind it.
    """
    obj = queryset.select_for_update().filter(pk=pk).first()
    if obj is None:
        raise NotFound(f"{label} not found")
    return obj


class Mutation:
    # Operation name checked against the Membership Authority; None skips the check.
    operation = None

    def __init__(self, actor):
        self.actor = actor
        self.project = None
        self.access = None

    # ---- Steps -------------------------------------------------------

    def load(self):
        """Fetch the rows this mutation reads. Return the owning project, or None."""
        return None

    def is_creator(self) -> bool:
        return False

    def authorize(self):
        if self.operation is None or self.project is None:
            return
        require(self.access, self.operation, is_creator=self.is_creator(), actor=self.actor)

    def validate(self):
        pass

    def apply(self):
        raise NotImplementedError

    def fan_out(self, result):
        pass

    def describe(self, result) -> str:
        return getattr(result, "pk", "")

    # ---- Fan-out helpers ---------------------------------------------

    def log_activity(self, action, target, details="", metadata=None):
        return ActivityService.log_activity(
            project=self.project,
            actor=self.actor,
            action=action,
            target=target,
            details=details,
            metadata=metadata,
        )

    def notify(self, recipient, type, title, message, entity=None):
        return NotificationService.notify(
            recipient=recipient,
            type=type,
            title=title,
            message=message,
            project=self.project,
            entity=entity,
        )

    # ---- Runner ------------------------------------------------------

    def execute(self):
        self.actor = require_identity(self.actor)

        with transaction.atomic():
            self.project = self.load()
            if self.project is not None:
                self.access = resolve_access(self.project, self.actor)

            self.authorize()
            self.validate()

            result = self.apply()
            self.fan_out(result)

            name = type(self).__name__
            target = self.describe(result)
            actor_id = self.actor.pk
            transaction.on_commit(
                lambda: logger.info("%s committed: actor=%s target=%s", name, actor_id, target)
            )

        return result
