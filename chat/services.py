# collab/chat/services.py
from django.contrib.auth import get_user_model
from django.db.models import Exists, OuterRef

from core.constants import ACTIVITY_FILE_UPLOADED
from core.exceptions import InvalidArgument, NotFound
from core.pipeline import Mutation
from notifications.models import Notification
from projects.models import Project
from projects.policies import Operation, permits, resolve_access, visible_project
from .mentions import extract_mentions
from .models import Message

User = get_user_model()


class SendMessage(Mutation):
    operation = Operation.SEND_MESSAGE

    def __init__(self, actor, project_id, content, type=Message.TYPE_TEXT,
                 file_url="", file_name="", reply_to=None):
        super().__init__(actor)
        self.project_id = project_id
        self.content = content or ""
        self.type = type
        self.file_url = file_url or ""
        self.file_name = file_name or ""
        self.reply_to_id = reply_to
        self.reply_to = None

    def load(self):
        project = Project.objects.filter(pk=self.project_id).first()
        if project is None:
            raise NotFound("Project not found")
        return project

    def validate(self):
        if self.type not in Message.CLIENT_TYPES:
            raise InvalidArgument("Invalid message type")

        if self.type == Message.TYPE_TEXT and not self.content.strip():
            raise InvalidArgument("Message cannot be empty")

        if self.type != Message.TYPE_TEXT and not self.file_url:
            raise InvalidArgument("File messages need a file URL")

        if self.reply_to_id is not None:
            self.reply_to = Message.objects.filter(
                pk=self.reply_to_id, project=self.project
            ).first()
            if self.reply_to is None:
                raise InvalidArgument("Reply target is not a message in this project")

    def apply(self):
        message = Message.objects.create(
            project=self.project,
            sender=self.actor,
            content=self.content,
            type=self.type,
            file_url=self.file_url,
            file_name=self.file_name,
            reply_to=self.reply_to,
        )
        message.read_by.add(self.actor)
        return message

    def mentioned_members(self, message):
        emails = extract_mentions(message.content)
        if not emails:
            return []

        return list(
            User.objects
            .filter(
                email__in=emails,
                project_memberships__project=self.project,
            )
            .exclude(pk=self.actor.pk)
            .distinct()
            .order_by("id")
        )

    def fan_out(self, message):
        for user in self.mentioned_members(message):
            self.notify(
                recipient=user,
                type=Notification.TYPE_MENTION,
                title="You were mentioned",
                message=f'{self.actor.display_name} mentioned you in "{self.project.title}"',
                entity=message,
            )

        if message.type in (Message.TYPE_FILE, Message.TYPE_IMAGE):
            self.log_activity(
                ACTIVITY_FILE_UPLOADED,
                target=message,
                details=f"Shared {message.file_name or message.type}",
                metadata={"fileName": message.file_name, "fileUrl": message.file_url},
            )


class MarkMessagesRead(Mutation):
    """
    Add the caller to read_by of each listed message.

    Messages in projects the caller is not a member of, and unknown ids,
    are skipped without error.
    """

    def __init__(self, actor, message_ids):
        super().__init__(actor)
        self.message_ids = list(message_ids or [])

    def readable_ids(self):
        messages = Message.objects.filter(pk__in=self.message_ids).select_related("project")

        allowed = {}
        ids = []
        for message in messages:
            project = message.project
            if project.pk not in allowed:
                access = resolve_access(project, self.actor)
                allowed[project.pk] = permits(access.role, Operation.READ_MESSAGE)
            if allowed[project.pk]:
                ids.append(message.pk)
        return ids

    def apply(self):
        ids = self.readable_ids()
        if not ids:
            return 0

        Receipt = Message.read_by.through
        already = set(
            Receipt.objects
            .filter(message_id__in=ids, user_id=self.actor.pk)
            .values_list("message_id", flat=True)
        )
        receipts = [
            Receipt(message_id=message_id, user_id=self.actor.pk)
            for message_id in ids
            if message_id not in already
        ]
        Receipt.objects.bulk_create(receipts, ignore_conflicts=True)
        return len(receipts)

    def describe(self, result):
        return f"{result} receipts"


def list_messages(project_id, user, limit):
    """
    The newest `limit` messages, returned oldest first.
    """
    project = visible_project(project_id, user)
    if project is None:
        return []

    qs = (
        Message.objects
        .filter(project=project)
        .select_related("sender")
        .order_by("-created_at", "-id")
    )

    if getattr(user, "is_authenticated", False):
        qs = qs.annotate(
            caller_has_read=Exists(
                Message.read_by.through.objects.filter(
                    message_id=OuterRef("pk"), user_id=user.pk
                )
            )
        )

    messages = list(qs[:limit])
    messages.reverse()
    return messages
