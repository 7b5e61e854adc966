# collab/polls/services.py
from django.db import IntegrityError, transaction
from django.db.models import Count, Exists, F, OuterRef, Prefetch
from django.utils import timezone

from core.constants import ACTIVITY_POLL_CREATED
from core.exceptions import Conflict, InvalidArgument, NotFound
from core.pipeline import Mutation, locked
from notifications.models import Notification
from projects.models import Project, Membership
from projects.policies import Operation, visible_project
from .models import Poll, PollOption, PollVote

MIN_OPTIONS = 2


def option_key(index):
    return f"option_{index}"


def percentage(votes, total):
    """Share of total as a whole percent, halves rounded up."""
    if not total:
        return 0
    return int(votes * 100 / total + 0.5)


class CreatePoll(Mutation):
    operation = Operation.CREATE_POLL

    def __init__(self, actor, project_id, question, options, deadline=None):
        super().__init__(actor)
        self.project_id = project_id
        self.question = question or ""
        self.options = [str(text).strip() for text in (options or [])]
        self.deadline = deadline

    def load(self):
        project = Project.objects.filter(pk=self.project_id).first()
        if project is None:
            raise NotFound("Project not found")
        return project

    def validate(self):
        if not self.question.strip():
            raise InvalidArgument("Question cannot be empty")

        if len(self.options) < MIN_OPTIONS or not all(self.options):
            raise InvalidArgument("Poll must have at least 2 non-empty options")

    def apply(self):
        poll = Poll.objects.create(
            project=self.project,
            created_by=self.actor,
            question=self.question.strip(),
            deadline=self.deadline,
        )
        PollOption.objects.bulk_create([
            PollOption(poll=poll, key=option_key(index), text=text, position=index)
            for index, text in enumerate(self.options)
        ])
        return poll

    def fan_out(self, poll):
        self.log_activity(ACTIVITY_POLL_CREATED, target=poll, details=f'Created poll: "{poll.question}"')

        members = (
            Membership.objects
            .filter(project=self.project)
            .exclude(user=self.actor)
            .select_related("user")
        )
        for membership in members:
            self.notify(
                recipient=membership.user,
                type=Notification.TYPE_POLL_CREATED,
                title="New Poll Created",
                message=f'New poll: "{poll.question}"',
                entity=poll,
            )


class CastVote(Mutation):
    """
    Record one vote. The poll row stays locked until commit, so the voter
    row and the option counter are written together or not at all.
    """
    operation = Operation.VOTE

    def __init__(self, actor, poll_id, option_id):
        super().__init__(actor)
        self.poll_id = poll_id
        self.option_id = option_id
        self.poll = None
        self.option = None

    def load(self):
        self.poll = locked(Poll.objects, self.poll_id, "Poll")
        return self.poll.project

    def validate(self):
        if not self.poll.is_open():
            raise InvalidArgument("Poll is no longer active")

        if PollVote.objects.filter(poll=self.poll, user=self.actor).exists():
            raise Conflict("You have already voted on this poll")

        self.option = PollOption.objects.filter(poll=self.poll, key=self.option_id).first()
        if self.option is None:
            raise InvalidArgument("Invalid option")

    def apply(self):
        try:
            with transaction.atomic():
                PollVote.objects.create(poll=self.poll, user=self.actor, option=self.option)
        except IntegrityError:
            raise Conflict("You have already voted on this poll")

        PollOption.objects.filter(pk=self.option.pk).update(votes=F("votes") + 1)
        return {"success": True, "option_id": self.option.key}

    def describe(self, result):
        return f"{self.poll.pk}:{self.option.key}"


class ClosePoll(Mutation):
    operation = Operation.CLOSE_POLL

    def __init__(self, actor, poll_id):
        super().__init__(actor)
        self.poll_id = poll_id
        self.poll = None

    def load(self):
        self.poll = locked(Poll.objects, self.poll_id, "Poll")
        return self.poll.project

    def is_creator(self):
        return self.poll.created_by_id == self.actor.pk

    def apply(self):
        self.poll.is_active = False
        self.poll.save(update_fields=["is_active"])
        return self.poll


def list_polls(project_id, user, active_only=False):
    """
    Polls with options, totals and whether the caller has voted.
    """
    project = visible_project(project_id, user)
    if project is None:
        return []

    qs = (
        Poll.objects
        .filter(project=project)
        .select_related("created_by")
        .prefetch_related(Prefetch("options", queryset=PollOption.objects.order_by("position", "id")))
        .annotate(total_votes=Count("votes", distinct=True))
        .order_by("created_at", "id")
    )

    if active_only:
        now = timezone.now()
        qs = qs.filter(is_active=True).exclude(deadline__lte=now)

    if getattr(user, "is_authenticated", False):
        qs = qs.annotate(
            has_voted=Exists(PollVote.objects.filter(poll=OuterRef("pk"), user_id=user.pk))
        )

    return list(qs)
