from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from boards.services import CreateTask, UpdateTaskStatus
from chat.services import SendMessage
from feed.models import GlobalPost
from feed.services import AddComment, CreatePost, ToggleLike
from polls.services import CastVote, CreatePoll
from projects.models import Membership, Project
from projects.services import AddMember, CreateProject

User = get_user_model()

DEMO_PROJECT_TITLE = "Campus Hackathon Platform"


class Command(BaseCommand):
    help = "Seeds the database with demo users, a project, tasks, chat, a poll and feed posts"

    def handle(self, *args, **options):
        self.stdout.write("🌱 Seeding data...")

        # 1. Ensure Users
        admin, _ = User.objects.get_or_create(
            username="admin",
            defaults={"email": "admin@example.com", "name": "Admin", "is_staff": True, "is_superuser": True},
        )
        if not admin.check_password("admin"):
            admin.set_password("admin")
            admin.save()

        alice = self._user("alice", "Alice Rivera")
        bob = self._user("bob", "")  # shown by email local part
        carol = self._user("carol", "Carol Chen")

        # 2. Project (skip the rest if it already exists)
        if Project.objects.filter(title=DEMO_PROJECT_TITLE, owner=alice).exists():
            self.stdout.write(self.style.WARNING("Demo project already exists, nothing to do."))
            return

        project = CreateProject(
            alice,
            title=DEMO_PROJECT_TITLE,
            description="Build the registration and judging platform for the spring hackathon.",
            tags=["hackathon", "web", "design"],
        ).execute()
        self.stdout.write(f"Created project: {project.title}")

        AddMember(alice, project.pk, email=bob.email, role=Membership.ROLE_EDITOR).execute()
        AddMember(alice, project.pk, email=carol.email, role=Membership.ROLE_VIEWER).execute()

        CreateProject(
            bob,
            title="Private Research Notes",
            description="Only Bob can see this one.",
            visibility=Project.VISIBILITY_PRIVATE,
        ).execute()

        # 3. Tasks
        tasks = [
            ("Design landing page", "high", bob),
            ("Set up judging rubric", "medium", alice),
            ("Write sponsor emails", "low", None),
        ]
        for title, priority, assignee in tasks:
            task = CreateTask(
                bob,
                project.pk,
                title=title,
                priority=priority,
                assigned_to=assignee.pk if assignee else None,
            ).execute()
            if assignee is alice:
                UpdateTaskStatus(alice, task.pk, "in_progress").execute()

        # 4. Chat
        SendMessage(alice, project.pk, "Welcome aboard! Kickoff is on Friday.").execute()
        SendMessage(bob, project.pk, f"@{alice.email} the landing page mockups are ready.").execute()

        # 5. Poll
        poll = CreatePoll(
            alice,
            project.pk,
            question="Which stack should we use for the frontend?",
            options=["React", "Vue", "Svelte"],
        ).execute()
        CastVote(bob, poll.pk, "option_0").execute()
        CastVote(carol, poll.pk, "option_2").execute()

        # 6. Global feed
        if not GlobalPost.objects.exists():
            post = CreatePost(
                alice,
                "We're looking for designers for the hackathon platform!",
                type=GlobalPost.TYPE_ANNOUNCEMENT,
            ).execute()
            ToggleLike(bob, post.pk).execute()
            AddComment(carol, post.pk, "Count me in.").execute()

        self.stdout.write(self.style.SUCCESS("✅ Seeding complete."))

    def _user(self, username, name):
        user, created = User.objects.get_or_create(
            username=username,
            defaults={"email": f"{username}@example.com", "name": name},
        )
        if created:
            user.set_password("password")
            user.save()
        return user
