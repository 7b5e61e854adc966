# collab/projects/services.py
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Count, Q

from core.constants import ACTIVITY_MEMBER_ADDED, ACTIVITY_MEMBER_REMOVED
from core.exceptions import Conflict, InvalidArgument, NotFound
from core.pipeline import Mutation, locked
from notifications.models import Notification
from .models import Project, Membership
from .policies import Operation, ROLE_NONE, membership_for, visible_project

User = get_user_model()


def find_user_by_email(email):
    """Exact email match against registered users."""
    if not email:
        return None
    return User.objects.filter(email=email).order_by("id").first()


# ─────────────────────────────────────────────────────────────
# Mutations
# ─────────────────────────────────────────────────────────────


class CreateProject(Mutation):
    def __init__(self, actor, title, description="", visibility=Project.VISIBILITY_PUBLIC,
                 deadline=None, tags=None):
        super().__init__(actor)
        self.fields = {
            "title": title,
            "description": description,
            "visibility": visibility,
            "deadline": deadline,
            "tags": list(tags or []),
        }

    def apply(self):
        project = Project.objects.create(owner=self.actor, **self.fields)

        # The creator is an implicit admin
        Membership.objects.create(
            project=project,
            user=self.actor,
            role=Membership.ROLE_ADMIN,
            invited_by=self.actor,
        )
        return project


class AddMember(Mutation):
    """
    Invite an existing user (by exact email) into the project with a role.
    """
    operation = Operation.ADD_MEMBER

    def __init__(self, actor, project_id, email, role):
        super().__init__(actor)
        self.project_id = project_id
        self.email = email
        self.role = role
        self.target_user = None

    def load(self):
        # Locking the project serializes concurrent invites into it
        return locked(Project.objects, self.project_id, "Project")

    def validate(self):
        if self.role not in dict(Membership.ROLE_CHOICES):
            raise InvalidArgument("Invalid role")

        self.target_user = find_user_by_email(self.email)
        if self.target_user is None:
            raise NotFound("User not found. They must register first.")

        if Membership.objects.filter(project=self.project, user=self.target_user).exists():
            raise Conflict("User already in team")

    def apply(self):
        try:
            with transaction.atomic():
                return Membership.objects.create(
                    project=self.project,
                    user=self.target_user,
                    role=self.role,
                    invited_by=self.actor,
                )
        except IntegrityError:
            raise Conflict("User already in team")

    def fan_out(self, membership):
        self.log_activity(
            ACTIVITY_MEMBER_ADDED,
            target=membership.user,
            details=f"Added {membership.user.display_name} as {membership.role}",
            metadata={"newValue": membership.role},
        )
        self.notify(
            recipient=membership.user,
            type=Notification.TYPE_PROJECT_INVITE,
            title="Added to project",
            message=f'{self.actor.display_name} added you to "{self.project.title}" as {membership.role}',
            entity=self.project,
        )


class RemoveMember(Mutation):
    operation = Operation.REMOVE_MEMBER

    def __init__(self, actor, project_id, user_id):
        super().__init__(actor)
        self.project_id = project_id
        self.user_id = user_id
        self.membership = None

    def load(self):
        return locked(Project.objects, self.project_id, "Project")

    def validate(self):
        self.membership = (
            Membership.objects
            .select_related("user")
            .filter(project=self.project, user_id=self.user_id)
            .first()
        )
        if self.membership is None:
            raise NotFound("Membership not found")

        if self.membership.user_id == self.project.owner_id:
            raise InvalidArgument("Cannot remove the project owner")

    def apply(self):
        from boards.services import release_assignments

        removed = self.membership
        removed.delete()

        # Assignees must stay members
        release_assignments(self.project, removed.user)
        return removed

    def fan_out(self, membership):
        self.log_activity(
            ACTIVITY_MEMBER_REMOVED,
            target=membership.user,
            details=f"Removed {membership.user.display_name}",
            metadata={"oldValue": membership.role},
        )

    def describe(self, result):
        return self.user_id


class UpdateProjectStatus(Mutation):
    operation = Operation.UPDATE_PROJECT_STATUS

    def __init__(self, actor, project_id, status):
        super().__init__(actor)
        self.project_id = project_id
        self.status = status

    def load(self):
        return locked(Project.objects, self.project_id, "Project")

    def is_creator(self):
        return self.project.owner_id == self.actor.pk

    def validate(self):
        if self.status not in dict(Project.STATUS_CHOICES):
            raise InvalidArgument("Invalid status")

    def apply(self):
        self.project.status = self.status
        self.project.save(update_fields=["status", "updated_at"])
        return self.project


# ─────────────────────────────────────────────────────────────
# Queries
# ─────────────────────────────────────────────────────────────


def _with_member_count(qs):
    return qs.select_related("owner").annotate(member_count=Count("memberships", distinct=True))


def public_projects(limit):
    return list(
        _with_member_count(Project.objects.filter(visibility=Project.VISIBILITY_PUBLIC))
        .order_by("-created_at", "-id")[:limit]
    )


def projects_for_user(user):
    """
    Projects the user owns or belongs to, each paired with the user's role.
    Owned projects report "admin" even if the owner's membership changed.
    """
    memberships = {
        m.project_id: m.role
        for m in Membership.objects.filter(user=user)
    }
    # Filter through a subquery so the member count is not narrowed by the join
    project_ids = Project.objects.filter(
        Q(owner=user) | Q(memberships__user=user)
    ).values("pk")
    projects = (
        _with_member_count(Project.objects.filter(pk__in=project_ids))
        .order_by("-created_at", "-id")
    )

    result = []
    for project in projects:
        if project.owner_id == user.pk:
            role = Membership.ROLE_ADMIN
        else:
            role = memberships.get(project.pk, ROLE_NONE)
        result.append((project, role))
    return result


def project_detail(project_id, user):
    """
    Project with its members, or None when the caller cannot see it.
    """
    project = visible_project(project_id, user)
    if project is None:
        return None

    members = list(
        Membership.objects
        .filter(project=project)
        .select_related("user")
        .order_by("joined_at", "id")
    )
    membership = membership_for(project, user)

    return {
        "project": project,
        "members": members,
        "user_role": membership.role if membership else None,
    }


def project_timeline(project_id, user, limit):
    from core.services import ActivityService

    project = visible_project(project_id, user)
    if project is None:
        return []
    return list(ActivityService.project_timeline(project, limit))
