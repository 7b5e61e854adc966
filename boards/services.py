# collab/boards/services.py
from django.contrib.auth import get_user_model

from core.constants import (
    ACTIVITY_TASK_COMPLETED,
    ACTIVITY_TASK_CREATED,
    ACTIVITY_TASK_UPDATED,
)
from core.exceptions import InvalidArgument, NotFound
from core.pipeline import Mutation, locked
from notifications.models import Notification
from projects.models import Project, Membership
from projects.policies import Operation, visible_project
from .models import Task

User = get_user_model()


def member_assignee(project, user_id):
    """
    Resolve an assignee id to a user holding a membership on the project.
    None clears the assignment.
    """
    if user_id is None:
        return None

    membership = (
        Membership.objects
        .select_related("user")
        .filter(project=project, user_id=user_id)
        .first()
    )
    if membership is None:
        raise InvalidArgument("Assignee must be a project member")
    return membership.user


def release_assignments(project, user):
    """Unassign the user's tasks in the project. Returns the number changed."""
    return Task.objects.filter(project=project, assigned_to=user).update(assigned_to=None)


class CreateTask(Mutation):
    operation = Operation.CREATE_TASK

    def __init__(self, actor, project_id, title, priority=Task.PRIORITY_MEDIUM,
                 description="", assigned_to=None, deadline=None, tags=None):
        super().__init__(actor)
        self.project_id = project_id
        self.title = title
        self.priority = priority
        self.description = description
        self.assigned_to_id = assigned_to
        self.deadline = deadline
        self.tags = list(tags or [])
        self.assignee = None

    def load(self):
        project = Project.objects.filter(pk=self.project_id).first()
        if project is None:
            raise NotFound("Project not found")
        return project

    def validate(self):
        if not self.title or not self.title.strip():
            raise InvalidArgument("Title cannot be empty")
        if self.priority not in dict(Task.PRIORITY_CHOICES):
            raise InvalidArgument("Invalid priority")

        self.assignee = member_assignee(self.project, self.assigned_to_id)

    def apply(self):
        return Task.objects.create(
            project=self.project,
            title=self.title.strip(),
            description=self.description or "",
            priority=self.priority,
            assigned_to=self.assignee,
            created_by=self.actor,
            deadline=self.deadline,
            tags=self.tags,
        )

    def fan_out(self, task):
        self.log_activity(ACTIVITY_TASK_CREATED, target=task, details=f'Created task "{task.title}"')

        if task.assigned_to is not None and task.assigned_to.pk != self.actor.pk:
            self.notify(
                recipient=task.assigned_to,
                type=Notification.TYPE_TASK_ASSIGNED,
                title="New task assigned",
                message=f'{self.actor.display_name} assigned you "{task.title}"',
                entity=task,
            )


class UpdateTaskStatus(Mutation):
    operation = Operation.UPDATE_TASK_STATUS

    def __init__(self, actor, task_id, status):
        super().__init__(actor)
        self.task_id = task_id
        self.status = status
        self.task = None
        self.old_status = None

    def load(self):
        self.task = locked(Task.objects, self.task_id, "Task")
        return self.task.project

    def validate(self):
        if self.status not in dict(Task.STATUS_CHOICES):
            raise InvalidArgument("Invalid status")

    def apply(self):
        self.old_status = self.task.status
        self.task.status = self.status
        self.task.save(update_fields=["status", "updated_at"])
        return self.task

    def fan_out(self, task):
        if task.status == Task.STATUS_DONE:
            action = ACTIVITY_TASK_COMPLETED
            details = f'Completed task "{task.title}"'
        else:
            action = ACTIVITY_TASK_UPDATED
            details = f'Moved task "{task.title}" to {task.status}'

        self.log_activity(
            action,
            target=task,
            details=details,
            metadata={"oldValue": self.old_status, "newValue": task.status},
        )


class UpdateTaskAssignment(Mutation):
    operation = Operation.ASSIGN_TASK

    def __init__(self, actor, task_id, assigned_to=None):
        super().__init__(actor)
        self.task_id = task_id
        self.assigned_to_id = assigned_to
        self.task = None
        self.assignee = None
        self.previous_id = None

    def load(self):
        self.task = locked(Task.objects, self.task_id, "Task")
        return self.task.project

    def validate(self):
        self.assignee = member_assignee(self.project, self.assigned_to_id)

    def apply(self):
        self.previous_id = self.task.assigned_to_id
        self.task.assigned_to = self.assignee
        self.task.save(update_fields=["assigned_to", "updated_at"])
        return self.task

    def fan_out(self, task):
        new_id = task.assigned_to_id
        self.log_activity(
            ACTIVITY_TASK_UPDATED,
            target=task,
            details=f'Reassigned task "{task.title}"',
            metadata={"oldValue": self.previous_id, "newValue": new_id},
        )

        if new_id is not None and new_id != self.actor.pk and new_id != self.previous_id:
            self.notify(
                recipient=task.assigned_to,
                type=Notification.TYPE_TASK_ASSIGNED,
                title="Task assigned to you",
                message=f'{self.actor.display_name} assigned you "{task.title}"',
                entity=task,
            )


def list_tasks(project_id, user, status=None):
    project = visible_project(project_id, user)
    if project is None:
        return []

    qs = (
        Task.objects
        .filter(project=project)
        .select_related("created_by", "assigned_to")
        .order_by("created_at", "id")
    )
    if status:
        qs = qs.filter(status=status)
    return list(qs)
