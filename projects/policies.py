# collab/projects/policies.py
"""
Membership Authority

Every read and write path asks this module what the caller may do in a
project. Views and services never compare roles inline.

Reads hide: an invisible project behaves as if it did not exist.
Writes explain: a refused mutation raises PermissionDenied.
"""
from dataclasses import dataclass
from typing import Optional
import logging

from core.exceptions import PermissionDenied
from .models import Project, Membership

logger = logging.getLogger("collab.projects")


ROLE_NONE = "none"

# admin > editor > viewer > none
ROLE_RANK = {
    ROLE_NONE: 0,
    Membership.ROLE_VIEWER: 1,
    Membership.ROLE_EDITOR: 2,
    Membership.ROLE_ADMIN: 3,
}


class Operation:
    SEND_MESSAGE = "message.send"
    READ_MESSAGE = "message.read"
    VOTE = "poll.vote"
    CREATE_TASK = "task.create"
    UPDATE_TASK_STATUS = "task.update_status"
    ASSIGN_TASK = "task.assign"
    CREATE_POLL = "poll.create"
    CLOSE_POLL = "poll.close"
    UPDATE_PROJECT_STATUS = "project.update_status"
    ADD_MEMBER = "project.add_member"
    REMOVE_MEMBER = "project.remove_member"


# Minimum role per operation.
MINIMUM_ROLE = {
    Operation.SEND_MESSAGE: Membership.ROLE_VIEWER,
    Operation.READ_MESSAGE: Membership.ROLE_VIEWER,
    Operation.VOTE: Membership.ROLE_VIEWER,
    Operation.CREATE_TASK: Membership.ROLE_EDITOR,
    Operation.UPDATE_TASK_STATUS: Membership.ROLE_EDITOR,
    Operation.ASSIGN_TASK: Membership.ROLE_EDITOR,
    Operation.CREATE_POLL: Membership.ROLE_EDITOR,
    Operation.CLOSE_POLL: Membership.ROLE_ADMIN,
    Operation.UPDATE_PROJECT_STATUS: Membership.ROLE_ADMIN,
    Operation.ADD_MEMBER: Membership.ROLE_ADMIN,
    Operation.REMOVE_MEMBER: Membership.ROLE_ADMIN,
}

# The creator of the target may perform these below the minimum role,
# provided they are still a member.
CREATOR_OVERRIDES = {
    Operation.CLOSE_POLL,
    Operation.UPDATE_PROJECT_STATUS,
}

DENIAL_REASONS = {
    Operation.SEND_MESSAGE: "Only project members can send messages",
    Operation.READ_MESSAGE: "Only project members can read messages",
    Operation.VOTE: "Only project members can vote",
    Operation.CREATE_TASK: "Insufficient permissions to create tasks",
    Operation.UPDATE_TASK_STATUS: "Insufficient permissions to update tasks",
    Operation.ASSIGN_TASK: "Insufficient permissions to assign tasks",
    Operation.CREATE_POLL: "Insufficient permissions to create polls",
    Operation.CLOSE_POLL: "Only poll creator or project admin can close polls",
    Operation.UPDATE_PROJECT_STATUS: "Only the owner or an admin can update project status",
    Operation.ADD_MEMBER: "Only admins can add members",
    Operation.REMOVE_MEMBER: "Only admins can remove members",
}


@dataclass(frozen=True)
class Access:
    role: str
    visible: bool

    @property
    def is_member(self) -> bool:
        return self.role != ROLE_NONE


def permits(role: str, operation: str) -> bool:
    """Pure role-to-permission mapping. Unknown operations are refused."""
    required = MINIMUM_ROLE.get(operation)
    if required is None:
        return False
    return ROLE_RANK.get(role, 0) >= ROLE_RANK[required]


def membership_for(project, user) -> Optional[Membership]:
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return Membership.objects.filter(project=project, user=user).first()


def resolve_access(project: Project, user) -> Access:
    """
    role: the caller's membership role, or "none".
    visible: the caller holds a membership, or is signed in and the project is public.
    Anonymous callers see no project.
    """
    membership = membership_for(project, user)
    role = membership.role if membership else ROLE_NONE
    signed_in = user is not None and getattr(user, "is_authenticated", False)
    visible = membership is not None or (signed_in and project.is_public)
    return Access(role=role, visible=visible)


def is_member(project, user) -> bool:
    if user is None:
        return False
    return Membership.objects.filter(project=project, user=user).exists()


def require(access: Access, operation: str, *, is_creator: bool = False, actor=None) -> None:
    """
    Raise PermissionDenied unless the role (or creatorship) allows the operation.
    """
    if permits(access.role, operation):
        return

    if is_creator and access.is_member and operation in CREATOR_OVERRIDES:
        return

    logger.warning(
        "Permission denied: operation=%s role=%s actor=%s",
        operation, access.role, getattr(actor, "pk", "unknown"),
    )
    raise PermissionDenied(DENIAL_REASONS.get(operation, "Permission denied"))


def visible_project(project_id, user) -> Optional[Project]:
    """
    Read-side lookup: the project if it exists and the caller may see it, else None.
    Absent and private projects are indistinguishable to the caller.
    """
    project = Project.objects.select_related("owner").filter(pk=project_id).first()
    if project is None:
        return None

    if not resolve_access(project, user).visible:
        return None

    return project
