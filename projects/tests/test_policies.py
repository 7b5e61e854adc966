from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from core.exceptions import PermissionDenied
from projects.models import Membership, Project
from projects.policies import (
    MINIMUM_ROLE,
    ROLE_NONE,
    Access,
    Operation,
    permits,
    require,
    resolve_access,
    visible_project,
)

User = get_user_model()


class PermitsTestCase(TestCase):
    def test_roles_are_totally_ordered(self):
        for operation in MINIMUM_ROLE:
            flags = [permits(role, operation) for role in (ROLE_NONE, "viewer", "editor", "admin")]
            # Once a role is allowed, every higher role is too
            self.assertEqual(flags, sorted(flags), operation)
            self.assertFalse(flags[0], operation)
            self.assertTrue(flags[-1], operation)

    def test_minimum_roles(self):
        self.assertTrue(permits("viewer", Operation.SEND_MESSAGE))
        self.assertTrue(permits("viewer", Operation.VOTE))
        self.assertFalse(permits("viewer", Operation.CREATE_TASK))
        self.assertTrue(permits("editor", Operation.CREATE_TASK))
        self.assertTrue(permits("editor", Operation.CREATE_POLL))
        self.assertFalse(permits("editor", Operation.CLOSE_POLL))
        self.assertFalse(permits("editor", Operation.ADD_MEMBER))
        self.assertTrue(permits("admin", Operation.ADD_MEMBER))

    def test_unknown_operation_is_refused(self):
        self.assertFalse(permits("admin", "project.delete"))

    def test_creator_override_requires_membership(self):
        # Member creator below the minimum role
        require(Access(role="viewer", visible=True), Operation.CLOSE_POLL, is_creator=True)

        with self.assertRaises(PermissionDenied):
            require(Access(role=ROLE_NONE, visible=True), Operation.CLOSE_POLL, is_creator=True)

    def test_creator_override_does_not_cover_member_management(self):
        with self.assertRaises(PermissionDenied):
            require(Access(role="editor", visible=True), Operation.ADD_MEMBER, is_creator=True)


class ResolveAccessTestCase(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(username="owner", email="owner@example.com", password="x")
        self.outsider = User.objects.create_user(username="out", email="out@example.com", password="x")

        self.public = Project.objects.create(owner=self.owner, title="Public")
        self.private = Project.objects.create(
            owner=self.owner, title="Private", visibility=Project.VISIBILITY_PRIVATE
        )
        for project in (self.public, self.private):
            Membership.objects.create(project=project, user=self.owner, role=Membership.ROLE_ADMIN)

    def test_member_sees_private_project_with_role(self):
        access = resolve_access(self.private, self.owner)
        self.assertEqual(access.role, "admin")
        self.assertTrue(access.visible)

    def test_outsider_cannot_see_private_project(self):
        access = resolve_access(self.private, self.outsider)
        self.assertEqual(access.role, ROLE_NONE)
        self.assertFalse(access.visible)
        self.assertIsNone(visible_project(self.private.pk, self.outsider))

    def test_public_project_visible_without_membership(self):
        access = resolve_access(self.public, self.outsider)
        self.assertEqual(access.role, ROLE_NONE)
        self.assertTrue(access.visible)

    def test_anonymous_user_sees_no_project(self):
        access = resolve_access(self.public, AnonymousUser())
        self.assertEqual(access.role, ROLE_NONE)
        self.assertFalse(access.visible)
        self.assertIsNone(visible_project(self.public.pk, AnonymousUser()))
        self.assertIsNone(visible_project(self.private.pk, AnonymousUser()))
        self.assertIsNone(visible_project(self.public.pk, None))

    def test_missing_project_is_absent(self):
        self.assertIsNone(visible_project(999999, self.owner))
