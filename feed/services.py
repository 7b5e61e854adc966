# collab/feed/services.py
from django.contrib.auth import get_user_model
from django.db.models import Count, Exists, OuterRef, Prefetch, Q

from core.exceptions import InvalidArgument, NotFound
from core.pipeline import Mutation, locked
from projects.models import Project
from .models import GlobalPost, PostComment, PostLike

User = get_user_model()

SEARCH_ALL = "all"
SEARCH_PROJECTS = "projects"
SEARCH_USERS = "users"
SEARCH_TYPES = (SEARCH_ALL, SEARCH_PROJECTS, SEARCH_USERS)


class CreatePost(Mutation):
    def __init__(self, actor, content, type=GlobalPost.TYPE_STATUS):
        super().__init__(actor)
        self.content = content or ""
        self.type = type

    def validate(self):
        if not self.content.strip():
            raise InvalidArgument("Post cannot be empty")
        if self.type not in dict(GlobalPost.TYPE_CHOICES):
            raise InvalidArgument("Invalid post type")

    def apply(self):
        return GlobalPost.objects.create(author=self.actor, content=self.content, type=self.type)


class ToggleLike(Mutation):
    def __init__(self, actor, post_id):
        super().__init__(actor)
        self.post_id = post_id
        self.post = None

    def load(self):
        # Lock the post so two toggles by the same user cannot interleave
        self.post = locked(GlobalPost.objects, self.post_id, "Post")
        return None

    def apply(self):
        existing = PostLike.objects.filter(post=self.post, user=self.actor).first()
        if existing:
            existing.delete()
            liked = False
        else:
            PostLike.objects.create(post=self.post, user=self.actor)
            liked = True

        return {
            "liked": liked,
            "like_count": PostLike.objects.filter(post=self.post).count(),
        }

    def describe(self, result):
        return self.post_id


class AddComment(Mutation):
    def __init__(self, actor, post_id, content):
        super().__init__(actor)
        self.post_id = post_id
        self.content = content or ""
        self.post = None

    def load(self):
        self.post = GlobalPost.objects.filter(pk=self.post_id).first()
        if self.post is None:
            raise NotFound("Post not found")
        return None

    def validate(self):
        if not self.content.strip():
            raise InvalidArgument("Comment cannot be empty")

    def apply(self):
        return PostComment.objects.create(post=self.post, author=self.actor, content=self.content)


def list_posts(user, limit):
    qs = (
        GlobalPost.objects
        .select_related("author")
        .prefetch_related(
            Prefetch(
                "comments",
                queryset=PostComment.objects.select_related("author").order_by("created_at", "id"),
            )
        )
        .annotate(like_count=Count("likes", distinct=True))
        .order_by("-created_at", "-id")
    )

    if getattr(user, "is_authenticated", False):
        qs = qs.annotate(
            is_liked=Exists(PostLike.objects.filter(post=OuterRef("pk"), user_id=user.pk))
        )

    return list(qs[:limit])


def _tag_matches(tags, needle):
    return any(needle in str(tag).lower() for tag in (tags or []))


def search_projects(query, limit):
    """
    Public projects whose title, description or a tag contains the query.
    """
    needle = query.lower()
    candidates = (
        Project.objects
        .filter(visibility=Project.VISIBILITY_PUBLIC)
        .select_related("owner")
        .annotate(member_count=Count("memberships", distinct=True))
        .order_by("-created_at", "-id")
    )

    # Tags are a JSON list, matched here rather than in SQL
    matches = []
    for project in candidates:
        if (
            needle in project.title.lower()
            or needle in project.description.lower()
            or _tag_matches(project.tags, needle)
        ):
            matches.append(project)
        if len(matches) >= limit:
            break
    return matches


def search_users(query, limit):
    return list(
        User.objects
        .filter(Q(name__icontains=query) | Q(email__icontains=query))
        .order_by("id")[:limit]
    )


def global_search(query, type=SEARCH_ALL, limit=20):
    if type not in SEARCH_TYPES:
        raise InvalidArgument("type must be one of: all, projects, users")

    query = (query or "").strip()
    results = {}

    if type in (SEARCH_ALL, SEARCH_PROJECTS):
        results["projects"] = search_projects(query, limit) if query else []

    if type in (SEARCH_ALL, SEARCH_USERS):
        results["users"] = search_users(query, limit) if query else []

    return results
