from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import InvalidArgument
from core.pagination import parse_limit
from .serializers import (
    CommentSerializer,
    CreatePostSerializer,
    GlobalPostSerializer,
    PostCommentSerializer,
    SearchResultSerializer,
)
from .services import AddComment, CreatePost, ToggleLike, global_search, list_posts


class PostListCreateView(APIView):
    """
    GET  /api/feed/posts/?limit=20
    POST /api/feed/posts/   {"content": "...", "type": "status" | "announcement"}
    """

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request):
        posts = list_posts(request.user, parse_limit(request, "posts"))
        return Response(GlobalPostSerializer(posts, many=True).data)

    def post(self, request):
        serializer = CreatePostSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        post = CreatePost(request.user, **serializer.validated_data).execute()
        return Response(GlobalPostSerializer(post).data, status=status.HTTP_201_CREATED)


class PostInteractionView(APIView):
    """
    POST /api/feed/posts/<post_id>/like/      -> {"liked", "like_count"}
    POST /api/feed/posts/<post_id>/comment/   {"content": "..."}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, post_id, action):
        if action == "like":
            return Response(ToggleLike(request.user, post_id).execute())

        if action == "comment":
            serializer = CommentSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            comment = AddComment(request.user, post_id, serializer.validated_data["content"]).execute()
            return Response(PostCommentSerializer(comment).data, status=status.HTTP_201_CREATED)

        raise InvalidArgument("Invalid action")


class GlobalSearchView(APIView):
    """
    GET /api/feed/search/?q=design&type=all|projects|users
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        results = global_search(
            request.query_params.get("q", ""),
            type=request.query_params.get("type", "all"),
            limit=parse_limit(request, "search"),
        )
        return Response(SearchResultSerializer(results).data)
