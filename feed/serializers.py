from rest_framework import serializers

from core.sanitizers import MAX_MESSAGE_LENGTH, sanitize_message
from projects.serializers import ProjectSerializer
from users.serializers import UserSummarySerializer
from .models import GlobalPost, PostComment


class PostCommentSerializer(serializers.ModelSerializer):
    author = UserSummarySerializer(read_only=True)

    class Meta:
        model = PostComment
        fields = ['id', 'author', 'content', 'created_at']
        read_only_fields = fields


class GlobalPostSerializer(serializers.ModelSerializer):
    author = UserSummarySerializer(read_only=True)
    comments = PostCommentSerializer(many=True, read_only=True)
    like_count = serializers.SerializerMethodField()
    is_liked = serializers.SerializerMethodField()

    class Meta:
        model = GlobalPost
        fields = [
            'id',
            'author',
            'content',
            'type',
            'like_count',
            'is_liked',
            'comments',
            'created_at',
        ]
        read_only_fields = fields

    def get_like_count(self, obj):
        annotated = getattr(obj, "like_count", None)
        if annotated is not None:
            return annotated
        return obj.likes.count()

    def get_is_liked(self, obj):
        return bool(getattr(obj, "is_liked", False))


class CreatePostSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=MAX_MESSAGE_LENGTH)
    type = serializers.ChoiceField(choices=GlobalPost.TYPE_CHOICES, default=GlobalPost.TYPE_STATUS)

    def validate_content(self, value):
        return sanitize_message(value)


class CommentSerializer(serializers.Serializer):
    # Blank is rejected by AddComment with InvalidArgument
    content = serializers.CharField(allow_blank=True, trim_whitespace=False, max_length=MAX_MESSAGE_LENGTH)

    def validate_content(self, value):
        return sanitize_message(value)


class SearchResultSerializer(serializers.Serializer):
    projects = ProjectSerializer(many=True, read_only=True, required=False)
    users = UserSummarySerializer(many=True, read_only=True, required=False)
