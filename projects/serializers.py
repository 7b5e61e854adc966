from rest_framework import serializers

from core.sanitizers import MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH, sanitize_description, sanitize_title
from users.serializers import UserSummarySerializer
from .models import Project, Membership


class ProjectSerializer(serializers.ModelSerializer):
    owner = UserSummarySerializer(read_only=True)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id',
            'owner',
            'title',
            'description',
            'status',
            'visibility',
            'deadline',
            'tags',
            'member_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        annotated = getattr(obj, "member_count", None)
        if annotated is not None:
            return annotated
        return obj.memberships.count()


class ProjectCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=MAX_TITLE_LENGTH)
    description = serializers.CharField(
        required=False, allow_blank=True, default="", max_length=MAX_DESCRIPTION_LENGTH
    )
    visibility = serializers.ChoiceField(
        choices=Project.VISIBILITY_CHOICES,
        default=Project.VISIBILITY_PUBLIC,
    )
    deadline = serializers.DateTimeField(required=False, allow_null=True, default=None)
    tags = serializers.ListField(
        child=serializers.CharField(max_length=64),
        required=False,
        default=list,
    )

    def validate_title(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("Title cannot be empty.")
        return value

    def validate_description(self, value):
        return sanitize_description(value)

    def validate_tags(self, value):
        return [tag for tag in (sanitize_title(t) for t in value) if tag]


class ProjectStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Project.STATUS_CHOICES)


class MembershipSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    invited_by = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = Membership
        fields = ['id', 'user', 'role', 'invited_by', 'joined_at']
        read_only_fields = fields


class AddMemberSerializer(serializers.Serializer):
    email = serializers.EmailField()
    role = serializers.ChoiceField(choices=Membership.ROLE_CHOICES, default=Membership.ROLE_VIEWER)


class ProjectDetailSerializer(serializers.Serializer):
    """
    Shape of {"project", "members", "user_role"} built by project_detail().
    """
    project = ProjectSerializer(read_only=True)
    members = MembershipSerializer(many=True, read_only=True)
    user_role = serializers.CharField(read_only=True, allow_null=True)
