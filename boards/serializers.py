from rest_framework import serializers

from core.sanitizers import MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH, sanitize_description, sanitize_title
from users.serializers import UserSummarySerializer
from .models import Task


class TaskSerializer(serializers.ModelSerializer):
    created_by = UserSummarySerializer(read_only=True)
    assigned_to = UserSummarySerializer(read_only=True, allow_null=True)

    class Meta:
        model = Task
        fields = [
            'id',
            'project',
            'title',
            'description',
            'status',
            'priority',
            'assigned_to',
            'created_by',
            'deadline',
            'tags',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TaskCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=MAX_TITLE_LENGTH)
    priority = serializers.ChoiceField(choices=Task.PRIORITY_CHOICES, default=Task.PRIORITY_MEDIUM)
    description = serializers.CharField(
        required=False, allow_blank=True, default="", max_length=MAX_DESCRIPTION_LENGTH
    )
    assigned_to = serializers.IntegerField(required=False, allow_null=True, default=None)
    deadline = serializers.DateTimeField(required=False, allow_null=True, default=None)
    tags = serializers.ListField(child=serializers.CharField(max_length=64), required=False, default=list)

    def validate_title(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("Title cannot be empty.")
        return value

    def validate_description(self, value):
        return sanitize_description(value)


class TaskStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Task.STATUS_CHOICES)


class TaskAssignmentSerializer(serializers.Serializer):
    # null clears the assignee
    assigned_to = serializers.IntegerField(allow_null=True)
