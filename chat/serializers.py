from rest_framework import serializers

from core.sanitizers import MAX_MESSAGE_LENGTH, sanitize_message, sanitize_title
from users.serializers import UserSummarySerializer
from .models import Message


class MessageSerializer(serializers.ModelSerializer):
    sender = UserSummarySerializer(read_only=True)
    is_read = serializers.SerializerMethodField()

    class Meta:
        model = Message
        fields = [
            'id',
            'project',
            'sender',
            'content',
            'type',
            'file_url',
            'file_name',
            'reply_to',
            'is_read',
            'created_at',
        ]
        read_only_fields = fields

    def get_is_read(self, obj):
        annotated = getattr(obj, "caller_has_read", None)
        if annotated is not None:
            return annotated

        user = self.context.get("user")
        if user is None or not user.is_authenticated:
            return False
        return obj.read_by.filter(pk=user.pk).exists()


class SendMessageSerializer(serializers.Serializer):
    content = serializers.CharField(
        required=False, allow_blank=True, default="", max_length=MAX_MESSAGE_LENGTH
    )
    type = serializers.ChoiceField(
        choices=[choice for choice in Message.TYPE_CHOICES if choice[0] in Message.CLIENT_TYPES],
        default=Message.TYPE_TEXT,
    )
    file_url = serializers.URLField(required=False, allow_blank=True, default="")
    file_name = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    reply_to = serializers.IntegerField(required=False, allow_null=True, default=None)

    def validate_content(self, value):
        return sanitize_message(value)

    def validate_file_name(self, value):
        return sanitize_title(value)


class MarkReadSerializer(serializers.Serializer):
    message_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=True,
    )
