from rest_framework import serializers

from core.sanitizers import MAX_TITLE_LENGTH, sanitize_text, sanitize_title
from users.serializers import UserSummarySerializer
from .models import Poll
from .services import percentage


class PollSerializer(serializers.ModelSerializer):
    """
    Read shape. Expects polls from list_polls() (total_votes / has_voted
    annotations); falls back to queries for a freshly created poll.
    """
    created_by = UserSummarySerializer(read_only=True)
    options = serializers.SerializerMethodField()
    total_votes = serializers.SerializerMethodField()
    has_voted = serializers.SerializerMethodField()

    class Meta:
        model = Poll
        fields = [
            'id',
            'project',
            'question',
            'created_by',
            'options',
            'total_votes',
            'has_voted',
            'deadline',
            'is_active',
            'created_at',
        ]
        read_only_fields = fields

    def get_total_votes(self, obj):
        total = getattr(obj, "total_votes", None)
        if total is None:
            total = obj.votes.count()
        return total

    def get_options(self, obj):
        total = self.get_total_votes(obj)
        return [
            {
                "id": option.key,
                "text": option.text,
                "votes": option.votes,
                "percentage": percentage(option.votes, total),
            }
            for option in obj.options.all()
        ]

    def get_has_voted(self, obj):
        return bool(getattr(obj, "has_voted", False))


class PollCreateSerializer(serializers.Serializer):
    question = serializers.CharField(max_length=500)
    options = serializers.ListField(child=serializers.CharField(allow_blank=True, max_length=MAX_TITLE_LENGTH))
    deadline = serializers.DateTimeField(required=False, allow_null=True, default=None)

    def validate_question(self, value):
        return sanitize_text(value, max_length=500)

    def validate_options(self, value):
        # Blank options are rejected by CreatePoll
        return [sanitize_title(option) for option in value]


class VoteSerializer(serializers.Serializer):
    option_id = serializers.CharField(max_length=32)
