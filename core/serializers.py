from rest_framework import serializers

from users.serializers import UserSummarySerializer
from .models import ActivityLogEntry


class ActivityLogEntrySerializer(serializers.ModelSerializer):
    actor = UserSummarySerializer(read_only=True)

    class Meta:
        model = ActivityLogEntry
        fields = [
            'id',
            'project',
            'actor',
            'action',
            'target_entity',
            'details',
            'metadata',
            'created_at',
        ]
        read_only_fields = fields
