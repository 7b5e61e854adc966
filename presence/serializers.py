from rest_framework import serializers

from users.serializers import UserSummarySerializer
from .models import PresenceRecord


class PresenceRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = PresenceRecord
        fields = ['status', 'last_seen', 'current_project']
        read_only_fields = fields


class MemberPresenceSerializer(serializers.Serializer):
    user = UserSummarySerializer(read_only=True)
    status = serializers.CharField(read_only=True)
    last_seen = serializers.DateTimeField(read_only=True, allow_null=True)
    is_in_project = serializers.BooleanField(read_only=True)


class UpdatePresenceSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=PresenceRecord.STATUS_CHOICES)
    current_project = serializers.IntegerField(required=False, allow_null=True, default=None)


class HeartbeatSerializer(serializers.Serializer):
    current_project = serializers.IntegerField(required=False, allow_null=True, default=None)
