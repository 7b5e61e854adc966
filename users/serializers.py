from rest_framework import serializers
from .models import User


class UserSummarySerializer(serializers.ModelSerializer):
    """
    Compact profile attached wherever a user is referenced
    (senders, creators, assignees, members, authors).
    """
    name = serializers.CharField(source="display_name", read_only=True)

    class Meta:
        model = User
        fields = ["id", "name", "email", "avatar"]
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'name',
            'display_name',
            'avatar',
            'date_joined',
        ]
        read_only_fields = fields
