from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework import status

from core.pagination import parse_flag, parse_limit
from .serializers import NotificationSerializer, MarkReadSerializer
from .services import get_notifications, mark_notifications_read


class MyNotificationsView(APIView):
    """
    GET  /api/notifications/me/
    GET  /api/notifications/me/?unread=true
    POST /api/notifications/me/   {"ids": [1, 2]} or {} to mark all read
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        data = get_notifications(
            request.user,
            unread_only=parse_flag(request, "unread"),
            limit=parse_limit(request, "notifications"),
        )
        return Response({
            "unread_count": data["unread_count"],
            "notifications": NotificationSerializer(data["notifications"], many=True).data,
        })

    def post(self, request):
        serializer = MarkReadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated = mark_notifications_read(request.user, ids=serializer.validated_data.get("ids"))
        return Response({"marked_read": updated}, status=status.HTTP_200_OK)
