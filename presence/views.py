from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    HeartbeatSerializer,
    MemberPresenceSerializer,
    PresenceRecordSerializer,
    UpdatePresenceSerializer,
)
from .services import Heartbeat, UpdatePresence, cleanup_offline, project_presence


class UpdatePresenceView(APIView):
    """
    POST /api/presence/   {"status": "online" | "away" | "offline", "current_project": 3}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = UpdatePresenceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        record = UpdatePresence(request.user, **serializer.validated_data).execute()
        return Response(PresenceRecordSerializer(record).data)


class HeartbeatView(APIView):
    """
    POST /api/presence/heartbeat/   {"current_project": 3}
    Sent by clients every PRESENCE_HEARTBEAT_INTERVAL_SECONDS.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = HeartbeatSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        record = Heartbeat(request.user, **serializer.validated_data).execute()
        return Response(PresenceRecordSerializer(record).data)


class ProjectPresenceView(APIView):
    """
    GET /api/presence/projects/<project_id>/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, project_id):
        entries = project_presence(project_id, request.user)
        return Response(MemberPresenceSerializer(entries, many=True).data)


class PresenceCleanupView(APIView):
    """
    POST /api/presence/cleanup/   (staff only; normally run by Celery beat)
    """
    permission_classes = [IsAdminUser]

    def post(self, request):
        return Response({"marked_offline": cleanup_offline()})
