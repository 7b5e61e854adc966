from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.pagination import parse_limit
from .serializers import MarkReadSerializer, MessageSerializer, SendMessageSerializer
from .services import MarkMessagesRead, SendMessage, list_messages
from .throttles import MessageSendThrottle


class ProjectMessagesView(APIView):
    """
    GET  /api/chat/projects/<project_id>/messages/?limit=50
    POST /api/chat/projects/<project_id>/messages/

    Mentions ("@someone@example.com") notify project members.
    """
    throttle_classes = [MessageSendThrottle]
    throttle_scope = "chat-send"

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request, project_id):
        messages = list_messages(project_id, request.user, parse_limit(request, "messages"))
        return Response(
            MessageSerializer(messages, many=True, context={"user": request.user}).data
        )

    def post(self, request, project_id):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        message = SendMessage(request.user, project_id, **serializer.validated_data).execute()
        return Response(
            MessageSerializer(message, context={"user": request.user}).data,
            status=status.HTTP_201_CREATED,
        )


class MarkMessagesReadView(APIView):
    """
    POST /api/chat/read/   {"message_ids": [1, 2, 3]}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = MarkReadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        added = MarkMessagesRead(request.user, serializer.validated_data["message_ids"]).execute()
        return Response({"marked_read": added})
