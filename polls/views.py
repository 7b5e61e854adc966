from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.pagination import parse_flag
from .serializers import PollCreateSerializer, PollSerializer, VoteSerializer
from .services import CastVote, ClosePoll, CreatePoll, list_polls


class ProjectPollsView(APIView):
    """
    GET  /api/polls/projects/<project_id>/polls/?active=true
    POST /api/polls/projects/<project_id>/polls/
    """

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request, project_id):
        polls = list_polls(project_id, request.user, active_only=parse_flag(request, "active"))
        return Response(PollSerializer(polls, many=True).data)

    def post(self, request, project_id):
        serializer = PollCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        poll = CreatePoll(request.user, project_id, **serializer.validated_data).execute()
        return Response(PollSerializer(poll).data, status=status.HTTP_201_CREATED)


class PollVoteView(APIView):
    """
    POST /api/polls/<pk>/vote/   {"option_id": "option_1"}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        serializer = VoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = CastVote(request.user, pk, serializer.validated_data["option_id"]).execute()
        return Response(result)


class PollCloseView(APIView):
    """
    POST /api/polls/<pk>/close/
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        poll = ClosePoll(request.user, pk).execute()
        return Response({"id": poll.pk, "is_active": poll.is_active})
