from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import InvalidArgument
from .models import Task
from .serializers import (
    TaskAssignmentSerializer,
    TaskCreateSerializer,
    TaskSerializer,
    TaskStatusSerializer,
)
from .services import CreateTask, UpdateTaskAssignment, UpdateTaskStatus, list_tasks


class ProjectTasksView(APIView):
    """
    GET  /api/boards/projects/<project_id>/tasks/?status=todo
    POST /api/boards/projects/<project_id>/tasks/
    """

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request, project_id):
        status_filter = request.query_params.get("status")
        if status_filter and status_filter not in dict(Task.STATUS_CHOICES):
            raise InvalidArgument("Invalid status filter")

        tasks = list_tasks(project_id, request.user, status=status_filter)
        return Response(TaskSerializer(tasks, many=True).data)

    def post(self, request, project_id):
        serializer = TaskCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        task = CreateTask(request.user, project_id, **serializer.validated_data).execute()
        return Response(TaskSerializer(task).data, status=status.HTTP_201_CREATED)


class TaskStatusView(APIView):
    """
    POST /api/boards/tasks/<pk>/status/   {"status": "done"}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        serializer = TaskStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        task = UpdateTaskStatus(request.user, pk, serializer.validated_data["status"]).execute()
        return Response(TaskSerializer(task).data)


class TaskAssignmentView(APIView):
    """
    POST /api/boards/tasks/<pk>/assignment/   {"assigned_to": 7} or {"assigned_to": null}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        serializer = TaskAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        task = UpdateTaskAssignment(
            request.user, pk, serializer.validated_data["assigned_to"]
        ).execute()
        return Response(TaskSerializer(task).data)
