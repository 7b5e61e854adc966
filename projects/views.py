from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.pagination import parse_limit
from core.serializers import ActivityLogEntrySerializer
from .serializers import (
    AddMemberSerializer,
    MembershipSerializer,
    ProjectCreateSerializer,
    ProjectDetailSerializer,
    ProjectSerializer,
    ProjectStatusSerializer,
)
from .services import (
    AddMember,
    CreateProject,
    RemoveMember,
    UpdateProjectStatus,
    project_detail,
    project_timeline,
    projects_for_user,
    public_projects,
)


class ProjectListCreateView(APIView):
    """
    GET  /api/projects/          -> public projects, newest first
    POST /api/projects/          -> create a project (caller becomes owner + admin)
    """

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request):
        projects = public_projects(parse_limit(request, "projects"))
        return Response(ProjectSerializer(projects, many=True).data)

    def post(self, request):
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = CreateProject(request.user, **serializer.validated_data).execute()
        return Response(ProjectSerializer(project).data, status=status.HTTP_201_CREATED)


class MyProjectsView(APIView):
    """
    GET /api/projects/mine/
    Projects the caller owns or belongs to, each with the caller's role.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        data = []
        for project, role in projects_for_user(request.user):
            item = ProjectSerializer(project).data
            item["role"] = role
            data.append(item)
        return Response(data)


class ProjectDetailView(APIView):
    """
    GET /api/projects/<id>/
    Returns null for projects that do not exist or that the caller cannot see.
    """
    permission_classes = [AllowAny]

    def get(self, request, pk):
        detail = project_detail(pk, request.user)
        if detail is None:
            return Response(None)
        return Response(ProjectDetailSerializer(detail).data)


class ProjectStatusView(APIView):
    """
    POST /api/projects/<id>/status/   {"status": "completed"}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        serializer = ProjectStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = UpdateProjectStatus(
            request.user, pk, serializer.validated_data["status"]
        ).execute()
        return Response(ProjectSerializer(project).data)


class ProjectMembersView(APIView):
    """
    POST /api/projects/<id>/members/   {"email": "...", "role": "editor"}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        membership = AddMember(
            request.user,
            pk,
            email=serializer.validated_data["email"],
            role=serializer.validated_data["role"],
        ).execute()
        return Response(MembershipSerializer(membership).data, status=status.HTTP_201_CREATED)


class ProjectMemberDetailView(APIView):
    """
    DELETE /api/projects/<id>/members/<user_id>/
    """
    permission_classes = [IsAuthenticated]

    def delete(self, request, pk, user_id):
        RemoveMember(request.user, pk, user_id).execute()
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProjectActivityView(APIView):
    """
    GET /api/projects/<id>/activity/?limit=50
    Timeline, newest first. Empty for projects the caller cannot see.
    """
    permission_classes = [AllowAny]

    def get(self, request, pk):
        entries = project_timeline(pk, request.user, parse_limit(request, "activity"))
        return Response(ActivityLogEntrySerializer(entries, many=True).data)
