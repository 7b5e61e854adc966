from django.urls import path

from .views import (
    MyProjectsView,
    ProjectActivityView,
    ProjectDetailView,
    ProjectListCreateView,
    ProjectMemberDetailView,
    ProjectMembersView,
    ProjectStatusView,
)

urlpatterns = [
    path("", ProjectListCreateView.as_view(), name="project-list"),
    path("mine/", MyProjectsView.as_view(), name="project-mine"),
    path("<int:pk>/", ProjectDetailView.as_view(), name="project-detail"),
    path("<int:pk>/status/", ProjectStatusView.as_view(), name="project-status"),
    path("<int:pk>/members/", ProjectMembersView.as_view(), name="project-members"),
    path(
        "<int:pk>/members/<int:user_id>/",
        ProjectMemberDetailView.as_view(),
        name="project-member-detail",
    ),
    path("<int:pk>/activity/", ProjectActivityView.as_view(), name="project-activity"),
]
