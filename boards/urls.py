from django.urls import path

from .views import ProjectTasksView, TaskAssignmentView, TaskStatusView

urlpatterns = [
    path("projects/<int:project_id>/tasks/", ProjectTasksView.as_view(), name="project-tasks"),
    path("tasks/<int:pk>/status/", TaskStatusView.as_view(), name="task-status"),
    path("tasks/<int:pk>/assignment/", TaskAssignmentView.as_view(), name="task-assignment"),
]
