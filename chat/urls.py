from django.urls import path

from .views import MarkMessagesReadView, ProjectMessagesView

urlpatterns = [
    path("projects/<int:project_id>/messages/", ProjectMessagesView.as_view(), name="project-messages"),
    path("read/", MarkMessagesReadView.as_view(), name="messages-read"),
]
