from django.urls import path

from .views import HeartbeatView, PresenceCleanupView, ProjectPresenceView, UpdatePresenceView

urlpatterns = [
    path("", UpdatePresenceView.as_view(), name="presence-update"),
    path("heartbeat/", HeartbeatView.as_view(), name="presence-heartbeat"),
    path("projects/<int:project_id>/", ProjectPresenceView.as_view(), name="project-presence"),
    path("cleanup/", PresenceCleanupView.as_view(), name="presence-cleanup"),
]
