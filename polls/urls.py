from django.urls import path

from .views import PollCloseView, PollVoteView, ProjectPollsView

urlpatterns = [
    path("projects/<int:project_id>/polls/", ProjectPollsView.as_view(), name="project-polls"),
    path("<int:pk>/vote/", PollVoteView.as_view(), name="poll-vote"),
    path("<int:pk>/close/", PollCloseView.as_view(), name="poll-close"),
]
