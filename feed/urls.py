from django.urls import path

from .views import GlobalSearchView, PostInteractionView, PostListCreateView

urlpatterns = [
    path("posts/", PostListCreateView.as_view(), name="post-list"),
    path(
        "posts/<int:post_id>/<str:action>/",
        PostInteractionView.as_view(),
        name="post-interaction",
    ),
    path("search/", GlobalSearchView.as_view(), name="global-search"),
]
