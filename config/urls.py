from django.contrib import admin
from django.urls import path, include
from core.views import HealthCheckView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/users/', include('users.urls')),
    path('api/projects/', include('projects.urls')),
    path('api/boards/', include('boards.urls')),
    path('api/chat/', include('chat.urls')),
    path('api/polls/', include('polls.urls')),
    path('api/presence/', include('presence.urls')),
    path('api/feed/', include('feed.urls')),
    path('api/notifications/', include('notifications.urls')),
    path("api/health/", HealthCheckView.as_view(), name="health-check"),
]
