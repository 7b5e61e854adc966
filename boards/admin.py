from django.contrib import admin
from .models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ("title", "project", "status", "priority", "assigned_to", "created_at")
    list_filter = ("status", "priority")
    search_fields = ("title", "description", "project__title")
    raw_id_fields = ("project", "assigned_to", "created_by")
