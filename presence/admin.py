from django.contrib import admin
from .models import PresenceRecord


@admin.register(PresenceRecord)
class PresenceRecordAdmin(admin.ModelAdmin):
    list_display = ("user", "status", "last_seen", "current_project")
    list_filter = ("status",)
    search_fields = ("user__email",)
