from django.contrib import admin
from .models import ActivityLogEntry


@admin.register(ActivityLogEntry)
class ActivityLogEntryAdmin(admin.ModelAdmin):
    list_display = ('project', 'actor', 'action', 'target_entity', 'created_at')
    list_filter = ('action', 'created_at')
    search_fields = ('details', 'project__title', 'actor__email')

    # Append-only: entries are written by the mutation pipeline
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
