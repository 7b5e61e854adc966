from django.contrib import admin
from .models import Poll, PollOption


class PollOptionInline(admin.TabularInline):
    model = PollOption
    extra = 0
    # Counts are derived from PollVote rows
    readonly_fields = ("votes",)


@admin.register(Poll)
class PollAdmin(admin.ModelAdmin):
    list_display = ("question", "project", "created_by", "is_active", "deadline", "created_at")
    list_filter = ("is_active",)
    search_fields = ("question", "project__title")
    inlines = [PollOptionInline]
