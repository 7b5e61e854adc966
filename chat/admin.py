from django.contrib import admin
from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("project", "sender", "type", "created_at")
    list_filter = ("type",)
    search_fields = ("content", "project__title", "sender__email")
    raw_id_fields = ("project", "sender", "reply_to")
    filter_horizontal = ("read_by",)
