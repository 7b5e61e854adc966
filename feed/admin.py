from django.contrib import admin
from .models import GlobalPost, PostComment, PostLike


class PostCommentInline(admin.TabularInline):
    model = PostComment
    extra = 0
    raw_id_fields = ("author",)


@admin.register(GlobalPost)
class GlobalPostAdmin(admin.ModelAdmin):
    list_display = ("author", "type", "created_at")
    list_filter = ("type", "created_at")
    search_fields = ("content", "author__email")
    inlines = [PostCommentInline]


@admin.register(PostLike)
class PostLikeAdmin(admin.ModelAdmin):
    list_display = ("post", "user", "created_at")
