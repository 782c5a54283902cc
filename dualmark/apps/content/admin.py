from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from .models import Comment, ContentItem, ContentMeta


@admin.register(ContentItem)
class ContentItemAdmin(SimpleHistoryAdmin):
    list_display = ("__str__", "item_type", "name", "parent", "updated_at")
    list_filter = ("item_type",)
    search_fields = ("title", "name", "source_content")
    raw_id_fields = ("parent",)


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ("__str__", "item", "created_at")
    raw_id_fields = ("item",)


@admin.register(ContentMeta)
class ContentMetaAdmin(admin.ModelAdmin):
    list_display = ("key", "value", "content_type", "object_id")
    list_filter = ("key", "content_type")
