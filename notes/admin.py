# notes/admin.py
from django.contrib import admin, messages
from django.utils.html import format_html
from django.utils.safestring import mark_safe
from unfold.admin import ModelAdmin
from unfold.decorators import action, display

from .models import Note


class SoftDeleteAdminMixin(ModelAdmin):
    """List trashed rows too, with bulk actions to trash and restore them."""

    def get_queryset(self, request):
        qs = self.model.all_objects.get_queryset()
        ordering = self.get_ordering(request)
        if ordering:
            qs = qs.order_by(*ordering)
        return qs

    @action(description="Move selected to trash")
    def soft_delete_selected(self, request, queryset):
        count = queryset.soft_delete()
        self.message_user(request, f"Moved {count} item(s) to trash.", level=messages.SUCCESS)

    @action(description="Restore selected from trash")
    def restore_selected(self, request, queryset):
        count = queryset.restore()
        self.message_user(request, f"Restored {count} item(s).", level=messages.SUCCESS)


@admin.register(Note)
class NoteAdmin(SoftDeleteAdminMixin):
    list_display = ("display_title", "uid", "words", "is_deleted", "updated_at")
    list_filter = ("is_deleted",)
    search_fields = ("title", "content", "uid")
    readonly_fields = ("uid", "preview", "created_at", "updated_at", "deleted_at")
    ordering = ("-updated_at",)
    actions = ("soft_delete_selected", "restore_selected")
    list_per_page = 50

    fieldsets = (
        (
            None,
            {
                "fields": ("title", "uid"),
                "classes": ["unfold-column-2"],
            },
        ),
        (
            "Content",
            {
                "fields": ("content", "preview"),
                "description": "Write content in note markup. The preview is auto-generated.",
            },
        ),
        (
            "Metadata",
            {
                "fields": (("created_at", "updated_at"), "deleted_at"),
                "classes": ["collapse"],
            },
        ),
    )

    @display(description="Title", ordering="title")
    def display_title(self, obj):
        return str(obj)

    @display(description="Words")
    def words(self, obj):
        return obj.word_count

    @display(description="Preview")
    def preview(self, obj):
        if not obj.content_html:
            return format_html('<span style="color: #999;">{}</span>', "Empty note")
        # content_html is escaped and sanitized when the note is saved
        return format_html('<div class="note-preview">{}</div>', mark_safe(obj.content_html))
