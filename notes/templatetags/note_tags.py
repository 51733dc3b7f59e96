# notes/templatetags/note_tags.py

from django import template
from django.utils.safestring import mark_safe

from notes.markup import blocks_to_html, parse_for_editor, render_preview

register = template.Library()


@register.filter(name="note_preview")
def note_preview_filter(value):
    return mark_safe(render_preview(value or ""))


@register.filter(name="note_editor")
def note_editor_filter(value):
    """Render markup as contenteditable editor HTML"""
    return mark_safe(blocks_to_html(parse_for_editor(value or "")))
