from .detection import detect_active_formats
from .editor import blocks_to_html, parse_for_editor
from .formats import apply_format
from .preview import render_preview
from .serializer import html_to_markup, serialize
from .url_guard import sanitize_url


class NoteTextEngine:
    """
    Note text engine bound to one link guard.

    Holds no state besides the injected guard, so a single instance can be
    shared by every caller in a session.
    """

    def __init__(self, url_guard=sanitize_url):
        self.url_guard = url_guard

    def parse_for_editor(self, markup_text):
        return parse_for_editor(markup_text, url_guard=self.url_guard)

    def render_preview(self, markup_text, context=None):
        return render_preview(markup_text, url_guard=self.url_guard, context=context)

    def serialize(self, blocks):
        return serialize(blocks)

    def detect_active_formats(self, markup_text, selection_start, selection_end):
        return detect_active_formats(markup_text, selection_start, selection_end)

    def blocks_to_html(self, blocks):
        return blocks_to_html(blocks)

    def editor_html(self, markup_text):
        """Markup straight to contenteditable editor HTML."""
        return self.blocks_to_html(self.parse_for_editor(markup_text))

    def html_to_markup(self, html):
        return html_to_markup(html)

    def apply_format(self, markup_text, selection_start, selection_end, fmt, **options):
        return apply_format(markup_text, selection_start, selection_end, fmt, **options)
