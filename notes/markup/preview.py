"""
Read-only preview rendering for note markup.

Cheaper than the editor path: inline rules run over the whole note at once,
then a line pass turns checkbox and bullet markers into inert wrappers.
Tables are not parsed here and render as their literal text.
"""

import re

from .inline import format_inline
from .postprocessors import apply_postprocessors
from .url_guard import sanitize_url

CHECKED_LINE = re.compile(r"^- \[x\]\s*", re.IGNORECASE)
UNCHECKED_LINE = re.compile(r"^- \[ \]\s*")
BULLET_LINE = re.compile(r"^- ")


def _render_line(line: str) -> str:
    if CHECKED_LINE.match(line):
        body = CHECKED_LINE.sub("", line, count=1)
        return (
            '<div class="note-checkbox checked">'
            f'<input type="checkbox" checked disabled><span>{body}</span></div>'
        )
    if UNCHECKED_LINE.match(line):
        body = UNCHECKED_LINE.sub("", line, count=1)
        return (
            '<div class="note-checkbox">'
            f'<input type="checkbox" disabled><span>{body}</span></div>'
        )
    if BULLET_LINE.match(line):
        return f'<div class="note-bullet">• {BULLET_LINE.sub("", line, count=1)}</div>'
    return line


def render_preview(markup_text, url_guard=sanitize_url, context=None):
    """
    Render note markup as read-only preview HTML.

    Args:
        markup_text: Stored note markup
        url_guard: Link target guard passed to the inline formatter
        context: Optional dict handed to the postprocessors

    Returns:
        Preview HTML (lines joined with newlines); ``""`` for empty input
    """
    if not markup_text:
        return ""

    context = context or {}

    html = format_inline(markup_text, url_guard)
    html = "\n".join(_render_line(line) for line in html.split("\n"))

    return apply_postprocessors(html, context)
