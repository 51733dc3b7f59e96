# notes/markup/__init__.py

from .blocks import (
    Block,
    Bullet,
    Checkbox,
    Numbered,
    Paragraph,
    Table,
    block_from_dict,
    block_to_dict,
)
from .detection import FormatState, detect_active_formats
from .editor import blocks_to_html, html_to_blocks, parse_for_editor
from .engine import NoteTextEngine
from .escaper import escape
from .formats import FormatEdit, apply_format
from .inline import format_inline
from .preview import render_preview
from .serializer import extract_inline_markup, html_to_markup, serialize
from .url_guard import deny_list_url, sanitize_url

__all__ = [
    # Blocks
    "Block",
    "Paragraph",
    "Bullet",
    "Numbered",
    "Checkbox",
    "Table",
    "block_to_dict",
    "block_from_dict",
    # Rendering
    "escape",
    "sanitize_url",
    "deny_list_url",
    "format_inline",
    "parse_for_editor",
    "blocks_to_html",
    "html_to_blocks",
    "render_preview",
    # Serialisation
    "serialize",
    "extract_inline_markup",
    "html_to_markup",
    # Toolbar
    "FormatState",
    "detect_active_formats",
    "FormatEdit",
    "apply_format",
    "NoteTextEngine",
]
