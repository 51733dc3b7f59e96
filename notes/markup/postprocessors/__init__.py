# notes/markup/postprocessors/__init__.py

from .link_decorator import link_decorator_default
from .sanitizer import sanitize_html

POSTPROCESSORS = [
    sanitize_html,  # Must run first, on the raw preview HTML
    link_decorator_default,  # Mark external links
    # Order matters - they run sequentially
]


def apply_postprocessors(html, context):
    """Apply all postprocessors in order"""
    for processor in POSTPROCESSORS:
        html = processor(html, context)
    return html
