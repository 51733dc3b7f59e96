# notes/markup/postprocessors/sanitizer.py

import logging

import bleach

from ..config import get_markup_config

logger = logging.getLogger(__name__)

# Everything the note engine itself emits
ALLOWED_TAGS = {
    # inline formats
    "a",
    "code",
    "em",
    "s",
    "strong",
    "u",
    # line wrappers
    "br",
    "div",
    "span",
    # inert checkboxes
    "input",
}

ALLOWED_ATTRIBUTES = {
    "a": ["href", "target", "rel", "class"],
    "div": ["class"],
    "span": ["class"],
    "input": ["type", "checked", "disabled"],
}

ALLOWED_PROTOCOLS = ["http", "https"]


def sanitize_html(html, context):
    """
    Sanitize preview HTML using bleach.
    This is the FIRST post-processor and should run before any other HTML modifications.
    """
    if not get_markup_config()["SANITIZE_PREVIEW"] or context.get("skip_sanitize"):
        logger.debug("Preview sanitization disabled, skipping")
        return html

    try:
        return bleach.clean(
            html,
            tags=ALLOWED_TAGS,
            attributes=ALLOWED_ATTRIBUTES,
            protocols=ALLOWED_PROTOCOLS,
            strip=False,  # Escape disallowed tags instead of dropping their text
        )
    except Exception as e:
        logger.error(f"Bleach sanitization failed: {e}", exc_info=True)
        # Input is already escaped by the inline formatter
        return html
