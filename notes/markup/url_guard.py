"""
Link target validation for note markup.

``sanitize_url`` is the guard injected into the inline formatter. It only lets
through http(s) and relative targets; everything else is replaced by the
fallback. ``deny_list_url`` is the minimal check used when a caller explicitly
runs the formatter without a guard.
"""

import logging
import re

from .config import get_markup_config

logger = logging.getLogger(__name__)

# Browsers ignore whitespace and control characters inside a scheme
# ("java\tscript:"), so they are dropped before comparing.
_IGNORED_CHARS = re.compile(r"[\x00-\x20\x7f]+")


def _normalise(url: str) -> str:
    return _IGNORED_CHARS.sub("", url).lower()


def sanitize_url(url, fallback=None):
    """
    Return ``url`` trimmed if it is a safe link target, otherwise ``fallback``.

    Args:
        url: Candidate link target as written in the note
        fallback: Replacement for rejected targets (defaults to the
            configured ``LINK_FALLBACK``, normally ``"#"``)

    Returns:
        The trimmed URL or the fallback
    """
    config = get_markup_config()
    if fallback is None:
        fallback = config["LINK_FALLBACK"]

    if not url or not isinstance(url, str):
        return fallback

    normalised = _normalise(url)

    for scheme in config["BLOCKED_URL_SCHEMES"]:
        if normalised.startswith(scheme):
            logger.warning(f"Rejected link with blocked scheme: {url!r}")
            return fallback

    trimmed = url.strip()
    if trimmed.lower().startswith(tuple(config["ALLOWED_URL_PREFIXES"])):
        return trimmed

    logger.warning(f"Rejected link with unsupported format: {url!r}")
    return fallback


def deny_list_url(url, fallback="#"):
    """Reject only ``javascript:`` and ``data:`` targets."""
    if not url:
        return fallback
    if _normalise(url).startswith(("javascript:", "data:")):
        return fallback
    return url
