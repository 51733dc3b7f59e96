from django.conf import settings

DEFAULT_MARKUP_CONFIG = {
    # Target substituted for rejected link URLs
    "LINK_FALLBACK": "#",
    # Link targets must start with one of these (after trimming)
    "ALLOWED_URL_PREFIXES": ["http://", "https://", "/", "#"],
    # Schemes that are always rejected, even if an allowed prefix matches
    "BLOCKED_URL_SCHEMES": ["javascript:", "data:", "vbscript:", "file:"],
    # Run the bleach sanitizer over preview output
    "SANITIZE_PREVIEW": True,
}


def get_markup_config():
    """
    Configuration for the note markup engine.

    Values come from the optional ``NOTES_MARKUP`` Django setting and fall back
    to ``DEFAULT_MARKUP_CONFIG``. The engine is usable outside a configured
    Django project, in which case the defaults apply.
    """
    config = dict(DEFAULT_MARKUP_CONFIG)
    if settings.configured:
        config.update(getattr(settings, "NOTES_MARKUP", {}) or {})
    return config
