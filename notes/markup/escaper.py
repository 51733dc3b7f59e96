from django.utils.html import escape as _django_escape


def escape(text):
    """
    Escape ``& < > " '`` so raw note text can be embedded in rendered HTML.

    Every call escapes again, so already-escaped text is double-escaped:
    callers escape each raw segment exactly once.
    """
    if not text:
        return ""
    return str(_django_escape(text))
