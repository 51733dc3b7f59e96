# notes/markup/postprocessors/link_decorator.py
"""
Postprocessor that marks external links in preview HTML.

Links produced by the inline formatter already open in a new tab; this adds
the ``external-link`` class to http(s) targets so the panel can style them.
Relative targets and the ``#`` fallback are left alone.
"""

from bs4 import BeautifulSoup

EXTERNAL_PREFIXES = ("http://", "https://")


def link_decorator(html: str, context: dict) -> str:
    """
    Add the ``external-link`` class to external anchors.

    Args:
        html: HTML string to process
        context: Context dictionary (unused but required for postprocessor signature)

    Returns:
        Processed HTML; the input is returned untouched when it has no
        external links
    """
    if "<a " not in html:
        return html

    soup = BeautifulSoup(html, "html.parser")
    changed = False

    for link in soup.find_all("a", href=True):
        if not link["href"].startswith(EXTERNAL_PREFIXES):
            continue
        classes = link.get("class", [])
        if isinstance(classes, str):
            classes = classes.split()
        if "external-link" not in classes:
            link["class"] = classes + ["external-link"]
            changed = True

    return str(soup) if changed else html


def link_decorator_default(html: str, context: dict) -> str:
    """
    Default configuration for link_decorator.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return link_decorator(html, context)
