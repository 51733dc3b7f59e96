"""
Inline formatting for note markup.

Turns one piece of raw note text into inline HTML. The passes run in a fixed
order and each one only sees text the earlier passes left behind:

    [label](target)   -> <a href="target">label</a>
    `code`            -> <code>code</code>
    ~~text~~          -> <s>text</s>
    __text__          -> <u>text</u>
    **text**          -> <strong>text</strong>
    *text*            -> <strong>text</strong>
    _text_            -> <em>text</em>

Generated markup that a later pass could misread (anchor tags, link targets,
whole code spans) is parked behind placeholders until all passes are done.
Link labels stay in the text, so ``**[label](/x)**`` nests as expected.
"""

import re

from .config import get_markup_config
from .escaper import escape
from .url_guard import deny_list_url, sanitize_url

LINK_PATTERN = re.compile(r"\[(.+?)\]\((.+?)\)")
CODE_PATTERN = re.compile(r"`(.+?)`")

# (pattern, tag) in application order; order is significant
INLINE_RULES = [
    (re.compile(r"~~(.+?)~~"), "s"),
    (re.compile(r"__(.+?)__"), "u"),
    (re.compile(r"\*\*(.+?)\*\*"), "strong"),
    (re.compile(r"(?<!\*)\*(?!\*)(.+?)(?<!\*)\*(?!\*)"), "strong"),
    (re.compile(r"(?<!_)_(?!_)(.+?)(?<!_)_(?!_)"), "em"),
]

_HOLD_OPEN = "\ue000"
_HOLD_CLOSE = "\ue001"


class _Holder:
    """Stores generated fragments and hands out placeholder tokens."""

    def __init__(self):
        self.fragments = []

    def hold(self, fragment: str) -> str:
        self.fragments.append(fragment)
        return f"{_HOLD_OPEN}{len(self.fragments) - 1}{_HOLD_CLOSE}"

    def restore(self, text: str) -> str:
        # Later fragments may contain earlier tokens (a code span around a
        # link), so unwind newest first.
        for index in range(len(self.fragments) - 1, -1, -1):
            token = f"{_HOLD_OPEN}{index}{_HOLD_CLOSE}"
            text = text.replace(token, self.fragments[index])
        return text


def _guard_href(url, url_guard):
    fallback = get_markup_config()["LINK_FALLBACK"]
    if url_guard is None:
        return deny_list_url(url, fallback)
    return url_guard(url, fallback)


def format_inline(raw_text, url_guard=sanitize_url):
    """
    Render inline markup in ``raw_text`` as HTML.

    Args:
        raw_text: Unescaped note text (one line, or a whole note for previews)
        url_guard: Callable ``(url, fallback) -> url`` used for link targets;
            ``None`` falls back to a javascript:/data: deny-list

    Returns:
        Escaped text with inline HTML tags applied
    """
    if not raw_text:
        return ""

    # Placeholder delimiters must not come from the note itself
    raw_text = raw_text.replace(_HOLD_OPEN, "").replace(_HOLD_CLOSE, "")

    holder = _Holder()
    html = escape(raw_text)

    def link(match):
        label, url = match.group(1), match.group(2)
        href = _guard_href(url, url_guard)
        opening = f'<a href="{href}" target="_blank" rel="noopener noreferrer">'
        return f"{holder.hold(opening)}{label}{holder.hold('</a>')}"

    html = LINK_PATTERN.sub(link, html)
    html = CODE_PATTERN.sub(lambda m: holder.hold(f"<code>{m.group(1)}</code>"), html)

    for pattern, tag in INLINE_RULES:
        html = pattern.sub(rf"<{tag}>\1</{tag}>", html)

    return holder.restore(html)
