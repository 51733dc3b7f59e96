"""
Toolbar edits on note markup.

``apply_format`` applies one toolbar action to the markup text and returns
the new text plus the selection to restore. Inline and line formats toggle:
when the detector reports the format as active, the action removes it.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .detection import COLOR_TAG, detect_active_formats, line_bounds

INLINE_MARKERS = {
    "bold": "**",
    "italic": "_",
    "underline": "__",
    "strikethrough": "~~",
}

# Patterns that can hold an active inline format, used to find the pair to remove
REMOVAL_PATTERNS = {
    "bold": [
        re.compile(r"\*\*(.+?)\*\*"),
        re.compile(r"(?<!\*)\*(?!\*)(.+?)(?<!\*)\*(?!\*)"),
    ],
    "italic": [
        re.compile(r"(?<!_)_(?!_)(.+?)(?<!_)_(?!_)"),
        re.compile(r"\^\^(.+?)\^\^"),
        re.compile(r"(?<!\^)\^(?!\^)(.+?)(?<!\^)\^(?!\^)"),
    ],
    "underline": [re.compile(r"__(.+?)__")],
    "strikethrough": [
        re.compile(r"~~(.+?)~~"),
        re.compile(r"(?<!~)~(?!~)(.+?)(?<!~)~(?!~)"),
    ],
}

LIST_PREFIXES = {
    "bullet": "- ",
    "checkbox": "- [ ] ",
}

JUSTIFY_PREFIXES = {
    "justify-left": "",
    "justify-center": "-:- ",
    "justify-right": "--: ",
}
JUSTIFY_PATTERN = re.compile(r"^\s*(?:-:-|--:)\s*")
COLOR_NAME = re.compile(r"^\w+$")

PLACEHOLDER_TEXT = "text"
PLACEHOLDER_ITEM = "Item"
PLACEHOLDER_LINK = "link text"
TABLE_TEMPLATE = (
    "| Column 1 | Column 2 | Column 3 |\n"
    "| --- | --- | --- |\n"
    "| Item 1 | Item 2 | Item 3 |"
)


@dataclass
class FormatEdit:
    """Result of a toolbar action: new markup and the selection to restore."""

    text: str
    selection_start: int
    selection_end: int


def _wrap(text: str, start: int, end: int, marker: str, placeholder: str) -> FormatEdit:
    body = text[start:end] or placeholder
    new_text = text[:start] + marker + body + marker + text[end:]
    inner_start = start + len(marker)
    return FormatEdit(new_text, inner_start, inner_start + len(body))


def _remove_inline(text: str, start: int, end: int, name: str) -> Optional[FormatEdit]:
    line_start, line_end = line_bounds(text, start)
    line = text[line_start:line_end]
    best = None

    for pattern in REMOVAL_PATTERNS[name]:
        for match in pattern.finditer(line):
            body_start = line_start + match.start(1)
            body_end = line_start + match.end(1)
            if body_start <= start and end <= body_end:
                if best is None or (body_end - body_start) < (best[2] - best[1]):
                    best = (match, body_start, body_end)

    if best is None:
        return None

    match, _, _ = best
    opening = match.start(1) - match.start()
    new_text = (
        text[: line_start + match.start()]
        + match.group(1)
        + text[line_start + match.end():]
    )
    return FormatEdit(new_text, start - opening, end - opening)


def _toggle_inline(text: str, start: int, end: int, name: str) -> FormatEdit:
    state = detect_active_formats(text, start, end)
    if getattr(state, name):
        removed = _remove_inline(text, start, end, name)
        # Active but not removable as a clean pair: leave the text alone
        return removed or FormatEdit(text, start, end)
    return _wrap(text, start, end, INLINE_MARKERS[name], PLACEHOLDER_TEXT)


def _toggle_code(text: str, start: int, end: int) -> FormatEdit:
    if start != end and text[:start].endswith("`") and text[end:].startswith("`"):
        new_text = text[: start - 1] + text[start:end] + text[end + 1:]
        return FormatEdit(new_text, start - 1, end - 1)
    return _wrap(text, start, end, "`", PLACEHOLDER_TEXT)


def _insert_link(text: str, start: int, end: int, url: Optional[str]) -> FormatEdit:
    if not url or not url.strip():
        raise ValueError("A link needs a URL")
    label = text[start:end] or PLACEHOLDER_LINK
    new_text = text[:start] + f"[{label}]({url.strip()})" + text[end:]
    return FormatEdit(new_text, start + 1, start + 1 + len(label))


def _prefix_lines(text: str, start: int, end: int, name: str) -> FormatEdit:
    if start == end:
        prefix = "1. " if name == "numbered" else LIST_PREFIXES[name]
        new_text = text[:start] + prefix + PLACEHOLDER_ITEM + text[end:]
        item_start = start + len(prefix)
        return FormatEdit(new_text, item_start, item_start + len(PLACEHOLDER_ITEM))

    lines = text[start:end].split("\n")
    if name == "numbered":
        replaced = [f"{number}. {line}" for number, line in enumerate(lines, 1)]
    else:
        replaced = [LIST_PREFIXES[name] + line for line in lines]
    replacement = "\n".join(replaced)
    return FormatEdit(text[:start] + replacement + text[end:], start, start + len(replacement))


def _apply_color(text: str, start: int, end: int, color: Optional[str]) -> FormatEdit:
    if not color or not COLOR_NAME.match(color):
        raise ValueError(f"Invalid color name: {color!r}")

    state = detect_active_formats(text, start, end)
    line_start, _ = line_bounds(text, start)
    existing = list(COLOR_TAG.finditer(text, line_start, start))

    if existing:
        tag = existing[-1]
        if state.color == color:
            # Same color again toggles it off, along with the space after it
            tag_end = tag.end()
            while tag_end < start and text[tag_end] == " ":
                tag_end += 1
            removed = tag_end - tag.start()
            new_text = text[: tag.start()] + text[tag_end:]
            return FormatEdit(new_text, start - removed, end - removed)
        replacement = f"[!color:{color}]"
        delta = len(replacement) - (tag.end() - tag.start())
        new_text = text[: tag.start()] + replacement + text[tag.end():]
        return FormatEdit(new_text, start + delta, end + delta)

    tag = f"[!color:{color}] "
    new_text = text[:start] + tag + text[start:]
    return FormatEdit(new_text, start + len(tag), end + len(tag))


def _apply_justify(text: str, start: int, end: int, name: str) -> FormatEdit:
    state = detect_active_formats(text, start, end)
    line_start, line_end = line_bounds(text, start)
    line = text[line_start:line_end]
    bare = JUSTIFY_PATTERN.sub("", line, count=1)

    already_active = (name == "justify-center" and state.justify_center) or (
        name == "justify-right" and state.justify_right
    )
    new_line = bare if already_active else JUSTIFY_PREFIXES[name] + bare

    delta = len(new_line) - len(line)
    new_text = text[:line_start] + new_line + text[line_end:]
    return FormatEdit(
        new_text,
        max(line_start, start + delta),
        max(line_start, end + delta),
    )


def _insert_table(text: str, start: int, end: int) -> FormatEdit:
    lead = "\n" if start > 0 and text[start - 1] != "\n" else ""
    new_text = text[:start] + lead + TABLE_TEMPLATE + text[end:]
    cell_start = start + len(lead) + 2
    return FormatEdit(new_text, cell_start, cell_start + len("Column 1"))


def apply_format(text, selection_start: int, selection_end: int, fmt: str, url=None, color=None) -> FormatEdit:
    """
    Apply a toolbar format to note markup.

    Args:
        text: Current markup
        selection_start: Selection start offset (cursor when collapsed)
        selection_end: Selection end offset
        fmt: Format name: bold, italic, underline, strikethrough, code, link,
            bullet, numbered, checkbox, color, justify-left, justify-center,
            justify-right or table
        url: Link target for ``link``
        color: Color name for ``color``

    Returns:
        FormatEdit with the new text and selection

    Raises:
        ValueError: Unknown format, or missing/invalid ``url``/``color``
    """
    text = text or ""
    start = max(0, min(selection_start, len(text)))
    end = max(0, min(selection_end, len(text)))
    if end < start:
        start, end = end, start

    if fmt in INLINE_MARKERS:
        return _toggle_inline(text, start, end, fmt)
    if fmt == "code":
        return _toggle_code(text, start, end)
    if fmt == "link":
        return _insert_link(text, start, end, url)
    if fmt in ("bullet", "numbered", "checkbox"):
        return _prefix_lines(text, start, end, fmt)
    if fmt == "color":
        return _apply_color(text, start, end, color)
    if fmt in JUSTIFY_PREFIXES:
        return _apply_justify(text, start, end, fmt)
    if fmt == "table":
        return _insert_table(text, start, end)
    raise ValueError(f"Unknown format: {fmt!r}")
