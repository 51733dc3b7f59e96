"""
Active-format detection for the formatting toolbar.

Given note markup and a cursor or selection, works out which inline and
line-level formats apply there. Inline formats are found by walking outward
from the selection through delimiter pairs, so nested formats are reported
together:

    The **bold _ita|lic_ text** here   ->  bold, italic

Delimiter characters and the formats they stand for:

    *  **   bold
    _       italic
    __      underline
    ~  ~~   strikethrough
    ^  ^^   italic
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

BOUNDARY_CHARS = frozenset("*^_~\n")

SINGLE_FORMATS = {"*": "bold", "_": "italic", "~": "strikethrough", "^": "italic"}
DOUBLED_FORMATS = {"*": "bold", "_": "underline", "~": "strikethrough", "^": "italic"}

COLOR_TAG = re.compile(r"\[!color:(\w+)\]")
JUSTIFY_CENTER = "-:-"
JUSTIFY_RIGHT = "--:"


@dataclass
class FormatState:
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    color: Optional[str] = None
    justify_center: bool = False
    justify_right: bool = False

    def as_dict(self) -> dict:
        """Toolbar-facing mapping, keyed by format button name."""
        return {
            "bold": self.bold,
            "italic": self.italic,
            "underline": self.underline,
            "strikethrough": self.strikethrough,
            "color": self.color,
            "justify-center": self.justify_center,
            "justify-right": self.justify_right,
        }


def line_bounds(text: str, position: int) -> Tuple[int, int]:
    """Return ``(start, end)`` of the line containing ``position``."""
    start = text.rfind("\n", 0, position) + 1
    end = text.find("\n", position)
    return start, len(text) if end == -1 else end


def _match_pair(text: str, left: int, right: int):
    """
    Test the characters at ``left`` and ``right`` as a delimiter pair.

    Returns ``(format_name, width)`` or ``None``; width is 2 when the same
    delimiter is repeated on both sides.
    """
    if left < 0 or right >= len(text):
        return None
    char = text[left]
    if char not in SINGLE_FORMATS or text[right] != char:
        return None
    if left >= 1 and right + 1 < len(text) and text[left - 1] == char and text[right + 1] == char:
        return DOUBLED_FORMATS[char], 2
    return SINGLE_FORMATS[char], 1


def _detect_at_cursor(text: str, cursor: int, state: FormatState) -> None:
    check_start = check_end = cursor
    while True:
        while check_start > 0 and text[check_start - 1] not in BOUNDARY_CHARS:
            check_start -= 1
        while check_end < len(text) and text[check_end] not in BOUNDARY_CHARS:
            check_end += 1

        matched = _match_pair(text, check_start - 1, check_end)
        if matched is None:
            return
        name, width = matched
        setattr(state, name, True)
        check_start -= width
        check_end += width


def _detect_around_selection(text: str, start: int, end: int, state: FormatState) -> None:
    left, right = start - 1, end
    while True:
        matched = _match_pair(text, left, right)
        if matched is None:
            return
        name, width = matched
        setattr(state, name, True)
        left -= width
        right += width


def detect_active_formats(text, selection_start: int, selection_end: int) -> FormatState:
    """
    Work out which formats are active at a cursor or around a selection.

    Args:
        text: Current note markup
        selection_start: Selection start offset (cursor position when collapsed)
        selection_end: Selection end offset

    Returns:
        FormatState with inline flags, the active color tag and justification
    """
    state = FormatState()
    if not text:
        return state

    start = max(0, min(selection_start, len(text)))
    end = max(0, min(selection_end, len(text)))
    if end < start:
        start, end = end, start

    if start == end:
        _detect_at_cursor(text, start, state)
    else:
        _detect_around_selection(text, start, end, state)

    line_start, line_end = line_bounds(text, start)

    colors = COLOR_TAG.findall(text, line_start, start)
    if colors:
        state.color = colors[-1]

    current_line = text[line_start:line_end].strip()
    if current_line.startswith(JUSTIFY_CENTER):
        state.justify_center = True
    elif current_line.startswith(JUSTIFY_RIGHT):
        state.justify_right = True

    return state
