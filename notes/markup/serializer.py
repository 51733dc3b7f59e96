"""
Serialisation of the editable block tree back to note markup.

Inverse of ``parse_for_editor``: block nodes become markup lines, and inline
HTML is walked with BeautifulSoup to re-emit delimiters.
"""

from typing import List

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from .blocks import Block, Bullet, Checkbox, Numbered, Paragraph, Table
from .editor import BULLET_PREFIX, INDENT_WIDTH, html_to_blocks

# Rendered tag -> markup delimiter wrapped around its content
INLINE_DELIMITERS = {
    "strong": "**",
    "b": "**",
    "em": "_",
    "i": "_",
    "u": "__",
    "s": "~~",
    "del": "~~",
    "strike": "~~",
    "code": "`",
}

MIN_SEPARATOR_WIDTH = 3


def _walk(node: Tag) -> str:
    parts = []
    for child in node.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            parts.append(str(child))
            continue
        if not isinstance(child, Tag):
            continue

        if child.name in INLINE_DELIMITERS:
            inner = _walk(child)
            if inner:
                delimiter = INLINE_DELIMITERS[child.name]
                parts.append(f"{delimiter}{inner}{delimiter}")
        elif child.name == "a":
            href = child.get("href") or "#"
            parts.append(f"[{_walk(child)}]({href})")
        elif child.name == "br":
            # The enclosing block boundary already encodes the break
            continue
        else:
            parts.append(_walk(child))
    return "".join(parts)


def extract_inline_markup(content) -> str:
    """
    Rebuild inline markup from rendered inline HTML.

    Args:
        content: Inline HTML string, or an already parsed tag

    Returns:
        Markup text with delimiters re-emitted and entities decoded
    """
    if isinstance(content, Tag):
        node = content
    else:
        if not content:
            return ""
        node = BeautifulSoup(content, "html.parser")
    return BULLET_PREFIX.sub("", _walk(node), count=1)


def _indent(level: int) -> str:
    return " " * (INDENT_WIDTH * max(0, level))


def _table_cell(text: str) -> str:
    return text.strip() or " "


def table_to_markup(table: Table) -> str:
    """Render a table block as pipe-table markup with a regenerated separator."""
    rows = []
    if table.header:
        headers = [_table_cell(cell) for cell in table.header]
        separators = ["-" * max(MIN_SEPARATOR_WIDTH, len(cell)) for cell in headers]
        rows.append("| " + " | ".join(headers) + " |")
        rows.append("| " + " | ".join(separators) + " |")
    for row in table.rows:
        if row:
            rows.append("| " + " | ".join(_table_cell(cell) for cell in row) + " |")
    return "\n".join(rows)


def serialize_block(block: Block) -> str:
    if isinstance(block, Checkbox):
        mark = "x" if block.checked else " "
        return f"- [{mark}] {extract_inline_markup(block.content)}"
    if isinstance(block, Bullet):
        return f"{_indent(block.indent)}- {extract_inline_markup(block.content)}"
    if isinstance(block, Numbered):
        return f"{_indent(block.indent)}{block.number}. {extract_inline_markup(block.content)}"
    if isinstance(block, Table):
        return table_to_markup(block)
    if isinstance(block, Paragraph):
        # Whitespace-only lines are read back from the editor as blank
        if not block.content.strip():
            return ""
        return extract_inline_markup(block.content)
    raise TypeError(f"Not a block node: {block!r}")


def serialize(blocks: List[Block]) -> str:
    """
    Serialise an editable block tree to note markup.

    Args:
        blocks: Block nodes in document order

    Returns:
        Markup text, one line per block (tables span several), with
        trailing whitespace trimmed
    """
    if not blocks:
        return ""
    return "\n".join(serialize_block(block) for block in blocks).rstrip()


def html_to_markup(html) -> str:
    """Convert edited editor HTML straight back to note markup."""
    return serialize(html_to_blocks(html))
