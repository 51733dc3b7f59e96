"""
Editor-mode parsing for note markup.

``parse_for_editor`` splits markup into block nodes for the editable surface.
``blocks_to_html`` renders those blocks as the contenteditable HTML the notes
panel edits, and ``html_to_blocks`` reads the edited HTML back into blocks so
it can be serialised to markup again.

Expected structure:
    - [x] Buy milk                  Checkbox(checked=True)
    - [ ] Call Bob                  Checkbox(checked=False)
      - nested item                 Bullet(indent=1)
    3. third                        Numbered(number="3")
    | Name | Age |                  Table(header=["Name", "Age"],
    | --- | --- |                         rows=[["Alice", "30"]])
    | Alice | 30 |
    anything else                   Paragraph
"""

import logging
import re
from typing import List

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from .blocks import Block, Bullet, Checkbox, Numbered, Paragraph, Table
from .escaper import escape
from .inline import format_inline
from .url_guard import sanitize_url

logger = logging.getLogger(__name__)

CHECKED_PATTERN = re.compile(r"^- \[x\]\s*", re.IGNORECASE)
UNCHECKED_PATTERN = re.compile(r"^- \[ \]\s*")
BULLET_PATTERN = re.compile(r"^(\s*)- (.*)$")
NUMBERED_PATTERN = re.compile(r"^(\s*)(\d+)\. (.*)$")

BULLET_PREFIX = re.compile(r"^•\s*")
NUMBER_PREFIX = re.compile(r"^\d+\.\s*")

# Two leading spaces per indent level
INDENT_WIDTH = 2

# Inline tags that may sit directly under the editor root after a paste
LOOSE_INLINE_TAGS = frozenset(
    {"a", "b", "br", "code", "del", "em", "i", "s", "span", "strike", "strong", "u"}
)


def is_table_row(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith("|") and stripped.endswith("|")


def parse_table_row(line: str) -> List[str]:
    """Split a ``| a | b |`` row into trimmed cells."""
    cells = [cell.strip() for cell in line.split("|")]
    # Leading and trailing pipes leave empty artifacts at both ends
    return cells[1:-1]


def _indent_level(leading: str) -> int:
    return len(leading) // INDENT_WIDTH


def parse_for_editor(markup_text, url_guard=sanitize_url) -> List[Block]:
    """
    Parse note markup into an ordered list of block nodes.

    Args:
        markup_text: Stored note markup
        url_guard: Link target guard passed to the inline formatter

    Returns:
        Blocks in document order; ``[]`` for empty input
    """
    if not markup_text:
        return []

    lines = markup_text.split("\n")
    blocks: List[Block] = []
    i = 0

    while i < len(lines):
        line = lines[i]

        if is_table_row(line):
            table_lines = []
            while i < len(lines) and is_table_row(lines[i]):
                table_lines.append(lines[i])
                i += 1
            if len(table_lines) >= 2:
                blocks.append(
                    Table(
                        header=parse_table_row(table_lines[0]),
                        rows=[parse_table_row(row) for row in table_lines[2:]],
                    )
                )
            else:
                logger.debug(f"Dropping lone table row: {line!r}")
            continue

        if CHECKED_PATTERN.match(line):
            content = CHECKED_PATTERN.sub("", line, count=1)
            blocks.append(Checkbox(format_inline(content, url_guard), checked=True))
        elif UNCHECKED_PATTERN.match(line):
            content = UNCHECKED_PATTERN.sub("", line, count=1)
            blocks.append(Checkbox(format_inline(content, url_guard), checked=False))
        elif BULLET_PATTERN.match(line):
            match = BULLET_PATTERN.match(line)
            blocks.append(
                Bullet(
                    format_inline(match.group(2), url_guard),
                    indent=_indent_level(match.group(1)),
                )
            )
        elif NUMBERED_PATTERN.match(line):
            match = NUMBERED_PATTERN.match(line)
            blocks.append(
                Numbered(
                    format_inline(match.group(3), url_guard),
                    number=match.group(2),
                    indent=_indent_level(match.group(1)),
                )
            )
        else:
            # Blank lines become empty paragraphs so spacing survives
            blocks.append(Paragraph(format_inline(line, url_guard)))

        i += 1

    return blocks


# --------------------------
# Editor HTML
# --------------------------
def _indent_attr(indent: int) -> str:
    return f' data-indent="{indent}"' if indent > 0 else ""


def _table_to_html(table: Table) -> str:
    parts = ['<div class="note-table-container"><table class="note-table"><thead><tr>']
    for cell in table.header:
        parts.append(f'<th contenteditable="true">{escape(cell)}</th>')
    parts.append("</tr></thead><tbody>")
    for row in table.rows:
        parts.append("<tr>")
        for cell in row:
            parts.append(f'<td contenteditable="true">{escape(cell)}</td>')
        parts.append("</tr>")
    parts.append("</tbody></table></div>")
    return "".join(parts)


def block_to_html(block: Block) -> str:
    if isinstance(block, Checkbox):
        state = " checked" if block.checked else ""
        return (
            f'<div class="note-checkbox{state}" contenteditable="false">'
            f'<input type="checkbox"{state}>'
            f'<span contenteditable="true">{block.content}</span></div>'
        )
    if isinstance(block, Bullet):
        return f'<div class="note-bullet"{_indent_attr(block.indent)}>• {block.content}</div>'
    if isinstance(block, Numbered):
        number = escape(block.number)
        return (
            f'<div class="note-numbered" data-number="{number}"{_indent_attr(block.indent)}>'
            f"{number}. {block.content}</div>"
        )
    if isinstance(block, Table):
        return _table_to_html(block)
    return f"<div>{block.content or '<br>'}</div>"


def blocks_to_html(blocks: List[Block]) -> str:
    """Render blocks as contenteditable editor HTML."""
    if not blocks:
        return "<div><br></div>"
    return "".join(block_to_html(block) for block in blocks)


# --------------------------
# Reading edited HTML
# --------------------------
def _has_class(tag: Tag, name: str) -> bool:
    classes = tag.get("class", [])
    if isinstance(classes, str):
        classes = classes.split()
    return name in classes


def _int_attr(tag: Tag, name: str, default: int = 0) -> int:
    try:
        return max(0, int(tag.get(name, default)))
    except (TypeError, ValueError):
        return default


def _strip_leading(tag: Tag, pattern: re.Pattern) -> None:
    """Remove a visual prefix (bullet dot, list number) from a tag's first text node."""
    for child in tag.contents:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            stripped = pattern.sub("", str(child), count=1)
            if stripped:
                child.replace_with(stripped)
            else:
                child.extract()
        break


def _is_blank(tag: Tag) -> bool:
    return not tag.get_text().strip() and tag.find(lambda t: t.name != "br") is None


def _table_from_html(table: Tag) -> Table:
    header = [th.get_text().strip() for th in table.select("thead tr th")]
    rows = []
    for tr in table.select("tbody tr"):
        cells = [td.get_text().strip() for td in tr.find_all("td")]
        if cells:
            rows.append(cells)
    return Table(header=header, rows=rows)


def html_to_blocks(html) -> List[Block]:
    """
    Read contenteditable editor HTML back into block nodes.

    Args:
        html: HTML produced by ``blocks_to_html`` and edited in the browser

    Returns:
        Blocks in document order
    """
    if not html:
        return []

    soup = BeautifulSoup(html, "html.parser")
    blocks: List[Block] = []
    # Bare text and inline tags between blocks (pasted content) form one line
    loose: List[str] = []

    def flush():
        fragment = "".join(loose).strip()
        loose.clear()
        if fragment and not _is_blank(BeautifulSoup(fragment, "html.parser")):
            blocks.append(Paragraph(fragment))

    for node in soup.children:
        if isinstance(node, Comment):
            continue
        if isinstance(node, NavigableString):
            loose.append(escape(str(node)))
            continue
        if not isinstance(node, Tag):
            continue
        if node.name in LOOSE_INLINE_TAGS and not node.get("class"):
            loose.append(str(node))
            continue

        flush()

        if _has_class(node, "note-checkbox"):
            checkbox = node.find("input", attrs={"type": "checkbox"})
            span = node.find("span")
            blocks.append(
                Checkbox(
                    span.decode_contents() if span else "",
                    checked=checkbox is not None and checkbox.has_attr("checked"),
                )
            )
        elif _has_class(node, "note-bullet"):
            _strip_leading(node, BULLET_PREFIX)
            blocks.append(Bullet(node.decode_contents(), indent=_int_attr(node, "data-indent")))
        elif _has_class(node, "note-numbered"):
            _strip_leading(node, NUMBER_PREFIX)
            number = node.get("data-number") or "1"
            if not number.isdigit():
                number = "1"
            blocks.append(
                Numbered(
                    node.decode_contents(),
                    number=number,
                    indent=_int_attr(node, "data-indent"),
                )
            )
        elif _has_class(node, "note-table-container") or node.name == "table":
            table = node if node.name == "table" else node.find("table")
            if table is not None:
                blocks.append(_table_from_html(table))
        elif node.name in ("div", "p"):
            blocks.append(Paragraph("" if _is_blank(node) else node.decode_contents()))
        else:
            logger.debug(f"Ignoring <{node.name}> at the top level of editor HTML")

    flush()
    return blocks
