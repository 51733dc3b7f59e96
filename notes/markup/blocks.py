"""
Block nodes of the editable note tree.

One node per markup line, except tables which cover a run of lines. Inline
content is kept as rendered inline HTML; table cells are plain text.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import ClassVar, Dict, List, Union


@dataclass
class Paragraph:
    content: str = ""

    kind: ClassVar[str] = "paragraph"

    @property
    def is_empty(self) -> bool:
        return not self.content


@dataclass
class Bullet:
    content: str = ""
    indent: int = 0

    kind: ClassVar[str] = "bullet"


@dataclass
class Numbered:
    content: str = ""
    # Literal token from the markup ("1", "07", "3"), never renumbered
    number: str = "1"
    indent: int = 0

    kind: ClassVar[str] = "numbered"


@dataclass
class Checkbox:
    content: str = ""
    checked: bool = False

    kind: ClassVar[str] = "checkbox"


@dataclass
class Table:
    header: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    kind: ClassVar[str] = "table"


Block = Union[Paragraph, Bullet, Numbered, Checkbox, Table]

BLOCK_TYPES: Dict[str, type] = {
    cls.kind: cls for cls in (Paragraph, Bullet, Numbered, Checkbox, Table)
}


def block_to_dict(block: Block) -> dict:
    """Serialise a block to a JSON-friendly dict with a ``kind`` tag."""
    data = {"kind": block.kind}
    data.update(asdict(block))
    return data


def block_from_dict(data: dict) -> Block:
    """
    Build a block from a dict produced by ``block_to_dict``.

    Raises:
        ValueError: If the kind is unknown or a field has the wrong shape
    """
    kind = data.get("kind")
    cls = BLOCK_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown block kind: {kind!r}")

    if cls is Table:
        header = data.get("header") or []
        rows = data.get("rows") or []
        if not isinstance(header, list) or not all(isinstance(r, list) for r in rows):
            raise ValueError("Table header and rows must be lists")
        return Table(
            header=[str(cell) for cell in header],
            rows=[[str(cell) for cell in row] for row in rows],
        )

    content = str(data.get("content") or "")
    if cls is Paragraph:
        return Paragraph(content=content)
    if cls is Checkbox:
        return Checkbox(content=content, checked=bool(data.get("checked")))

    try:
        indent = max(0, int(data.get("indent") or 0))
    except (TypeError, ValueError):
        raise ValueError("indent must be an integer")

    if cls is Bullet:
        return Bullet(content=content, indent=indent)

    number = str(data.get("number") or "1")
    if not number.isdigit():
        raise ValueError("number must contain only digits")
    return Numbered(content=content, number=number, indent=indent)
