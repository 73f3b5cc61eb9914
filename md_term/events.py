"""Semantic Markdown events consumed by the terminal renderer.

The parser adapter (``md_term.parser``) flattens mistune's AST into a
forward-only sequence of these events; the renderer never sees the AST.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TagKind(Enum):
    """Kinds of container opened by a ``Start`` event and closed by ``End``."""

    PARAGRAPH = 'paragraph'
    HEADING = 'heading'
    LIST = 'list'
    ITEM = 'item'
    CODE_BLOCK = 'code_block'
    BLOCK_QUOTE = 'block_quote'
    TABLE = 'table'
    TABLE_HEAD = 'table_head'
    TABLE_ROW = 'table_row'
    TABLE_CELL = 'table_cell'
    EMPHASIS = 'emphasis'
    STRONG = 'strong'
    LINK = 'link'


INLINE_KINDS = frozenset({TagKind.EMPHASIS, TagKind.STRONG, TagKind.LINK})


@dataclass(frozen=True)
class Tag:
    """Container descriptor.

    Attributes:
        kind: Container kind
        level: Heading level (1-6), 0 for other kinds
        ordered: True for ordered lists
        url: Link target, empty for other kinds
    """

    kind: TagKind
    level: int = 0
    ordered: bool = False
    url: str = ''

    @property
    def is_inline(self) -> bool:
        return self.kind in INLINE_KINDS


@dataclass(frozen=True)
class Start:
    tag: Tag


@dataclass(frozen=True)
class End:
    tag: Tag


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class InlineCode:
    code: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class RawHtml:
    html: str


@dataclass(frozen=True)
class TaskMarker:
    checked: bool


@dataclass(frozen=True)
class Rule:
    """Thematic break (``---``)."""


Event = Start | End | Text | InlineCode | SoftBreak | HardBreak | RawHtml | TaskMarker | Rule
