"""Block renderers: stateful accumulators for one Markdown block each.

At most one capturing renderer (code block, table or blockquote) is active at
a time; the list renderer lives alongside it because list items write straight
into the render context. Every renderer is created on its block's start event
and consumed on the matching end event.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from md_term.config import DEFAULT_CONFIG, TerminalConfig
from md_term.context import RenderContext
from md_term.events import Tag, TagKind
from md_term.layout import render_box, render_grid


class BlockRenderer(ABC):
    """Common interface of all block renderers.

    ``handle_start`` / ``handle_end`` receive block-level tags nested inside the
    renderer's own block. ``handle_end`` returns True when the tag closes the
    renderer itself, after which the driver calls ``end``.
    """

    kind: TagKind

    def start(self, context: RenderContext) -> None:
        """Reset accumulated state at the start of the block."""

    @abstractmethod
    def handle_text(self, text: str, context: RenderContext) -> None: ...

    @abstractmethod
    def handle_soft_break(self, context: RenderContext) -> None: ...

    @abstractmethod
    def handle_hard_break(self, context: RenderContext) -> None: ...

    def handle_start(self, tag: Tag, context: RenderContext) -> None:
        """Handle a nested block start (ignored by default)."""

    def handle_end(self, tag: Tag, context: RenderContext) -> bool:
        """Handle a nested block end.

        Returns:
            True if ``tag`` closes this renderer
        """
        return tag.kind is self.kind

    @abstractmethod
    def end(self, context: RenderContext) -> str | None:
        """Finish the block.

        Returns:
            Rendered block text to append to the context, or None
        """


class CodeBlockRenderer(BlockRenderer):
    """Renders code blocks inside a box-drawing border."""

    kind = TagKind.CODE_BLOCK

    def __init__(self) -> None:
        self.buffer: str = ''

    def start(self, context: RenderContext) -> None:
        self.buffer = ''

    def handle_text(self, text: str, context: RenderContext) -> None:
        self.buffer += text

    # Breaks inside code are line breaks, never spaces
    def handle_soft_break(self, context: RenderContext) -> None:
        self.buffer += '\n'

    def handle_hard_break(self, context: RenderContext) -> None:
        self.buffer += '\n'

    def end(self, context: RenderContext) -> str:
        return render_box(self.buffer.splitlines())


class TableRenderer(BlockRenderer):
    """Collects table rows and cells, then renders them as a bordered grid.

    Attributes:
        rows: Completed rows (header row first)
        current_row: Cells of the row being collected
        current_cell: Text of the cell being collected
    """

    kind = TagKind.TABLE

    def __init__(self) -> None:
        self.rows: list[list[str]] = []
        self.current_row: list[str] = []
        self.current_cell: str = ''

    def start(self, context: RenderContext) -> None:
        self.rows = []
        self.current_row = []
        self.current_cell = ''

    def handle_text(self, text: str, context: RenderContext) -> None:
        self.current_cell += text

    def handle_soft_break(self, context: RenderContext) -> None:
        self.current_cell += ' '

    def handle_hard_break(self, context: RenderContext) -> None:
        self.current_cell += '\n'

    def handle_start(self, tag: Tag, context: RenderContext) -> None:
        if tag.kind in (TagKind.TABLE_HEAD, TagKind.TABLE_ROW):
            self.start_row()
        elif tag.kind is TagKind.TABLE_CELL:
            self.start_cell()

    def handle_end(self, tag: Tag, context: RenderContext) -> bool:
        if tag.kind in (TagKind.TABLE_HEAD, TagKind.TABLE_ROW):
            self.end_row()
        elif tag.kind is TagKind.TABLE_CELL:
            self.end_cell()
        return tag.kind is TagKind.TABLE

    def start_row(self) -> None:
        self.finish_row()

    def end_row(self) -> None:
        self.finish_row()

    def start_cell(self) -> None:
        self.current_cell = ''

    def end_cell(self) -> None:
        self.current_row.append(self.current_cell)
        self.current_cell = ''

    def finish_row(self) -> None:
        """Move the current row into ``rows`` (empty rows are dropped)."""
        if self.current_row:
            self.rows.append(self.current_row)
            self.current_row = []

    def end(self, context: RenderContext) -> str:
        self.finish_row()
        return render_grid(self.rows)


class BlockquoteRenderer(BlockRenderer):
    """Renders blockquotes with a vertical bar before every line.

    Anything nested in the quote (paragraphs, lists, code, further quotes) is
    flattened into plain lines; nested block ends only terminate the current
    line.
    """

    kind = TagKind.BLOCK_QUOTE

    def __init__(self, config: TerminalConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self.lines: list[str] = []
        self.current_line: str = ''
        self._nesting: int = 0

    def start(self, context: RenderContext) -> None:
        self.lines = []
        self.current_line = ''
        self._nesting = 0

    def _flush_line(self) -> None:
        self.lines.append(self.current_line)
        self.current_line = ''

    def _flush_pending_line(self) -> None:
        if self.current_line:
            self._flush_line()

    def handle_text(self, text: str, context: RenderContext) -> None:
        first, *rest = text.split('\n')
        self.current_line += first
        for part in rest:
            self._flush_line()
            self.current_line = part

    def handle_soft_break(self, context: RenderContext) -> None:
        self._flush_line()

    def handle_hard_break(self, context: RenderContext) -> None:
        self._flush_line()

    def handle_start(self, tag: Tag, context: RenderContext) -> None:
        if tag.kind is TagKind.BLOCK_QUOTE:
            self._flush_pending_line()
            self._nesting += 1

    def handle_end(self, tag: Tag, context: RenderContext) -> bool:
        if tag.kind is TagKind.BLOCK_QUOTE:
            if not self._nesting:
                return True
            self._nesting -= 1
        self._flush_pending_line()
        return False

    def end(self, context: RenderContext) -> str:
        self._flush_pending_line()
        if not self.lines:
            return ''
        marker = self.config.quote_marker
        return '\n'.join(f'{marker}{line}' for line in self.lines)


@dataclass
class _ListLevel:
    ordered: bool
    counter: int = 0


class ListRenderer(BlockRenderer):
    """Writes list item markers and indentation straight into the context.

    One renderer serves an outermost list and all lists nested in it; every
    list-open event pushes a level with its own item counter.
    """

    kind = TagKind.LIST

    def __init__(self, config: TerminalConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self._levels: list[_ListLevel] = []
        self._open_items: int = 0
        # Whether the innermost open item has written any text yet
        self._item_has_content: bool = False

    @property
    def depth(self) -> int:
        return len(self._levels)

    @property
    def in_item(self) -> bool:
        return self._open_items > 0

    @property
    def continuation_indent(self) -> str:
        """Indentation aligning continuation lines with item text."""
        return ' ' * (self.config.indent_per_level * self.depth)

    def open_list(self, ordered: bool) -> None:
        self._levels.append(_ListLevel(ordered))

    def close_list(self) -> int:
        """Close the innermost list.

        Returns:
            Remaining nesting depth (0 when the outermost list closed)
        """
        if self._levels:
            self._levels.pop()
        return self.depth

    def start_item(self, context: RenderContext) -> None:
        """Write the indentation and bullet or number for a new item."""
        if not self._levels:
            return
        level = self._levels[-1]
        context.ensure_newline()

        indent = ' ' * (self.config.indent_per_level * (self.depth - 1))
        if level.ordered:
            level.counter += 1
            marker = f'{level.counter}. '
        else:
            marker = f'{self.config.bullet} '
        context.append(indent + marker)

        self._open_items += 1
        self._item_has_content = False

    def end_item(self, context: RenderContext) -> None:
        if self._open_items:
            self._open_items -= 1
        context.ensure_newline()

    def start_paragraph(self, context: RenderContext) -> None:
        """Start a further paragraph of the current item on its own line."""
        if self.in_item and self._item_has_content:
            context.ensure_newline()
            context.append(self.continuation_indent)

    def handle_text(self, text: str, context: RenderContext) -> None:
        context.append(text)
        if text:
            self._item_has_content = True

    def handle_soft_break(self, context: RenderContext) -> None:
        context.append(' ')

    def handle_hard_break(self, context: RenderContext) -> None:
        context.newline()
        context.append(self.continuation_indent)

    def indent_block(self, text: str) -> str:
        """Indent every line of rendered block output to the item text column."""
        indent = self.continuation_indent
        if not indent:
            return text
        return '\n'.join(indent + line for line in text.split('\n'))

    def end(self, context: RenderContext) -> None:
        # Items already wrote everything; the driver adds the trailing blank line
        return None
